"""Tests for NotificationRouter."""

import pytest
from unittest.mock import MagicMock, call

from livesettings.core import NotificationRouter


class TestSubscribe:

    def test_detail_subscriber_only_sees_its_key(self):
        router = NotificationRouter()
        shadows = MagicMock()
        router.subscribe("graphics", "shadows", shadows)

        router.dispatch("sound", "music_volume", 0.5)
        router.dispatch("graphics", "reflections", False)
        shadows.assert_not_called()

        router.dispatch("graphics", "shadows", False)
        shadows.assert_called_once_with("graphics", "shadows")

    def test_any_subscriber_sees_everything(self):
        router = NotificationRouter()
        everything = MagicMock()
        router.subscribe_any(everything)

        router.dispatch("sound", "music_volume", 0.5)
        router.dispatch("graphics", "shadows", False)

        assert everything.call_args_list == [
            call("sound", "music_volume"),
            call("graphics", "shadows"),
        ]

    def test_detail_before_any_in_registration_order(self):
        router = NotificationRouter()
        order = []
        router.subscribe_any(lambda s, k: order.append("any-1"))
        router.subscribe("sound", "sfx_volume", lambda s, k: order.append("detail-1"))
        router.subscribe_any(lambda s, k: order.append("any-2"))
        router.subscribe("sound", "sfx_volume", lambda s, k: order.append("detail-2"))

        router.dispatch("sound", "sfx_volume", 0.1)

        assert order == ["detail-1", "detail-2", "any-1", "any-2"]

    def test_each_dispatch_notifies_once(self):
        router = NotificationRouter()
        callback = MagicMock()
        router.subscribe("sound", "sfx_volume", callback)

        router.dispatch("sound", "sfx_volume", 0.1)
        router.dispatch("sound", "sfx_volume", 0.2)

        assert callback.call_count == 2

    def test_rejects_non_callable(self):
        router = NotificationRouter()
        with pytest.raises(TypeError):
            router.subscribe("a", "b", "not callable")
        with pytest.raises(TypeError):
            router.subscribe_any(None)


class TestUnsubscribe:

    def test_disposer_removes_detail(self):
        router = NotificationRouter()
        callback = MagicMock()
        dispose = router.subscribe("graphics", "bloom", callback)

        assert dispose() is True
        assert dispose() is False

        router.dispatch("graphics", "bloom", False)
        callback.assert_not_called()
        assert router.subscriber_count() == 0

    def test_disposer_removes_any(self):
        router = NotificationRouter()
        callback = MagicMock()
        dispose = router.subscribe_any(callback)

        assert dispose() is True
        router.dispatch("graphics", "bloom", False)
        callback.assert_not_called()

    def test_unsubscribe_bound_method(self):
        class Listener:
            def __init__(self):
                self.calls = 0

            def on_change(self, section, key):
                self.calls += 1

        router = NotificationRouter()
        listener = Listener()
        router.subscribe("graphics", "bloom", listener.on_change)

        assert router.unsubscribe("graphics", "bloom", listener.on_change) is True
        router.dispatch("graphics", "bloom", True)
        assert listener.calls == 0

    def test_unsubscribe_unknown(self):
        router = NotificationRouter()
        assert router.unsubscribe("a", "b", print) is False
        assert router.unsubscribe_any(print) is False

    def test_changes_during_dispatch_apply_next_time(self):
        router = NotificationRouter()
        late = MagicMock()
        disposers = {}

        def first(section, key):
            router.subscribe(section, key, late)
            disposers["second"]()

        second = MagicMock()
        router.subscribe("sound", "sfx_volume", first)
        disposers["second"] = router.subscribe("sound", "sfx_volume", second)

        router.dispatch("sound", "sfx_volume", 0.1)

        # Snapshot taken before the callbacks ran
        second.assert_called_once()
        late.assert_not_called()

        router.dispatch("sound", "sfx_volume", 0.2)
        assert second.call_count == 1
        late.assert_called_once()

    def test_clear(self):
        router = NotificationRouter()
        router.subscribe("a", "b", MagicMock())
        router.subscribe_any(MagicMock())

        router.clear()

        assert router.subscriber_count() == 0


class TestFailureIsolation:

    def test_failing_callback_does_not_stop_others(self, caplog):
        router = NotificationRouter()
        after_detail = MagicMock()
        after_any = MagicMock()
        router.subscribe("graphics", "shadows", MagicMock(side_effect=ValueError("bad node")))
        router.subscribe("graphics", "shadows", after_detail)
        router.subscribe_any(MagicMock(side_effect=RuntimeError("bad logger")))
        router.subscribe_any(after_any)

        failures = router.dispatch("graphics", "shadows", False)

        assert failures == 2
        after_detail.assert_called_once()
        after_any.assert_called_once()
        assert "graphics/shadows" in caplog.text


def test_subscriber_count():
    router = NotificationRouter()
    router.subscribe("a", "b", MagicMock())
    router.subscribe("a", "b", MagicMock())
    router.subscribe("a", "c", MagicMock())
    router.subscribe_any(MagicMock())

    assert router.subscriber_count("a", "b") == 2
    assert router.subscriber_count("a", "x") == 0
    assert router.subscriber_count() == 4
