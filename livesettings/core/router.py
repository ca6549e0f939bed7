"""
Change notification routing.

Keeps per-(section, key) subscriber lists plus a catch-all list, and
calls them when the store reports a change.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

SettingCallback = Callable[[str, str], Any]
Disposer = Callable[[], bool]


class NotificationRouter:
    """
    Fan-out of setting changes to subscribers.

    Callbacks are called as ``callback(section, key)`` and read the new
    value back from the store. Detail subscribers for the changed key run
    first, then catch-all subscribers, each group in registration order.

    A callback that raises is logged and skipped; the remaining callbacks
    still run.
    """

    def __init__(self):
        self._detail: Dict[Tuple[str, str], List[SettingCallback]] = {}
        self._any: List[SettingCallback] = []

    def subscribe(self, section: str, key: str, callback: SettingCallback) -> Disposer:
        """
        Call ``callback`` whenever (section, key) changes.

        Returns:
            A disposer; calling it removes the subscription
        """
        if not callable(callback):
            raise TypeError("callback must be callable")

        self._detail.setdefault((section, key), []).append(callback)
        logger.debug(f"Subscribed {_name_of(callback)} to {section}/{key}")

        return lambda: self.unsubscribe(section, key, callback)

    def subscribe_any(self, callback: SettingCallback) -> Disposer:
        """
        Call ``callback`` on every change, whatever the key.

        Returns:
            A disposer; calling it removes the subscription
        """
        if not callable(callback):
            raise TypeError("callback must be callable")

        self._any.append(callback)
        logger.debug(f"Subscribed {_name_of(callback)} to all settings")

        return lambda: self.unsubscribe_any(callback)

    def unsubscribe(self, section: str, key: str, callback: SettingCallback) -> bool:
        """
        Remove one registration of ``callback`` for (section, key).

        Returns:
            True if it was registered
        """
        callbacks = self._detail.get((section, key))
        if not callbacks or callback not in callbacks:
            return False

        callbacks.remove(callback)
        if not callbacks:
            del self._detail[(section, key)]
        return True

    def unsubscribe_any(self, callback: SettingCallback) -> bool:
        """Remove one catch-all registration of ``callback``."""
        if callback not in self._any:
            return False
        self._any.remove(callback)
        return True

    def dispatch(self, section: str, key: str, value: Any) -> int:
        """
        Notify subscribers that (section, key) changed to ``value``.

        Works on a copy of the subscriber lists, so subscriptions added
        or removed by a callback take effect from the next dispatch.

        Returns:
            Number of callbacks that raised
        """
        callbacks = list(self._detail.get((section, key), ())) + list(self._any)
        logger.debug(f"Dispatching {section}/{key}={value!r} to {len(callbacks)} subscriber(s)")

        failures = 0
        for callback in callbacks:
            try:
                callback(section, key)
            except Exception:
                failures += 1
                logger.exception(
                    f"Settings subscriber {_name_of(callback)} failed for {section}/{key}"
                )
        return failures

    def subscriber_count(self, section: Optional[str] = None, key: Optional[str] = None) -> int:
        """
        Count subscriptions.

        With section and key: detail subscribers of that key. Without:
        every subscription, catch-all included.
        """
        if section is not None and key is not None:
            return len(self._detail.get((section, key), ()))
        return sum(len(cbs) for cbs in self._detail.values()) + len(self._any)

    def clear(self):
        """Drop every subscription."""
        self._detail.clear()
        self._any.clear()


def _name_of(callback: Callable) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)
