"""Shared fixtures for the livesettings test suite."""

import os

import pytest

# Qt tests run headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


DEFAULTS = [
    ("graphics", "fullscreen", False),
    ("graphics", "shadows", True),
    ("sound", "music_volume", 0.0),
    ("sound", "sfx_volume", 0.8),
]


@pytest.fixture
def defaults():
    return list(DEFAULTS)


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "config" / "settings.ini"


@pytest.fixture
def store(settings_path, defaults):
    from livesettings.core import SettingsStore
    return SettingsStore(settings_path, defaults).initialize()
