"""
livesettings - persistent, observable settings for interactive applications.

The Qt bridge lives in ``livesettings.ui`` and is imported separately.
"""

__version__ = "1.0.0"

from typing import Optional

from .config import DEFAULT_TABLE, StoreConfig
from .core import (
    SettingsStore,
    NotificationRouter,
    SettingsBinder,
    InMemoryCategoryRegistry,
    NotFoundError,
    SettingTypeError,
    DispatchCycleError,
)

__all__ = [
    "__version__",
    "DEFAULT_TABLE",
    "StoreConfig",
    "SettingsStore",
    "NotificationRouter",
    "SettingsBinder",
    "InMemoryCategoryRegistry",
    "NotFoundError",
    "SettingTypeError",
    "DispatchCycleError",
    "open_store",
]


def open_store(config: Optional[StoreConfig] = None, defaults=DEFAULT_TABLE) -> SettingsStore:
    """
    Create and initialize a store from a StoreConfig.

    Uses the per-user settings file when no config is given.

    Raises:
        ValueError: If config.format names an unknown format
    """
    from .core import serializer_for, serializer_named

    config = config or StoreConfig.default()
    if config.format:
        serializer = serializer_named(config.format)
    else:
        serializer = serializer_for(config.path)
    return SettingsStore(
        config.path,
        defaults,
        serializer=serializer,
        autosave=config.autosave,
    ).initialize()
