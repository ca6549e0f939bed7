"""
Core settings functionality for livesettings.

This module provides:
- Reading and writing the settings file
- The settings store with default seeding and change detection
- Routing change notifications to subscribers
- Binding application objects to settings
"""

from .serializer import (
    Serializer,
    IniSerializer,
    JsonSerializer,
    serializer_for,
    serializer_named,
)
from .router import NotificationRouter
from .store import (
    SettingsStore,
    NotFoundError,
    SettingTypeError,
    DispatchCycleError,
    MAX_DISPATCH_DEPTH,
)
from .binding import SettingsBinder, CategoryRegistry, InMemoryCategoryRegistry
from .audio import volume_to_db, db_to_volume

__all__ = [
    "Serializer",
    "IniSerializer",
    "JsonSerializer",
    "serializer_for",
    "serializer_named",
    "NotificationRouter",
    "SettingsStore",
    "NotFoundError",
    "SettingTypeError",
    "DispatchCycleError",
    "MAX_DISPATCH_DEPTH",
    "SettingsBinder",
    "CategoryRegistry",
    "InMemoryCategoryRegistry",
    "volume_to_db",
    "db_to_volume",
]
