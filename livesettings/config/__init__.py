"""
Configuration for livesettings.

This module holds the default table and where the settings file is kept.
"""

from .defaults import DEFAULT_TABLE, SettingDefault, build_default_table
from .store_config import StoreConfig, get_config_dir

__all__ = [
    "DEFAULT_TABLE",
    "SettingDefault",
    "build_default_table",
    "StoreConfig",
    "get_config_dir",
]
