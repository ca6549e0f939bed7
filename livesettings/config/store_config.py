"""
Store configuration for livesettings.

Decides where the settings file lives and how it is written.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

SETTINGS_FILE_NAME = "settings.ini"


def get_config_dir(app_name: str = "livesettings", create: bool = True) -> Path:
    """
    Get platform-specific configuration directory.

    Path:
        Linux/macOS: ~/.config/<app_name>
        Windows: %APPDATA%\\<app_name>

    Args:
        app_name: Application directory name
        create: Create the directory if it doesn't exist

    Returns:
        Path to configuration directory
    """
    if os.name == 'nt':  # Windows
        base = os.environ.get('APPDATA', os.path.expanduser('~'))
    else:  # Linux/macOS
        base = os.environ.get('XDG_CONFIG_HOME', os.path.expanduser('~/.config'))

    config_dir = Path(base) / app_name

    if create:
        config_dir.mkdir(parents=True, exist_ok=True)

    return config_dir


@dataclass
class StoreConfig:
    """How a SettingsStore persists itself."""
    path: Path
    autosave: bool = True
    format: Optional[str] = None  # "ini" | "json"; None picks by file suffix

    @classmethod
    def default(cls, app_name: str = "livesettings", autosave: bool = True) -> "StoreConfig":
        """Config pointing at the per-user settings file."""
        return cls(
            path=get_config_dir(app_name) / SETTINGS_FILE_NAME,
            autosave=autosave,
        )
