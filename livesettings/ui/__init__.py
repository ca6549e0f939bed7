"""Qt integration for livesettings."""

from .signals import SettingsSignals
from .display import WindowDisplayBinding
from .preview_window import PreviewWindow

__all__ = ["SettingsSignals", "WindowDisplayBinding", "PreviewWindow"]
