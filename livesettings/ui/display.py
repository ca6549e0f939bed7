"""
Window display mode binding.
"""

import logging

from PySide6.QtWidgets import QWidget

from ..core.binding import SettingsBinder

logger = logging.getLogger(__name__)


class WindowDisplayBinding:
    """
    Keeps a window's fullscreen state in line with a bool setting.

    Registers both a startup handler, so the stored mode is applied before
    the window is first shown, and a change binding for live toggling.
    """

    def __init__(self, window: QWidget, binder: SettingsBinder,
                 section: str = "graphics", key: str = "fullscreen"):
        self.window = window
        self.section = section
        self.key = key

        self._disposers = [
            binder.on_startup(section, key, self.apply),
            binder.bind(section, key, self.apply),
        ]

    def apply(self, fullscreen: bool):
        """Switch the window to fullscreen or back to normal."""
        if fullscreen:
            self.window.showFullScreen()
        else:
            self.window.showNormal()
        logger.info(f"Display mode: {'fullscreen' if fullscreen else 'windowed'}")

    def dispose(self):
        """Stop following the setting."""
        for disposer in self._disposers:
            disposer()
        self._disposers.clear()
