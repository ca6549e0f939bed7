"""
Preview window for livesettings.

A small main window that shows settings changes as they happen and
toggles fullscreen through the store, so the display binding reacts
the same way it would in a real application.
"""

import logging
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QListWidget, QWidget
from PySide6.QtGui import QAction, QKeySequence

from ..core.binding import SettingsBinder
from ..core.store import SettingsStore
from .display import WindowDisplayBinding
from .signals import SettingsSignals

logger = logging.getLogger(__name__)


class PreviewWindow(QMainWindow):
    """Main window listing live setting changes."""

    def __init__(self, store: SettingsStore, binder: SettingsBinder,
                 parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.store = store

        self.signals = SettingsSignals(self)
        self.signals.attach(store)
        self.signals.setting_changed.connect(self._on_setting_changed)

        self.display_binding = WindowDisplayBinding(self, binder)

        self._init_ui()

    def _init_ui(self):
        """Initialize user interface."""
        from .. import __version__

        self.setWindowTitle(f"livesettings {__version__}")
        self.resize(640, 400)

        self.change_log = QListWidget()
        self.setCentralWidget(self.change_log)

        view_menu = self.menuBar().addMenu("&View")

        self.fullscreen_action = QAction("&Fullscreen", self)
        self.fullscreen_action.setCheckable(True)
        self.fullscreen_action.setChecked(self.store.get_value("graphics", "fullscreen"))
        self.fullscreen_action.setShortcut(QKeySequence("F11"))
        self.fullscreen_action.triggered.connect(self._on_toggle_fullscreen)
        view_menu.addAction(self.fullscreen_action)

    def _on_toggle_fullscreen(self, checked: bool):
        try:
            self.store.set_value("graphics", "fullscreen", bool(checked))
        except OSError as e:
            logger.error(f"Could not save display mode: {e}")
            self.fullscreen_action.setChecked(not checked)

    def _on_setting_changed(self, section: str, key: str, value):
        self.change_log.addItem(f"{section}/{key} = {value!r}")
        if (section, key) == ("graphics", "fullscreen"):
            self.fullscreen_action.setChecked(bool(value))

    def closeEvent(self, event):
        """Flush pending changes and drop subscriptions on close."""
        self.signals.detach()
        self.display_binding.dispose()
        try:
            self.store.flush()
        except OSError as e:
            logger.error(f"Failed to save settings on exit: {e}")
        super().closeEvent(event)
