"""
Qt signal relay for settings changes.

Lets widgets connect to setting changes with ordinary Qt signal/slot
connections instead of router callbacks.
"""

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from ..core.router import Disposer
from ..core.store import SettingsStore

logger = logging.getLogger(__name__)


class SettingsSignals(QObject):
    """Re-emits every change of a SettingsStore as a Qt signal."""

    setting_changed = Signal(str, str, object)  # section, key, new value

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._store: Optional[SettingsStore] = None
        self._disposer: Optional[Disposer] = None

    def attach(self, store: SettingsStore):
        """Start relaying changes of ``store``."""
        self.detach()
        self._store = store
        self._disposer = store.router.subscribe_any(self._on_changed)
        logger.debug("Settings signal relay attached")

    def detach(self):
        """Stop relaying changes."""
        if self._disposer is not None:
            self._disposer()
        self._disposer = None
        self._store = None

    def _on_changed(self, section: str, key: str):
        self.setting_changed.emit(section, key, self._store.get_value(section, key))
