#!/usr/bin/env python3
"""
livesettings - Preview application entry point.

Opens the per-user settings store, applies startup settings and shows
the preview window.
"""

import sys
import logging
from PySide6.QtWidgets import QApplication

from livesettings import SettingsBinder, __version__, open_store
from livesettings.ui import PreviewWindow
from livesettings.utils import setup_logging


def main():
    """Main entry point for the livesettings preview."""
    setup_logging(log_level="INFO", log_file=True)
    logger = logging.getLogger(__name__)

    logger.info("=" * 60)
    logger.info(f"livesettings v{__version__} starting...")
    logger.info("=" * 60)

    app = QApplication(sys.argv)
    app.setApplicationName("livesettings")

    store = open_store()
    binder = SettingsBinder(store)

    window = PreviewWindow(store, binder)
    binder.reconcile_startup()
    if not window.isVisible():
        window.show()

    exit_code = app.exec()

    binder.dispose()
    logger.info("livesettings exiting")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
