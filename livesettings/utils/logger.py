"""
Logging configuration for livesettings.
"""

import logging
import os
import sys
from pathlib import Path
from datetime import datetime

# Loggers that emit a record for every settings change
CHANGE_LOGGERS = (
    "livesettings.core.store",
    "livesettings.core.router",
    "livesettings.core.serializer",
)


def setup_logging(log_level: str = "INFO", log_file: bool = True,
                  app_name: str = "livesettings",
                  trace_changes: bool = False) -> logging.Logger:
    """
    Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: If True, also log to file
        app_name: Used for the log directory and file name
        trace_changes: Keep the per-change DEBUG records of the store,
            router and serializer; otherwise those loggers are held at INFO

    Returns:
        Root logger instance
    """
    logger = logging.getLogger()
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Clear any existing handlers
    logger.handlers.clear()

    for name in CHANGE_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if trace_changes else logging.INFO)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    logger.addHandler(console_handler)

    if log_file:
        log_dir = get_log_dir(app_name)
        log_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file_path = log_dir / f"{app_name}_{timestamp}.log"

        file_handler = logging.FileHandler(log_file_path)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        ))
        logger.addHandler(file_handler)

        logger.info(f"Logging to file: {log_file_path}")

    return logger


def get_log_dir(app_name: str = "livesettings") -> Path:
    """
    Get platform-specific log directory.

    Returns:
        Path to log directory
    """
    if os.name == 'nt':  # Windows
        base = os.environ.get('LOCALAPPDATA', os.path.expanduser('~'))
    else:  # Linux/macOS
        base = os.environ.get('XDG_CACHE_HOME', os.path.expanduser('~/.cache'))

    return Path(base) / app_name / 'logs'
