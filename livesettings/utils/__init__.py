"""
Utility functions for livesettings.
"""

from .logger import CHANGE_LOGGERS, setup_logging, get_log_dir
from .validators import (
    ValidationError,
    validate_identifier,
    validate_value,
    values_equal,
)

__all__ = [
    "CHANGE_LOGGERS",
    "setup_logging",
    "get_log_dir",
    "ValidationError",
    "validate_identifier",
    "validate_value",
    "values_equal",
]
