"""
Validation utilities for livesettings.

Section and key names end up as INI section headers and option names,
so they are restricted to a conservative character set.
"""

import math
import re
from typing import Any


class ValidationError(ValueError):
    """Raised when a setting identifier or value is not acceptable."""
    pass


# Must start with letter/underscore, can contain letters, digits,
# underscores, dots and hyphens
IDENTIFIER_PATTERN = re.compile(r'^[A-Za-z_][A-Za-z0-9_.-]*$')

MAX_IDENTIFIER_LENGTH = 255
MAX_STRING_VALUE_LENGTH = 4096

SUPPORTED_TYPES = (bool, int, float, str)


def validate_identifier(name: str, kind: str = "key") -> str:
    """
    Validate a section or key name.

    Args:
        name: Identifier to validate
        kind: "section" or "key", used in error messages

    Returns:
        The identifier, unchanged

    Raises:
        ValidationError: If the identifier is invalid
    """
    if not isinstance(name, str) or not name:
        raise ValidationError(f"Setting {kind} must be a non-empty string")

    if len(name) > MAX_IDENTIFIER_LENGTH:
        raise ValidationError(
            f"Setting {kind} too long (max {MAX_IDENTIFIER_LENGTH})"
        )

    if not IDENTIFIER_PATTERN.match(name):
        raise ValidationError(f"Invalid setting {kind}: {name!r}")

    return name


def validate_value(value: Any) -> Any:
    """
    Check that a value can be stored and persisted.

    Supported: bool, int, float, and single-line strings.

    Raises:
        ValidationError: If the value type is not supported
    """
    if not isinstance(value, SUPPORTED_TYPES):
        raise ValidationError(
            f"Unsupported setting value type: {type(value).__name__}"
        )

    if isinstance(value, str):
        if len(value) > MAX_STRING_VALUE_LENGTH:
            raise ValidationError(
                f"String value too long (max {MAX_STRING_VALUE_LENGTH})"
            )
        if "\n" in value or "\r" in value:
            raise ValidationError("String values cannot contain newlines")

    return value


def values_equal(current: Any, new: Any) -> bool:
    """
    Value equality used for change detection.

    NaN compares equal to NaN here, otherwise setting a NaN float would
    count as a change every time.
    """
    if isinstance(current, float) and isinstance(new, float):
        if math.isnan(current) and math.isnan(new):
            return True
    return type(current) is type(new) and current == new
