"""
Tests for identifier and value validation.
"""

import math
import pytest

from livesettings.utils import (
    ValidationError,
    validate_identifier,
    validate_value,
    values_equal,
)
from livesettings.config import build_default_table


def test_validate_identifier_valid():
    """Test valid section/key names are accepted."""
    valid_names = [
        "graphics",
        "music_volume",
        "_private",
        "post-processing",
        "audio.bus2",
        "MixedCase123",
    ]

    for name in valid_names:
        assert validate_identifier(name) == name


def test_validate_identifier_invalid():
    """Test invalid names raise ValidationError."""
    invalid_names = [
        "",  # Empty
        "1st",  # Starts with digit
        "has spaces",
        "key=value",
        "[section]",
        "semi;colon",
        "-leading-hyphen",
        None,
    ]

    for name in invalid_names:
        with pytest.raises(ValidationError):
            validate_identifier(name, "section")


def test_validate_identifier_too_long():
    with pytest.raises(ValidationError):
        validate_identifier("a" * 500)


def test_validate_value_supported():
    for value in [True, False, 0, 42, 0.3, -1e9, "", "Segoe UI"]:
        assert validate_value(value) == value


def test_validate_value_unsupported():
    for value in [None, [1], {"a": 1}, (1, 2), b"bytes"]:
        with pytest.raises(ValidationError):
            validate_value(value)


def test_validate_value_rejects_newlines():
    with pytest.raises(ValidationError):
        validate_value("line one\nline two")


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        validate_identifier("bad key")


def test_values_equal():
    assert values_equal(0.5, 0.5)
    assert values_equal(True, True)
    assert not values_equal(0.5, 0.25)
    assert not values_equal(1, True)
    assert values_equal(math.nan, math.nan)


def test_build_default_table():
    table = build_default_table([("graphics", "bloom", True), ("sound", "sfx_volume", 0.5)])

    assert table[0].section == "graphics"
    assert table[0].key == "bloom"
    assert table[1].value == 0.5
    assert isinstance(table, tuple)


def test_build_default_table_rejects_duplicates():
    with pytest.raises(ValueError):
        build_default_table([("graphics", "bloom", True), ("graphics", "bloom", False)])


def test_build_default_table_rejects_bad_entries():
    with pytest.raises(ValidationError):
        build_default_table([("graphics", "bad key", True)])
    with pytest.raises(ValidationError):
        build_default_table([("graphics", "colors", [1, 2])])
