"""
Default settings for livesettings.

These are the values seeded into the settings file on first run, and for
any key that a later release adds. Order matters: it is the order keys are
seeded and written.
"""

from typing import Any, Iterable, NamedTuple, Tuple

from ..utils.validators import validate_identifier, validate_value


class SettingDefault(NamedTuple):
    """A declared setting and its initial value."""
    section: str
    key: str
    value: Any


def build_default_table(triples: Iterable[Tuple[str, str, Any]]) -> Tuple[SettingDefault, ...]:
    """
    Build an immutable default table.

    Args:
        triples: (section, key, default_value) in seeding order

    Returns:
        Tuple of SettingDefault

    Raises:
        ValueError: On duplicate (section, key) pairs or invalid entries
    """
    seen = set()
    table = []

    for section, key, value in triples:
        validate_identifier(section, "section")
        validate_identifier(key, "key")
        validate_value(value)

        if (section, key) in seen:
            raise ValueError(f"Duplicate default for {section}/{key}")
        seen.add((section, key))

        table.append(SettingDefault(section, key, value))

    return tuple(table)


DEFAULT_TABLE = build_default_table([
    # Display
    ("graphics", "fullscreen", False),

    # Scene effects, applied to every node in the matching category
    ("graphics", "shadows", True),
    ("graphics", "reflections", True),
    ("graphics", "bloom", True),

    # Audio bus levels, linear 0.0 - 1.0
    ("sound", "master_volume", 1.0),
    ("sound", "music_volume", 0.8),
    ("sound", "sfx_volume", 0.8),
])
