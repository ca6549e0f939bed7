"""
Settings file serializers.

A serializer turns the in-memory store state (section -> key -> value)
into text and back. A missing or corrupt file is not an error here: it
loads as an empty state and default seeding fills it in.
"""

import configparser
import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Dict, Union

logger = logging.getLogger(__name__)

StoreState = Dict[str, Dict[str, Any]]
PathLike = Union[str, "os.PathLike[str]"]

_INT_RE = re.compile(r'^[+-]?\d+$')


class Serializer:
    """
    Base class for settings file formats.

    Subclasses implement encode() and decode(); load() and save() handle
    the file system side.
    """

    name = ""

    def encode(self, state: StoreState) -> str:
        raise NotImplementedError

    def decode(self, text: str) -> StoreState:
        raise NotImplementedError

    def load(self, path: PathLike) -> StoreState:
        """
        Load store state from a file.

        Returns an empty state if the file doesn't exist, can't be read,
        or can't be parsed.
        """
        path = Path(path)

        if not path.exists():
            logger.info(f"No settings file at {path}, starting empty")
            return {}

        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Failed to read settings file {path}: {e}")
            return {}

        try:
            state = self.decode(text)
        except (ValueError, RecursionError) as e:
            logger.warning(f"Ignoring corrupt settings file {path}: {e}")
            return {}

        logger.debug(f"Loaded {sum(len(keys) for keys in state.values())} settings from {path}")
        return state

    def save(self, path: PathLike, state: StoreState) -> None:
        """
        Write the full store state, replacing the file atomically.

        The text goes to a temporary file beside the target which is then
        renamed over it, so a failed write never leaves a truncated file.

        Raises:
            OSError: If the file can't be written
        """
        path = Path(path)
        text = self.encode(state)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(text)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.error(f"Failed to save settings to {path}: {e}")
            raise

        logger.debug(f"Saved settings to {path}")


class IniSerializer(Serializer):
    """
    INI-style format: [section] headers with "key = value" lines.

    Values: true/false, decimal floats, integers, and double-quoted strings.
    """

    name = "ini"

    # Not a valid section identifier, so it can't collide with a real one
    _DEFAULT_SECTION = "*defaults*"

    def _parser(self) -> configparser.ConfigParser:
        parser = configparser.ConfigParser(
            interpolation=None,
            default_section=self._DEFAULT_SECTION,
        )
        # Keys are case sensitive
        parser.optionxform = str
        return parser

    def encode(self, state: StoreState) -> str:
        lines = []
        for section, values in state.items():
            if lines:
                lines.append("")
            lines.append(f"[{section}]")
            for key, value in values.items():
                lines.append(f"{key} = {self.format_value(value)}")
        return "\n".join(lines) + "\n" if lines else ""

    def decode(self, text: str) -> StoreState:
        parser = self._parser()
        try:
            parser.read_string(text)
        except configparser.Error as e:
            raise ValueError(str(e)) from e

        state: StoreState = {}
        for section in parser.sections():
            state[section] = {
                key: self.parse_value(raw)
                for key, raw in parser.items(section, raw=True)
            }
        return state

    @staticmethod
    def format_value(value: Any) -> str:
        """Format a Python value as an INI literal."""
        if isinstance(value, bool):
            return "true" if value else "false"
        elif isinstance(value, float):
            # repr keeps full precision and always marks the value as a float
            return repr(value)
        elif isinstance(value, int):
            return str(value)
        elif isinstance(value, str):
            escaped = value.replace("\\", "\\\\").replace('"', '\\"')
            return f'"{escaped}"'
        raise TypeError(f"Cannot serialize {type(value).__name__} value")

    @staticmethod
    def parse_value(raw: str) -> Any:
        """Parse an INI literal written by format_value."""
        raw = raw.strip()
        lowered = raw.lower()

        if lowered == "true":
            return True
        if lowered == "false":
            return False

        if len(raw) >= 2 and raw[0] == '"' and raw[-1] == '"':
            return _unescape(raw[1:-1])

        if _INT_RE.match(raw):
            return int(raw)

        try:
            return float(raw)
        except ValueError:
            # Hand-edited unquoted text
            return raw


def _unescape(text: str) -> str:
    out = []
    chars = iter(text)
    for ch in chars:
        if ch == "\\":
            out.append(next(chars, "\\"))
        else:
            out.append(ch)
    return "".join(out)


class JsonSerializer(Serializer):
    """JSON format: {"section": {"key": value}}."""

    name = "json"

    def encode(self, state: StoreState) -> str:
        return json.dumps(state, indent=2) + "\n"

    def decode(self, text: str) -> StoreState:
        if not text.strip():
            return {}

        # JSONDecodeError is a ValueError
        data = json.loads(text)

        if not isinstance(data, dict):
            raise ValueError("Top level must be an object of sections")

        state: StoreState = {}
        for section, values in data.items():
            if not isinstance(values, dict):
                raise ValueError(f"Section {section!r} is not an object")
            state[section] = dict(values)
        return state


_SERIALIZERS = {
    IniSerializer.name: IniSerializer,
    JsonSerializer.name: JsonSerializer,
}


def serializer_named(name: str) -> Serializer:
    """
    Serializer for an explicit format name.

    Raises:
        ValueError: If the format is not known
    """
    try:
        return _SERIALIZERS[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown settings format {name!r} (expected one of: {', '.join(_SERIALIZERS)})"
        ) from None


def serializer_for(path_or_name: PathLike) -> Serializer:
    """
    Pick a serializer by format name ("ini", "json") or by file suffix.

    Anything that isn't recognisably JSON is written as INI.
    """
    name = str(path_or_name)
    if name in _SERIALIZERS:
        return _SERIALIZERS[name]()

    if Path(name).suffix.lower() == ".json":
        return JsonSerializer()
    return IniSerializer()
