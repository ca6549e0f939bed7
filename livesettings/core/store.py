"""
Persistent settings store.

Holds (section, key) -> value in memory, seeds defaults on startup,
persists to disk, and reports actual changes to a NotificationRouter.
"""

import copy
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..config.defaults import SettingDefault, build_default_table
from ..utils.validators import validate_identifier, validate_value, values_equal
from .router import NotificationRouter
from .serializer import PathLike, Serializer, StoreState, serializer_for

logger = logging.getLogger(__name__)

# Nested set_value calls made from subscriber callbacks
MAX_DISPATCH_DEPTH = 16


class NotFoundError(KeyError):
    """Raised when a (section, key) was never declared or set."""

    def __init__(self, section: str, key: str):
        super().__init__(f"{section}/{key}")
        self.section = section
        self.key = key

    def __str__(self):
        return f"Unknown setting: {self.section}/{self.key}"


class SettingTypeError(TypeError):
    """Raised when a value doesn't match the declared type of its key."""
    pass


class DispatchCycleError(RuntimeError):
    """Raised when subscribers keep setting values from inside dispatch."""
    pass


class SettingsStore:
    """
    Settings store with change notification.

    Construct one per application and pass it to the components that need
    it. Call initialize() once before use.

    Setting a value equal to the current one does nothing: no write and
    no notification. A real change is saved (when autosave is on) and then
    dispatched exactly once.

    Subscribers may call set_value() from inside a notification. The store
    lock is reentrant, so this doesn't deadlock, but keys that set each
    other can recurse; nesting deeper than MAX_DISPATCH_DEPTH raises
    DispatchCycleError.
    """

    def __init__(self, path: PathLike,
                 defaults: Iterable = (),
                 serializer: Optional[Serializer] = None,
                 router: Optional[NotificationRouter] = None,
                 autosave: bool = True):
        """
        Args:
            path: Settings file location
            defaults: Default table, (section, key, value) in seeding order
            serializer: File format; picked from the path suffix if omitted
            router: Notification router; a new one is created if omitted
            autosave: Save on every change instead of on flush()
        """
        self.path = Path(path)
        self.defaults: Tuple[SettingDefault, ...] = build_default_table(defaults)
        self.serializer = serializer or serializer_for(self.path)
        self.router = router if router is not None else NotificationRouter()
        self.autosave = autosave

        self._declared: Dict[Tuple[str, str], Any] = {
            (d.section, d.key): d.value for d in self.defaults
        }
        self._state: StoreState = {}
        self._lock = threading.RLock()
        self._dispatch_depth = 0
        self._dirty = False

    @property
    def dirty(self) -> bool:
        """True if there are changes not yet written to disk."""
        return self._dirty

    def initialize(self) -> "SettingsStore":
        """
        Load the settings file and seed missing defaults.

        The merged state is always written back, which also creates the
        file on first run.

        Raises:
            OSError: If the merged state can't be saved
        """
        with self._lock:
            loaded = self.serializer.load(self.path)

            # Default-table order first, then anything else the file had
            state: StoreState = {}
            seeded = 0
            for default in self.defaults:
                section_values = loaded.get(default.section, {})
                if default.key in section_values:
                    value = self._coerce_loaded(default, section_values[default.key])
                else:
                    value = default.value
                    seeded += 1
                state.setdefault(default.section, {})[default.key] = value

            for section, values in loaded.items():
                for key, value in values.items():
                    state.setdefault(section, {}).setdefault(key, value)

            self._state = state
            self._write()

        logger.info(f"Settings initialized from {self.path} ({seeded} default(s) seeded)")
        return self

    def get_value(self, section: str, key: str) -> Any:
        """
        Get the current value.

        Raises:
            NotFoundError: If the key was never seeded or set
        """
        with self._lock:
            try:
                return self._state[section][key]
            except KeyError:
                raise NotFoundError(section, key) from None

    def has_value(self, section: str, key: str) -> bool:
        with self._lock:
            return key in self._state.get(section, {})

    def set_value(self, section: str, key: str, value: Any, force: bool = False) -> bool:
        """
        Set a value, saving and notifying subscribers if it changed.

        Args:
            section: Setting section
            key: Setting key
            value: New value, of the key's declared type
            force: Save and notify even if the value is unchanged

        Returns:
            True if subscribers were notified

        Raises:
            NotFoundError: If the key is not known to the store
            SettingTypeError: If the value type doesn't match
            DispatchCycleError: If nested notifications go too deep
            OSError: If autosave fails; the previous value is kept
        """
        with self._lock:
            current = self.get_value(section, key)
            value = self._coerce(section, key, current, value)

            if not force and values_equal(current, value):
                return False

            if self._dispatch_depth >= MAX_DISPATCH_DEPTH:
                raise DispatchCycleError(
                    f"Setting {section}/{key} exceeded {MAX_DISPATCH_DEPTH} nested notifications"
                )

            self._state[section][key] = value
            logger.debug(f"Setting {section}/{key} = {value!r}")

            if self.autosave:
                try:
                    self._write()
                except OSError:
                    # Keep memory and disk in agreement
                    self._state[section][key] = current
                    raise
            else:
                self._dirty = True

            self._dispatch_depth += 1
            try:
                self.router.dispatch(section, key, value)
            finally:
                self._dispatch_depth -= 1

        return True

    def flush(self):
        """
        Write the full state to disk.

        Needed when autosave is off; harmless otherwise.

        Raises:
            OSError: If the file can't be written
        """
        with self._lock:
            self._write()

    def default_of(self, section: str, key: str) -> Any:
        """Declared default of a key."""
        try:
            return self._declared[(section, key)]
        except KeyError:
            raise NotFoundError(section, key) from None

    def reset_value(self, section: str, key: str) -> bool:
        """Set a key back to its declared default."""
        return self.set_value(section, key, self.default_of(section, key))

    def reset_all(self) -> int:
        """
        Set every declared key back to its default.

        Returns:
            Number of keys that changed
        """
        changed = 0
        for default in self.defaults:
            if self.set_value(default.section, default.key, default.value):
                changed += 1
        return changed

    def sections(self) -> List[str]:
        with self._lock:
            return list(self._state)

    def keys(self, section: str) -> List[str]:
        with self._lock:
            return list(self._state.get(section, {}))

    def snapshot(self) -> StoreState:
        """Deep copy of the current state."""
        with self._lock:
            return copy.deepcopy(self._state)

    def _write(self):
        self.serializer.save(self.path, self._state)
        self._dirty = False

    def _coerce(self, section: str, key: str, current: Any, value: Any) -> Any:
        """Check ``value`` against the key's declared type."""
        validate_identifier(section, "section")
        validate_identifier(key, "key")
        validate_value(value)

        expected = type(self._declared.get((section, key), current))

        if expected is float and type(value) is int:
            return float(value)
        if type(value) is not expected:
            raise SettingTypeError(
                f"{section}/{key} expects {expected.__name__}, got {type(value).__name__}"
            )
        return value

    def _coerce_loaded(self, default: SettingDefault, value: Any) -> Any:
        """Keep a value read from disk if it fits the declared type."""
        expected = type(default.value)

        if type(value) is expected:
            return value
        if expected is float and type(value) is int:
            return float(value)

        logger.warning(
            f"Replacing {default.section}/{default.key}={value!r} from file "
            f"with default {default.value!r} ({expected.__name__} expected)"
        )
        return default.value
