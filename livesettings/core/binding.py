"""
Binding application objects to settings.

Besides plain change bindings this covers the two reconciliation paths:
startup (re-apply settings that must be in effect before anything runs)
and late joiners (objects created after startup get the current values
of every setting their categories care about).
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Set, Tuple

from .router import Disposer, NotificationRouter
from .store import SettingsStore

logger = logging.getLogger(__name__)

ValueHandler = Callable[[Any], Any]
ObjectHandler = Callable[[Any, Any], Any]


class CategoryRegistry(Protocol):
    """Query interface onto the application's live objects."""

    def categories_of(self, obj: Any) -> Set[str]:
        ...

    def members_of(self, category: str) -> Sequence[Any]:
        ...


class InMemoryCategoryRegistry:
    """
    Simple CategoryRegistry backed by dicts.

    Objects are tracked by identity, so unhashable objects work too.
    Remove objects when they leave the application, or they are kept alive.
    """

    def __init__(self):
        self._members: Dict[str, List[Any]] = {}
        self._categories: Dict[int, Set[str]] = {}

    def add(self, obj: Any, *categories: str):
        """Put ``obj`` into one or more categories."""
        if not categories:
            # An id without a member reference could be reused by another object
            return
        known = self._categories.setdefault(id(obj), set())
        for category in categories:
            if category in known:
                continue
            known.add(category)
            self._members.setdefault(category, []).append(obj)

    def remove(self, obj: Any):
        """Forget ``obj`` in every category."""
        for category in self._categories.pop(id(obj), set()):
            members = self._members.get(category, [])
            self._members[category] = [m for m in members if m is not obj]

    def categories_of(self, obj: Any) -> Set[str]:
        return set(self._categories.get(id(obj), set()))

    def members_of(self, category: str) -> Sequence[Any]:
        return list(self._members.get(category, []))


class SettingsBinder:
    """
    Connects application components to a SettingsStore.

    Example:
        binder = SettingsBinder(store, registry=scene_registry)
        binder.on_startup("graphics", "fullscreen", window.set_fullscreen)
        binder.bind_category("shadow_casters", "graphics", "shadows",
                             lambda node, on: node.set_shadows(on))
        binder.reconcile_startup()
        ...
        binder.reconcile_object(new_node)
    """

    def __init__(self, store: SettingsStore,
                 router: Optional[NotificationRouter] = None,
                 registry: Optional[CategoryRegistry] = None):
        self.store = store
        self.router = router if router is not None else store.router
        self.registry = registry

        self._disposers: List[Disposer] = []
        self._startup: List[Tuple[str, str, ValueHandler]] = []
        self._category_bindings: Dict[str, List[Tuple[str, str, ObjectHandler]]] = {}

    def bind(self, section: str, key: str, apply: ValueHandler) -> Disposer:
        """
        Call ``apply(value)`` each time (section, key) changes.

        Returns:
            A disposer removing the binding
        """
        # Fail early on keys the store doesn't know
        self.store.get_value(section, key)

        def on_change(changed_section, changed_key):
            apply(self.store.get_value(changed_section, changed_key))

        return self._track(self.router.subscribe(section, key, on_change))

    def on_startup(self, section: str, key: str, apply: ValueHandler) -> Disposer:
        """
        Register ``apply(value)`` to run once from reconcile_startup().

        Returns:
            A disposer removing the handler
        """
        self.store.get_value(section, key)
        entry = (section, key, apply)
        self._startup.append(entry)

        def dispose() -> bool:
            for i, registered in enumerate(self._startup):
                if registered is entry:
                    del self._startup[i]
                    return True
            return False

        return dispose

    def reconcile_startup(self) -> int:
        """
        Run every startup handler with the current value.

        Nothing "changed" when the store was loaded, so effects such as
        the display mode or audio levels have to be applied explicitly.

        Returns:
            Number of handlers that ran without error
        """
        applied = 0
        for section, key, apply in list(self._startup):
            try:
                apply(self.store.get_value(section, key))
                applied += 1
            except Exception:
                logger.exception(f"Startup handler for {section}/{key} failed")

        logger.info(f"Applied {applied}/{len(self._startup)} startup setting(s)")
        return applied

    def bind_category(self, category: str, section: str, key: str, apply: ObjectHandler) -> Disposer:
        """
        Apply (section, key) to every member of ``category``.

        ``apply(obj, value)`` runs for all current members on each change,
        and for new members through reconcile_object().

        Returns:
            A disposer removing the binding
        """
        if self.registry is None:
            raise RuntimeError("bind_category() needs a CategoryRegistry")

        self.store.get_value(section, key)
        binding = (section, key, apply)
        self._category_bindings.setdefault(category, []).append(binding)

        def on_change(changed_section, changed_key):
            value = self.store.get_value(changed_section, changed_key)
            for obj in self.registry.members_of(category):
                self._apply_to(obj, category, binding, value)

        unsubscribe = self.router.subscribe(section, key, on_change)

        def release() -> bool:
            bindings = self._category_bindings.get(category, [])
            for i, registered in enumerate(bindings):
                if registered is binding:
                    del bindings[i]
                    break
            if not bindings:
                self._category_bindings.pop(category, None)
            return unsubscribe()

        return self._track(release)

    def reconcile_object(self, obj: Any) -> int:
        """
        Apply current values to an object that just entered the application.

        Returns:
            Number of settings applied
        """
        if self.registry is None:
            return 0

        applied = 0
        for category in sorted(self.registry.categories_of(obj)):
            for binding in list(self._category_bindings.get(category, [])):
                section, key, _ = binding
                value = self.store.get_value(section, key)
                if self._apply_to(obj, category, binding, value):
                    applied += 1
        return applied

    def dispose(self):
        """Remove every binding this binder made."""
        for disposer in list(self._disposers):
            disposer()
        self._disposers.clear()
        self._startup.clear()
        self._category_bindings.clear()

    def _track(self, release: Disposer) -> Disposer:
        """Wrap ``release`` so that calling it also forgets the disposer."""
        def dispose() -> bool:
            if dispose in self._disposers:
                self._disposers.remove(dispose)
            return release()

        self._disposers.append(dispose)
        return dispose

    @staticmethod
    def _apply_to(obj, category, binding, value) -> bool:
        section, key, apply = binding
        try:
            apply(obj, value)
            return True
        except Exception:
            # One broken object must not stop the rest of the category
            logger.exception(f"Applying {section}/{key} to {obj!r} ({category}) failed")
            return False
