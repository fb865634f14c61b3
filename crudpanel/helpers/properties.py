"""
Property Holder

Generic property bag shared by widgets, table columns, search types and menu
items. Each subclass declares:

    defaults: property values merged along the MRO at construction
    getters:  derived values included in to_dict() via get_<name>()

and its recognized fluent setters as descriptors:

    class MenuItem(PropertyHolder):
        defaults = {"icon": "code"}
        icon = Fluent()
        hidden = Fluent()

    MenuItem().icon("users").hidden(lambda ctx: False)

Setters only exist for declared keys; set_property() remains available for
ad-hoc keys a subclass wants to store.
"""

import copy
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar

_MISSING = object()


class Fluent:
    """Declares a chainable setter for one property key."""

    def __init__(self, key: str | None = None):
        self.key = key

    def __set_name__(self, owner: type, name: str) -> None:
        if self.key is None:
            self.key = name

    def __get__(self, instance: "PropertyHolder | None", owner: type | None = None) -> Any:
        if instance is None:
            return self
        key = self.key

        def setter(value: Any) -> Any:
            return instance.set_property(key, value)

        setter.__name__ = key
        return setter


class FluentFlag(Fluent):
    """Chainable setter for a boolean property; calling it bare sets True."""

    def __get__(self, instance: "PropertyHolder | None", owner: type | None = None) -> Any:
        if instance is None:
            return self
        key = self.key

        def setter(value: bool = True) -> Any:
            return instance.set_property(key, value)

        setter.__name__ = key
        return setter


def serialize(value: Any) -> Any:
    """Recursively turn holders (and lists/dicts of them) into plain data."""
    if isinstance(value, PropertyHolder):
        return value.to_dict()
    if isinstance(value, (list, tuple)):
        return [serialize(item) for item in value]
    if isinstance(value, dict):
        return {key: serialize(item) for key, item in value.items()}
    return value


class PropertyHolder:
    """Key/value property storage with class-level defaults."""

    defaults: ClassVar[dict[str, Any]] = {}
    getters: ClassVar[list[str]] = []

    def __init__(self, properties: Mapping[str, Any] | None = None):
        self._properties: dict[str, Any] = {}
        for klass in reversed(type(self).__mro__):
            self._properties.update(copy.deepcopy(klass.__dict__.get("defaults", {})))
        if properties:
            self._properties.update(properties)

    @property
    def properties(self) -> Mapping[str, Any]:
        """Read-only view of every stored property."""
        return MappingProxyType(self._properties)

    def get_property(self, key: str, default: Any = None) -> Any:
        """
        Get a property value.

        Dotted keys read nested mappings, so get_property("rules.create")
        returns the create rule list. Missing keys yield default.
        """
        if key in self._properties:
            return self._properties[key]
        if "." not in key:
            return default

        value: Any = self._properties
        for segment in key.split("."):
            if not isinstance(value, Mapping):
                return default
            value = value.get(segment, _MISSING)
            if value is _MISSING:
                return default
        return value

    def set_property(self, key: str, value: Any):
        """Store a property and return self for chaining."""
        self._properties[key] = value
        return self

    def has_property(self, key: str) -> bool:
        return key in self._properties

    def get_getters(self) -> list[str]:
        return list(self.getters)

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize for the front end.

        Callables (predicates, custom store hooks) are never serialized.
        """
        out = {
            key: serialize(value)
            for key, value in self._properties.items()
            if not callable(value)
        }
        for name in self.get_getters():
            getter: Callable[[], Any] = getattr(self, f"get_{name}")
            out[name] = serialize(getter())
        return out

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._properties!r})"
