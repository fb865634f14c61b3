"""
Menu Item

Node of the admin-panel navigation tree. Predicates (``active``, ``hidden``)
are plain callables receiving the MenuContext of the current request:

    MenuItem.create("/admin/users").title("Users").icon("users").hidden(
        lambda ctx: not ctx.user.is_superuser
    )

Badges may be a scalar or a zero-argument callable; callables are resolved on
first read and the result is stored back into the ``badge`` property.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

from crudpanel.helpers.properties import Fluent, PropertyHolder

if TYPE_CHECKING:
    from crudpanel.core.http import CrudRequest


@dataclass
class MenuContext:
    """Per-request values menu predicates may depend on."""

    path: str
    user: Any = None
    request: "CrudRequest | None" = None

    @classmethod
    def from_request(cls, request: "CrudRequest", user: Any = None) -> "MenuContext":
        return cls(path=request.path, user=user, request=request)


def path_matches(pattern: str, path: str) -> bool:
    """
    Compare a url path pattern against a request path.

    Leading/trailing slashes are ignored on both sides and ``*`` matches any
    run of characters, so "admin/users/*" matches "/admin/users/5/edit".
    """
    pattern = pattern.strip("/")
    path = path.strip("/")
    if pattern == path:
        return True
    if "*" not in pattern:
        return False
    regex = ".*".join(re.escape(part) for part in pattern.split("*"))
    return re.fullmatch(regex, path) is not None


class MenuItem(PropertyHolder):
    """Navigation-tree node with visibility and active-state predicates."""

    defaults = {
        "icon": "code",
        "title": "TITLE HERE",
        "badge_variant": "danger",
        "order": 100,
    }

    url = Fluent()
    title = Fluent()
    icon = Fluent()
    active = Fluent()
    hidden = Fluent()
    target = Fluent()
    order = Fluent()
    badge = Fluent()
    badge_variant = Fluent()

    def __init__(self, properties: dict[str, Any] | None = None):
        super().__init__(properties)
        self._children: list["MenuItem"] = []

    @classmethod
    def create(cls, url: str | None = None) -> "MenuItem":
        out = cls()
        if url:
            out.url(url)
        return out

    def is_active(self, context: MenuContext) -> bool | None:
        """
        Whether this item matches the current request.

        Returns None when neither an ``active`` predicate nor a url is set.
        """
        active: Callable[[MenuContext], Any] | None = self.get_property("active")
        if callable(active):
            return bool(active(context))

        url = self.get_property("url")
        if url:
            return path_matches(urlsplit(url).path, context.path)
        return None

    def is_hidden(self, context: MenuContext) -> bool:
        hidden: Callable[[MenuContext], Any] | None = self.get_property("hidden")
        if callable(hidden):
            return bool(hidden(context))
        return False

    def get_children(self, context: MenuContext) -> list["MenuItem"]:
        """Visible children, in insertion order."""
        return [child for child in self._children if not child.is_hidden(context)]

    def get_all_children(self) -> list["MenuItem"]:
        return list(self._children)

    def has_children(self) -> bool:
        return len(self._children) > 0

    def add_child(self, child: "MenuItem") -> "MenuItem":
        self._children.append(child)
        return self

    def add_children(self, children: list["MenuItem"]) -> "MenuItem":
        self._children.extend(children)
        return self

    def get_badge_value(self) -> Any:
        badge = self.get_property("badge")
        if callable(badge):
            badge = badge()
            self.set_property("badge", badge)
        return badge
