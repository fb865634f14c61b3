"""
Search Type

A named search mode of a widget ("equal", "empty", ...) together with the
widgets that collect its search value. A search type without widgets needs no
value at all, e.g. "is empty" checks.
"""

from typing import TYPE_CHECKING

from crudpanel.helpers.properties import Fluent, PropertyHolder

if TYPE_CHECKING:
    from crudpanel.widgets.widget import Widget


class SearchType(PropertyHolder):
    """Named search mode with its value-entry widgets."""

    getters = ["widgets"]

    title = Fluent()

    def __init__(self, type: str, title: str | None = None):
        super().__init__({"type": type, "title": title if title is not None else type})
        self._widgets: list["Widget"] = []

    @classmethod
    def create(cls, type: str, title: str | None = None) -> "SearchType":
        return cls(type, title)

    @property
    def type(self) -> str:
        return self.get_property("type")

    def add_widget(self, widget: "Widget") -> "SearchType":
        self._widgets.append(widget)
        return self

    def add_widgets(self, widgets: list["Widget"]) -> "SearchType":
        self._widgets.extend(widgets)
        return self

    def get_widgets(self) -> list["Widget"]:
        return list(self._widgets)

    def requires_value(self) -> bool:
        """False for modes like "empty" that filter without a search value."""
        return len(self._widgets) > 0

    def post_init_widgets(self) -> None:
        for widget in self._widgets:
            widget.post_init()
