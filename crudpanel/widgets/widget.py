"""
Widget base class.

A widget is one declarative field of a CRUD resource. The same object acts as
form input, index table column, detail view entry, search filter and sort key:

    TextWidget.create("email").required().rules("max:255").searchable(False)

Lifecycle entry points (``do_*``) are called by the resource definition for
every request; subclasses customize behavior by overriding the protected
hooks (``store``, ``search``, ``order``, ``table_columns``, ...) while callers
can override per instance with the ``custom_*`` callables.
"""

import copy
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from sqlalchemy import Select, and_, column, or_
from sqlalchemy.orm import QueryableAttribute
from sqlalchemy.sql.elements import ColumnElement

from crudpanel.core.http import CrudRequest
from crudpanel.core.translation import trans
from crudpanel.helpers.properties import Fluent, FluentFlag, PropertyHolder
from crudpanel.helpers.search_type import SearchType
from crudpanel.helpers.table_column import TableColumn

logger = logging.getLogger(__name__)

RULE_TYPES = ("create", "edit")


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, tuple, set, dict)):
        return len(value) == 0
    return False


def _clone(value: Any) -> Any:
    # Containers are duplicated; callables and ORM objects are shared
    if isinstance(value, (dict, list, set)):
        return copy.deepcopy(value)
    return value


class Widget(PropertyHolder, ABC):
    """Base class for all widgets (form fields, table cells and view entries)."""

    defaults = {
        "on_create": True,
        "on_edit": True,
        "on_index": True,
        "on_store": True,
        "on_view": True,
        "col": 12,
        "cols": 12,
        "searchable": True,
        "sortable": True,
        "translation": False,
        "index_tag": "simple-view",
        "view_tag": "simple-view",
        "view_group_tag": "simple-view-group",
        "group_tag": "simple-group",
        "tag": "input",
    }
    getters = ["table_columns", "search_types"]

    # Lifecycle participation
    on_index = FluentFlag()
    on_view = FluentFlag()
    on_create = FluentFlag()
    on_edit = FluentFlag()
    on_store = FluentFlag()
    sortable = FluentFlag()
    searchable = FluentFlag()
    ajax = FluentFlag()

    # Per-instance overrides, called as (request, item) or (response, item)
    custom_store = Fluent()
    custom_pre_store = Fluent()
    custom_post_store = Fluent()
    custom_modify_request = Fluent()
    custom_modify_response = Fluent()

    # Presentation
    value = Fluent()
    name = Fluent()
    title = Fluent()
    description = Fluent()
    index_tag = Fluent()
    view_group_tag = Fluent()
    view_tag = Fluent()
    tag = Fluent()
    group_tag = Fluent()
    css_class = Fluent("class")
    cols = Fluent()
    col = Fluent()
    show_if = Fluent()

    def __init__(self, properties: dict[str, Any] | None = None):
        super().__init__(properties)
        self._search_types: list[SearchType] | None = None
        self._search_types_computed = False
        self.init()

    @classmethod
    def create(cls, name: str | None = None, title: str | None = None):
        """
        Create a widget for a field.

        Args:
            name: Model attribute / request field name
            title: Display title, defaults to the humanized name

        Returns:
            New widget instance
        """
        out = cls()
        if name:
            out.name(name)
        out.title(title or (name or "").replace("_", " ").title())
        return out

    @abstractmethod
    def init(self) -> None:
        """Called when the widget is constructed; set tag and defaults here."""

    def post_init(self) -> None:
        """Called once every widget of the resource has been constructed."""

    def post_init_search_widgets(self) -> None:
        for search_type in self.get_search_types() or []:
            search_type.post_init_widgets()

    # ==================== TABLE & SEARCH ====================

    def get_table_columns(self) -> list[TableColumn]:
        return self.table_columns() if self.get_property("on_index") else []

    def table_columns(self) -> list[TableColumn]:
        """Override to change the index columns produced by this widget."""
        return [
            TableColumn.create(self.get_property("name"))
            .title(self.get_property("title"))
            .sortable(self.get_property("sortable"))
            .tag(self.get_property("index_tag"))
        ]

    def get_search_types(self) -> list[SearchType] | None:
        """
        Search modes offered for this widget.

        Computed once per widget. Returns None, never an empty list, when the
        widget is not searchable or offers no modes, so callers can skip the
        search type selector entirely.
        """
        if not self.get_property("searchable"):
            return None
        if not self._search_types_computed:
            self._search_types = self.search_types()
            self._search_types_computed = True
        if not self._search_types:
            return None
        return list(self._search_types)

    def get_search_type(self, type: str) -> SearchType | None:
        for search_type in self.get_search_types() or []:
            if search_type.type == type:
                return search_type
        return None

    def search_types(self) -> list[SearchType]:
        """Override to change the offered search modes."""
        from crudpanel.widgets.text import TextWidget

        def value_input(title: str) -> Widget:
            # Value inputs are never searched themselves
            return TextWidget.create("search", title).searchable(False)

        return [
            SearchType.create("empty", trans("crudpanel.is_empty")),
            SearchType.create("not_empty", trans("crudpanel.is_not_empty")),
            SearchType.create("equal", trans("crudpanel.equal"))
            .add_widget(value_input(trans("crudpanel.equal"))),
            SearchType.create("not_equal", trans("crudpanel.not_equal"))
            .add_widget(value_input(trans("crudpanel.not_equal"))),
            SearchType.create("similar", trans("crudpanel.similar"))
            .add_widget(value_input(trans("crudpanel.similar"))),
            SearchType.create("not_similar", trans("crudpanel.not_similar"))
            .add_widget(value_input(trans("crudpanel.not_similar"))),
        ]

    def should_search(self, type: str | None = None, search: Any = None) -> bool:
        """
        Whether a search request applies to this widget.

        Without a type only a non-empty string searches. With a type, modes
        that take no value ("empty", "not_empty") always apply; others need a
        non-empty search value.
        """
        if not self.get_property("searchable"):
            return False
        if not type:
            return isinstance(search, str) and search != ""
        search_type = self.get_search_type(type)
        if search_type is not None and not search_type.requires_value():
            return True
        return not _is_empty(search)

    def do_search(self, query: Select, type: str | None = None, search: Any = None) -> Select:
        if not self.should_search(type, search):
            logger.debug(f"Search skipped for '{self.get_property('name')}' (type={type!r})")
            return query
        return self.search(query, type, search)

    def do_search_filter(
        self, query: Select, type: str | None = None, search: Any = None
    ) -> ColumnElement[bool] | None:
        """The criterion do_search would apply, or None, for OR-combining widgets."""
        if not self.should_search(type, search):
            return None
        return self.search_filter(query, type, search)

    def search(self, query: Select, type: str | None = None, search: Any = None) -> Select:
        """Override to change how the query is narrowed (joins, subqueries, ...)."""
        return query.where(self.search_filter(query, type, search))

    def search_filter(
        self, query: Select, type: str | None = None, search: Any = None
    ) -> ColumnElement[bool]:
        target = self.column(query)

        if type == "empty":
            return or_(target.is_(None), target == "")
        elif type == "not_empty":
            return and_(target.is_not(None), target != "")
        elif type == "equal":
            return target.ilike(search)
        elif type == "not_equal":
            return target.not_ilike(search)
        elif type == "not_similar":
            return target.not_ilike(f"%{search}%")
        # "similar", no type and unknown types
        return target.ilike(f"%{search}%")

    def do_order(self, query: Select, key: str, direction: str = "asc") -> Select:
        if not self.get_property("sortable"):
            logger.debug(f"Order by '{key}' ignored, '{self.get_property('name')}' is not sortable")
            return query
        return self.order(query, key, direction)

    def order(self, query: Select, key: str, direction: str = "asc") -> Select:
        """Override to change how the query is sorted."""
        target = self.column(query)
        return query.order_by(target.desc() if direction.lower() == "desc" else target.asc())

    def column(self, query: Select) -> Any:
        """
        Resolve this widget's column for a query.

        Uses the mapped attribute of the first selected entity defining it,
        otherwise an unbound column clause of the same name.
        """
        name = self.get_property("name")
        for description in query.column_descriptions:
            entity = description.get("entity")
            attribute = getattr(entity, name, None) if entity is not None else None
            if isinstance(attribute, QueryableAttribute):
                return attribute
        return column(name)

    # ==================== STORE ====================

    def _store_action(
        self,
        request: CrudRequest,
        item: Any,
        property_name: str,
        action: Callable[[CrudRequest, Any], Any],
    ) -> Any:
        if not self.get_property("on_store"):
            return None
        custom = self.get_property(property_name)
        if custom:
            return custom(request, item)
        return action(request, item)

    def do_store(self, request: CrudRequest, item: Any) -> Any:
        return self._store_action(request, item, "custom_store", self.store)

    def store(self, request: CrudRequest, item: Any) -> None:
        """Copy the request field onto the model attribute of the same name."""
        name = self.get_property("name")
        setattr(item, name, request.input(name))

    def do_pre_store(self, request: CrudRequest, item: Any) -> Any:
        """Runs before validation, for temporary values; store is not reached if validation fails."""
        return self._store_action(request, item, "custom_pre_store", self.pre_store)

    def pre_store(self, request: CrudRequest, item: Any) -> None:
        pass

    def do_post_store(self, request: CrudRequest, item: Any) -> Any:
        """Runs after the item is flushed, when generated keys exist."""
        return self._store_action(request, item, "custom_post_store", self.post_store)

    def post_store(self, request: CrudRequest, item: Any) -> None:
        pass

    # ==================== REQUEST / RESPONSE ====================

    def do_modify_request(self, request: CrudRequest, item: Any = None) -> Any:
        custom = self.get_property("custom_modify_request")
        if callable(custom):
            return custom(request, item)
        return self.modify_request(request, item)

    def modify_request(self, request: CrudRequest, item: Any = None) -> None:
        pass

    def do_modify_response(self, response: dict[str, Any], item: Any) -> Any:
        custom = self.get_property("custom_modify_response")
        if callable(custom):
            return custom(response, item)
        return self.modify_response(response, item)

    def modify_response(self, response: dict[str, Any], item: Any) -> None:
        name = self.get_property("name")
        response[name] = getattr(item, name, None)

    # ==================== VALIDATION ====================

    def validation_attributes(
        self, request: CrudRequest, type: str, item: Any = None
    ) -> dict[str, str]:
        """Display names used in validation messages."""
        name = self.get_property("name")
        title = self.get_property("title")
        return {name: title, f"{name}.*": title}

    def validation_rules(
        self, request: CrudRequest, type: str, item: Any = None
    ) -> dict[str, list[str]]:
        """
        Rules for one form type.

        Args:
            request: Current request
            type: "create" or "edit"
            item: Model being edited, None on create

        Returns:
            Mapping of field name to its rule list
        """
        return {self.get_property("name"): list(self.get_property(f"rules.{type}", []))}

    def rules(self, rules: str | list[str] | None, type: str | None = None) -> "Widget":
        """
        Append validation rules.

        Args:
            rules: "required|max:255" or ["required", "max:255"]
            type: "create" or "edit"; anything else applies to both

        Returns:
            self
        """
        if not rules:
            return self

        if type not in RULE_TYPES:
            self.rules(rules, "create")
            return self.rules(rules, "edit")

        if isinstance(rules, str):
            rules = rules.split("|")

        current = self.get_property("rules") or {}
        merged = {key: list(current.get(key, [])) for key in RULE_TYPES}
        merged[type].extend(rules)
        self.set_property("rules", merged)
        return self

    def create_rules(self, rules: str | list[str]) -> "Widget":
        return self.rules(rules, "create")

    def edit_rules(self, rules: str | list[str]) -> "Widget":
        return self.rules(rules, "edit")

    # ==================== MUTATORS ====================

    def translation(self, val: bool = True) -> "Widget":
        """Mark the field multilingual; translated fields cannot be sorted."""
        self.set_property("sortable", not val)
        self.set_property("translation", val)
        return self

    def required(self) -> "Widget":
        return self.rules("required")

    def nullable(self) -> "Widget":
        return self.rules("nullable")

    def read_only(self) -> "Widget":
        """Hide from create and edit forms; index and view are unaffected."""
        return self.on_create(False).on_edit(False)

    def no_edit(self) -> "Widget":
        return self.on_edit(False)

    def ajaxy(self) -> "Widget":
        return self.ajax(True)

    def copy(self) -> "Widget":
        """Independent duplicate; the search type cache is recomputed on demand."""
        duplicate = copy.copy(self)
        duplicate._properties = {key: _clone(value) for key, value in self._properties.items()}
        duplicate._search_types = None
        duplicate._search_types_computed = False
        return duplicate
