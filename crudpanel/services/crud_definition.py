"""
CRUD Definition

Groups the widgets of one resource and drives them through a request:

    users = CrudDefinition([
        TextWidget.create("name").required(),
        TextWidget.create("email").required().rules("email|max:255"),
        PasswordWidget.create("password").create_rules("required|min:8"),
    ])

    request = await CrudRequest.from_request(http_request)
    user = User()
    users.store(request, user, "create", session=db)
    return users.response(user, view=True)

Listing:
    query = users.search(select(User), search=request.input("search"))
    query = users.order(query, "name", "desc")
"""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import Select, or_
from sqlalchemy.orm import Session

from crudpanel.core.http import CrudRequest
from crudpanel.helpers.table_column import TableColumn
from crudpanel.models.contracts.widgets import WidgetPublic
from crudpanel.services.validation import validate_input
from crudpanel.widgets.widget import RULE_TYPES, Widget

logger = logging.getLogger(__name__)


class CrudDefinition:
    """Widgets of one resource and the request pipeline over them."""

    def __init__(self, widgets: list[Widget]):
        self.widgets = list(widgets)
        # post_init may wire widgets together, so every widget must exist first
        for widget in self.widgets:
            widget.post_init()
        for widget in self.widgets:
            widget.post_init_search_widgets()

    def get_widget(self, name: str) -> Widget | None:
        for widget in self.widgets:
            if widget.get_property("name") == name:
                return widget
        return None

    def form_widgets(self, type: str) -> list[Widget]:
        """Widgets shown on the "create" or "edit" form."""
        if type not in RULE_TYPES:
            raise ValueError(f"Invalid form type: {type}")
        return [widget for widget in self.widgets if widget.get_property(f"on_{type}")]

    def table_columns(self) -> list[TableColumn]:
        return [column for widget in self.widgets for column in widget.get_table_columns()]

    def describe(self) -> list[WidgetPublic]:
        """Widget descriptions for the front end."""
        return [WidgetPublic.model_validate(widget.to_dict()) for widget in self.widgets]

    # ==================== VALIDATION & STORE ====================

    def validation_rules(
        self, request: CrudRequest, type: str, item: Any = None
    ) -> dict[str, list[str]]:
        rules: dict[str, list[str]] = {}
        for widget in self.form_widgets(type):
            rules.update(widget.validation_rules(request, type, item))
        return rules

    def validation_attributes(
        self, request: CrudRequest, type: str, item: Any = None
    ) -> dict[str, str]:
        attributes: dict[str, str] = {}
        for widget in self.form_widgets(type):
            attributes.update(widget.validation_attributes(request, type, item))
        return attributes

    def validate(self, request: CrudRequest, type: str, item: Any = None) -> dict[str, Any]:
        """
        Validate the request for a form type.

        Returns:
            Coerced input of the validated fields

        Raises:
            WidgetValidationError: If any rule fails
        """
        return validate_input(
            request.all(),
            self.validation_rules(request, type, item),
            self.validation_attributes(request, type, item),
        )

    def store(
        self,
        request: CrudRequest,
        item: Any,
        type: str,
        session: Session | None = None,
    ) -> dict[str, Any]:
        """
        Run the full store pipeline for a create or edit form.

        Order: modify request, pre store, validate, store, flush, post store.
        Post store hooks run after the flush so generated keys are available.
        Without a session the caller persists the item and post store still
        runs on the unsaved item.

        Args:
            request: Current request
            item: Model instance to fill
            type: "create" or "edit"
            session: Session to add and flush the item with

        Returns:
            Validated input

        Raises:
            WidgetValidationError: If validation fails; store hooks are not called
        """
        widgets = self.form_widgets(type)

        for widget in widgets:
            widget.do_modify_request(request, item)
        for widget in widgets:
            widget.do_pre_store(request, item)

        validated = self.validate(request, type, item)

        for widget in widgets:
            widget.do_store(request, item)

        if session is not None:
            session.add(item)
            session.flush()

        for widget in widgets:
            widget.do_post_store(request, item)

        logger.debug(f"Stored {item.__class__.__name__} through {len(widgets)} widgets")
        return validated

    def response(self, item: Any, view: bool = False) -> dict[str, Any]:
        """Output representation of an item for the index table, or the detail view when view=True."""
        flag = "on_view" if view else "on_index"
        response: dict[str, Any] = {}
        for widget in self.widgets:
            if widget.get_property(flag):
                widget.do_modify_response(response, item)
        return response

    # ==================== QUERY ====================

    def search(
        self,
        query: Select,
        search: str | None = None,
        filters: Mapping[str, tuple[str | None, Any]] | None = None,
    ) -> Select:
        """
        Apply list filters.

        Args:
            query: Select over the resource model
            search: Global search term, matched against every searchable
                    widget; a row matches if any widget matches
            filters: Field name to (search type, value); all must match

        Returns:
            Filtered query
        """
        if isinstance(search, str) and search:
            criteria = [
                criterion
                for widget in self.widgets
                if (criterion := widget.do_search_filter(query, None, search)) is not None
            ]
            if criteria:
                query = query.where(or_(*criteria))

        for name, (search_type, value) in (filters or {}).items():
            widget = self.get_widget(name)
            if widget is None:
                logger.debug(f"Ignoring filter on unknown field '{name}'")
                continue
            query = widget.do_search(query, search_type, value)

        return query

    def order(self, query: Select, key: str, direction: str = "asc") -> Select:
        """Sort by the widget owning the table column named key."""
        for widget in self.widgets:
            if any(column.get_property("name") == key for column in widget.get_table_columns()):
                return widget.do_order(query, key, direction)
        logger.debug(f"Ignoring order by unknown column '{key}'")
        return query
