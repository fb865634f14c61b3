"""
Pydantic contracts for serialized widgets and menus.

    from crudpanel.models.contracts import MenuItemPublic, WidgetPublic
"""

from crudpanel.models.contracts.menu import MenuItemPublic
from crudpanel.models.contracts.widgets import SearchTypePublic, TableColumnPublic, WidgetPublic

__all__ = [
    "MenuItemPublic",
    "SearchTypePublic",
    "TableColumnPublic",
    "WidgetPublic",
]
