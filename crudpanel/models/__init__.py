"""
crudpanel Models

Pydantic contracts (front end payloads):
    from crudpanel.models import WidgetPublic, MenuItemPublic
    from crudpanel.models.contracts.menu import MenuItemPublic  # Granular access
"""

from crudpanel.models.contracts import (
    MenuItemPublic,
    SearchTypePublic,
    TableColumnPublic,
    WidgetPublic,
)

__all__ = [
    "MenuItemPublic",
    "SearchTypePublic",
    "TableColumnPublic",
    "WidgetPublic",
]
