"""
crudpanel

Declarative widgets and menu items for admin-panel CRUD screens built on
FastAPI and SQLAlchemy.

    from crudpanel import CrudDefinition, CrudRequest, TextWidget, MenuItem
"""

from crudpanel.core.exceptions import WidgetValidationError
from crudpanel.core.http import CrudRequest
from crudpanel.helpers import MenuContext, MenuItem, SearchType, TableColumn
from crudpanel.services import CrudDefinition, build_menu
from crudpanel.widgets import PasswordWidget, TextWidget, Widget

__all__ = [
    "CrudDefinition",
    "CrudRequest",
    "MenuContext",
    "MenuItem",
    "PasswordWidget",
    "SearchType",
    "TableColumn",
    "TextWidget",
    "Widget",
    "WidgetValidationError",
    "build_menu",
]
