# Helpers - property bags and the descriptors built on them
from crudpanel.helpers.menu_item import MenuContext, MenuItem
from crudpanel.helpers.properties import Fluent, FluentFlag, PropertyHolder
from crudpanel.helpers.search_type import SearchType
from crudpanel.helpers.table_column import TableColumn

__all__ = [
    "Fluent",
    "FluentFlag",
    "MenuContext",
    "MenuItem",
    "PropertyHolder",
    "SearchType",
    "TableColumn",
]
