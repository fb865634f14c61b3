# Widgets - declarative CRUD fields
from crudpanel.widgets.password import PasswordWidget
from crudpanel.widgets.text import TextWidget
from crudpanel.widgets.widget import Widget

__all__ = [
    "PasswordWidget",
    "TextWidget",
    "Widget",
]
