"""
Password input.

Never shown on index or detail pages and never returned in responses. The
stored value is a bcrypt hash; an empty field on edit keeps the current hash.
"""

from typing import Any

from crudpanel.core.http import CrudRequest
from crudpanel.core.security import get_password_hash
from crudpanel.widgets.widget import Widget


class PasswordWidget(Widget):
    def init(self) -> None:
        self.tag("b-form-input").on_index(False).on_view(False).searchable(False).sortable(False)
        self.set_property("floatlabel", True)
        self.set_property("type", "password")

    def store(self, request: CrudRequest, item: Any) -> None:
        name = self.get_property("name")
        if request.filled(name):
            setattr(item, name, get_password_hash(request.input(name)))

    def modify_response(self, response: dict[str, Any], item: Any) -> None:
        pass
