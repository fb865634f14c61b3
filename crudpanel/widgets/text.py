"""Single-line text input."""

from crudpanel.widgets.widget import Widget


class TextWidget(Widget):
    """Plain text input; also the value entry of the default search types."""

    def init(self) -> None:
        self.tag("b-form-input")
        self.set_property("type", "text")
