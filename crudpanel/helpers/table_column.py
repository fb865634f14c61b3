"""Table column descriptor derived from a widget."""

from crudpanel.helpers.properties import Fluent, FluentFlag, PropertyHolder


class TableColumn(PropertyHolder):
    """One column of an index table: name, title, sortable flag and render tag."""

    defaults = {"sortable": True, "tag": "simple-view"}

    name = Fluent()
    title = Fluent()
    sortable = FluentFlag()
    tag = Fluent()

    @classmethod
    def create(cls, name: str | None = None) -> "TableColumn":
        out = cls()
        if name:
            out.name(name)
        return out
