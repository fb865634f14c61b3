"""
Widget contract models.

Shapes of the widget descriptions sent to the admin front end.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TableColumnPublic(BaseModel):
    """Index table column"""
    name: str | None = None
    title: str | None = None
    sortable: bool = True
    tag: str | None = None


class SearchTypePublic(BaseModel):
    """Search mode and the inputs collecting its value"""
    type: str
    title: str | None = None
    widgets: list["WidgetPublic"] = Field(default_factory=list)


class WidgetPublic(BaseModel):
    """
    Serialized widget.

    Widget subclasses add their own properties (input type, options, ...),
    which are kept as extra fields.
    """
    model_config = ConfigDict(extra="allow")

    name: str | None = None
    title: str | None = None
    description: str | None = None
    value: Any = None
    tag: str | None = None
    index_tag: str | None = None
    view_tag: str | None = None
    view_group_tag: str | None = None
    group_tag: str | None = None
    on_index: bool = True
    on_view: bool = True
    on_create: bool = True
    on_edit: bool = True
    searchable: bool = True
    sortable: bool = True
    translation: bool = False
    rules: dict[str, list[str]] = Field(default_factory=dict)
    table_columns: list[TableColumnPublic] = Field(default_factory=list)
    search_types: list[SearchTypePublic] | None = None


SearchTypePublic.model_rebuild()
