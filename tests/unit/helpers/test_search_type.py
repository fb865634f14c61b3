"""
Unit tests for SearchType and TableColumn.
"""

from unittest.mock import MagicMock

from crudpanel.helpers import SearchType, TableColumn
from crudpanel.widgets import TextWidget


class TestSearchType:
    """Tests for SearchType."""

    def test_create(self):
        search_type = SearchType.create("equal", "Equal")

        assert search_type.type == "equal"
        assert search_type.get_property("title") == "Equal"
        assert search_type.get_widgets() == []
        assert not search_type.requires_value()

    def test_title_defaults_to_type(self):
        assert SearchType.create("between").get_property("title") == "between"

    def test_add_widgets_keeps_order(self):
        first = TextWidget.create("from")
        second = TextWidget.create("to")

        search_type = SearchType.create("between").add_widget(first).add_widgets([second])

        assert search_type.get_widgets() == [first, second]
        assert search_type.requires_value()

    def test_get_widgets_returns_copy(self):
        search_type = SearchType.create("equal").add_widget(TextWidget.create("search"))

        search_type.get_widgets().clear()

        assert len(search_type.get_widgets()) == 1

    def test_post_init_widgets(self):
        widget = MagicMock()

        SearchType.create("equal").add_widget(widget).post_init_widgets()

        widget.post_init.assert_called_once_with()

    def test_to_dict(self):
        data = SearchType.create("empty", "Is empty").to_dict()

        assert data == {"type": "empty", "title": "Is empty", "widgets": []}


class TestTableColumn:
    """Tests for TableColumn."""

    def test_create_and_chain(self):
        column = TableColumn.create("name").title("Name").sortable(False).tag("badge-view")

        assert column.to_dict() == {
            "name": "name",
            "title": "Name",
            "sortable": False,
            "tag": "badge-view",
        }

    def test_defaults(self):
        column = TableColumn.create()

        assert column.get_property("name") is None
        assert column.get_property("sortable") is True
        assert column.get_property("tag") == "simple-view"
