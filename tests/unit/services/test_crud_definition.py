"""
Unit tests for CrudDefinition.

Drives a small user resource through the store, response, search and order
pipelines with a mocked session.
"""

from unittest.mock import MagicMock, call

import pytest
from sqlalchemy import select

from crudpanel.core.exceptions import WidgetValidationError
from crudpanel.core.security import verify_password
from crudpanel.models.contracts import WidgetPublic
from crudpanel.services import CrudDefinition
from crudpanel.widgets import PasswordWidget, TextWidget
from tests.helpers.factories import compile_sql, make_request
from tests.helpers.models import User


@pytest.fixture
def definition():
    return CrudDefinition(
        [
            TextWidget.create("name").required().rules("max:20"),
            TextWidget.create("email").required().rules("email"),
            PasswordWidget.create("password").create_rules("required|min:8"),
        ]
    )


@pytest.fixture
def mock_session():
    session = MagicMock()
    session.add = MagicMock()
    session.flush = MagicMock()
    return session


class TestCrudDefinitionSetup:
    """Tests for construction and widget lookup."""

    def test_post_init_runs_for_every_widget_before_search_widgets(self):
        first = TextWidget.create("name")
        second = TextWidget.create("email")
        manager = MagicMock()
        first.post_init = manager.first_post_init
        second.post_init = manager.second_post_init
        first.post_init_search_widgets = manager.first_search
        second.post_init_search_widgets = manager.second_search

        CrudDefinition([first, second])

        assert manager.mock_calls == [
            call.first_post_init(),
            call.second_post_init(),
            call.first_search(),
            call.second_search(),
        ]

    def test_get_widget(self, definition):
        assert definition.get_widget("email").get_property("name") == "email"
        assert definition.get_widget("missing") is None

    def test_form_widgets_follow_flags(self):
        definition = CrudDefinition(
            [TextWidget.create("name"), TextWidget.create("slug").no_edit(), TextWidget.create("id").read_only()]
        )

        assert [w.get_property("name") for w in definition.form_widgets("create")] == ["name", "slug"]
        assert [w.get_property("name") for w in definition.form_widgets("edit")] == ["name"]

    def test_form_widgets_rejects_unknown_type(self, definition):
        with pytest.raises(ValueError, match="Invalid form type"):
            definition.form_widgets("delete")

    def test_table_columns_skip_password(self, definition):
        assert [c.get_property("name") for c in definition.table_columns()] == ["name", "email"]

    def test_describe(self, definition):
        described = definition.describe()

        assert all(isinstance(widget, WidgetPublic) for widget in described)
        assert described[0].rules == {"create": ["required", "max:20"], "edit": ["required", "max:20"]}
        assert described[0].search_types[2].type == "equal"
        assert described[2].search_types is None
        assert described[2].model_extra["type"] == "password"


class TestCrudDefinitionStore:
    """Tests for the store pipeline."""

    def test_validation_rules_per_type(self, definition):
        request = make_request()

        assert definition.validation_rules(request, "create")["password"] == ["required", "min:8"]
        assert definition.validation_rules(request, "edit")["password"] == []
        assert definition.validation_attributes(request, "create")["email.*"] == "Email"

    def test_store_create(self, definition, mock_session):
        request = make_request(name="Alice", email="alice@example.com", password="long-password")
        user = User()

        validated = definition.store(request, user, "create", session=mock_session)

        assert validated["name"] == "Alice"
        assert user.name == "Alice"
        assert user.email == "alice@example.com"
        assert verify_password("long-password", user.password)
        mock_session.add.assert_called_once_with(user)
        mock_session.flush.assert_called_once()

    def test_store_edit_without_password_keeps_hash(self, definition, mock_session):
        request = make_request(name="Alice", email="alice@example.com", password="")
        user = User(password="old-hash")

        definition.store(request, user, "edit", session=mock_session)

        assert user.password == "old-hash"

    def test_validation_failure_stops_before_store(self, definition, mock_session):
        request = make_request(name="x" * 30, email="bad", password="short")
        user = User()

        with pytest.raises(WidgetValidationError) as exc_info:
            definition.store(request, user, "create", session=mock_session)

        assert set(exc_info.value.errors) == {"name", "email", "password"}
        assert user.name is None
        mock_session.add.assert_not_called()

    def test_hook_order(self, mock_session):
        manager = MagicMock()
        widget = (
            TextWidget.create("name")
            .custom_modify_request(manager.modify_request)
            .custom_pre_store(manager.pre_store)
            .custom_store(manager.store)
            .custom_post_store(manager.post_store)
        )
        mock_session.flush = manager.flush
        request = make_request(name="Alice")
        user = User()

        CrudDefinition([widget]).store(request, user, "create", session=mock_session)

        assert manager.mock_calls == [
            call.modify_request(request, user),
            call.pre_store(request, user),
            call.store(request, user),
            call.flush(),
            call.post_store(request, user),
        ]

    def test_modify_request_runs_before_validation(self, mock_session):
        widget = TextWidget.create("name").required().custom_modify_request(
            lambda request, item: request.merge({"name": request.input("name", "").strip() or "Anonymous"})
        )
        user = User()

        CrudDefinition([widget]).store(make_request(name="   "), user, "create", session=mock_session)

        assert user.name == "Anonymous"

    def test_store_without_session(self, definition):
        user = User()

        definition.store(
            make_request(name="Alice", email="alice@example.com", password="long-password"), user, "create"
        )

        assert user.name == "Alice"


class TestCrudDefinitionResponse:
    """Tests for response building."""

    def test_index_response_skips_password(self, definition):
        user = User(name="Alice", email="alice@example.com", password="hash")

        assert definition.response(user) == {"name": "Alice", "email": "alice@example.com"}

    def test_view_response_uses_on_view(self):
        definition = CrudDefinition([TextWidget.create("name"), TextWidget.create("email").on_view(False)])
        user = User(name="Alice", email="alice@example.com")

        assert definition.response(user, view=True) == {"name": "Alice"}


class TestCrudDefinitionQuery:
    """Tests for search and order."""

    def test_global_search_or_combines_searchable_widgets(self, definition):
        sql = compile_sql(definition.search(select(User), search="ali"))

        assert "WHERE users.name ILIKE '%ali%' OR users.email ILIKE '%ali%'" in sql
        assert "password" not in sql.split("WHERE")[1]

    def test_empty_global_search_is_noop(self, definition):
        query = select(User)

        assert definition.search(query, search="") is query
        assert definition.search(query) is query

    def test_filters_and_combine(self, definition):
        sql = compile_sql(
            definition.search(
                select(User),
                filters={"name": ("equal", "alice"), "email": ("empty", None), "nope": ("equal", "x")},
            )
        )

        assert "users.name ILIKE 'alice' AND (users.email IS NULL OR users.email = '')" in sql

    def test_order_by_known_column(self, definition):
        sql = compile_sql(definition.order(select(User), "email", "desc"))

        assert "ORDER BY users.email DESC" in sql

    def test_order_by_unknown_column_is_noop(self, definition):
        query = select(User)

        assert definition.order(query, "password", "asc") is query
        assert definition.order(query, "missing") is query
