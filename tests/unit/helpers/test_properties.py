"""
Unit tests for PropertyHolder and the fluent setter descriptors.
"""

import pytest

from crudpanel.helpers.properties import Fluent, FluentFlag, PropertyHolder


class Card(PropertyHolder):
    defaults = {"color": "blue", "size": {"width": 1, "height": 2}}
    getters = ["area"]

    color = Fluent()
    css_class = Fluent("class")
    visible = FluentFlag()

    def get_area(self):
        size = self.get_property("size")
        return size["width"] * size["height"]


class WideCard(Card):
    defaults = {"size": {"width": 3, "height": 2}}


class TestPropertyHolder:
    """Tests for property storage."""

    def test_defaults_and_overrides(self):
        card = Card({"color": "red"})

        assert card.get_property("color") == "red"
        assert card.get_property("size") == {"width": 1, "height": 2}

    def test_subclass_defaults_merge_over_parent(self):
        card = WideCard()

        assert card.get_property("color") == "blue"
        assert card.get_property("size.width") == 3

    def test_defaults_are_not_shared_between_instances(self):
        first = Card()
        second = Card()

        first.get_property("size")["width"] = 10

        assert second.get_property("size.width") == 1

    def test_dotted_lookup(self):
        card = Card()

        assert card.get_property("size.height") == 2
        assert card.get_property("size.depth") is None
        assert card.get_property("color.shade", "none") == "none"

    def test_set_and_has(self):
        card = Card()

        assert card.set_property("label", "Hi") is card
        assert card.has_property("label")
        assert not card.has_property("missing")

    def test_properties_view_is_read_only(self):
        card = Card()

        assert dict(card.properties)["color"] == "blue"
        with pytest.raises(TypeError):
            card.properties["color"] = "red"
        assert card.get_property("color") == "blue"

    def test_fluent_setters(self):
        card = Card()

        assert card.color("green").css_class("big").visible() is card
        assert card.get_property("color") == "green"
        assert card.get_property("class") == "big"
        assert card.get_property("visible") is True
        assert card.visible(False).get_property("visible") is False

    def test_descriptor_on_class_returns_descriptor(self):
        assert isinstance(Card.color, Fluent)
        assert Card.css_class.key == "class"

    def test_to_dict(self):
        card = Card().set_property("on_click", lambda: None).set_property("child", WideCard())

        data = card.to_dict()

        assert data["color"] == "blue"
        assert data["area"] == 2
        assert data["child"]["area"] == 6
        assert "on_click" not in data
