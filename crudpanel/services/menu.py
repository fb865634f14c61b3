"""
Menu Rendering

Turns assembled MenuItem trees into the visible, ordered menu of one request.
"""

from crudpanel.helpers.menu_item import MenuContext, MenuItem
from crudpanel.models.contracts.menu import MenuItemPublic

DEFAULT_ORDER = 100


def build_menu(items: list[MenuItem], context: MenuContext) -> list[MenuItemPublic]:
    """
    Render visible menu items for a request.

    Hidden items (and their subtrees) are dropped, siblings are sorted by
    ``order`` (stable for equal orders, unset orders count as 100) and badges
    are resolved. An item is marked active when it or any visible descendant
    matches the request.

    Args:
        items: Top level menu items
        context: Current request context passed to predicates

    Returns:
        Serialized menu tree
    """
    return _render_visible([item for item in items if not item.is_hidden(context)], context)


def _sort_key(item: MenuItem) -> int:
    order = item.get_property("order")
    return order if order is not None else DEFAULT_ORDER


def _render_visible(items: list[MenuItem], context: MenuContext) -> list[MenuItemPublic]:
    return [_render(item, context) for item in sorted(items, key=_sort_key)]


def _render(item: MenuItem, context: MenuContext) -> MenuItemPublic:
    # get_children() already drops hidden children
    children = _render_visible(item.get_children(context), context)
    return MenuItemPublic(
        title=item.get_property("title"),
        url=item.get_property("url"),
        icon=item.get_property("icon"),
        target=item.get_property("target"),
        order=_sort_key(item),
        badge=item.get_badge_value(),
        badge_variant=item.get_property("badge_variant"),
        active=bool(item.is_active(context)) or any(child.active for child in children),
        children=children,
    )
