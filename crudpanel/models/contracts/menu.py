"""
Menu contract models.
"""

from typing import Any

from pydantic import BaseModel, Field


class MenuItemPublic(BaseModel):
    """Visible menu entry as rendered for the current request"""
    title: str
    url: str | None = None
    icon: str | None = None
    target: str | None = None
    order: int = 100
    badge: Any = None
    badge_variant: str = "danger"
    active: bool = Field(default=False, description="Item or one of its children matches the request path")
    children: list["MenuItemPublic"] = Field(default_factory=list)
