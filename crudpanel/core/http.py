"""
Request Adapter

Widgets run synchronously, so they never touch the Starlette request body
directly. CrudRequest is a plain snapshot of one inbound request: its path and
the merged query/body input. Build it once per request with
``await CrudRequest.from_request(request)`` and pass it to the widgets.
"""

import logging
from collections.abc import Mapping
from typing import Any

from starlette.requests import Request

logger = logging.getLogger(__name__)

_BODY_METHODS = {"POST", "PUT", "PATCH", "DELETE"}
_FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def is_blank(value: Any) -> bool:
    """None, whitespace-only strings and empty collections are blank; False and 0 are not."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


class CrudRequest:
    """Snapshot of one inbound request as seen by widgets."""

    def __init__(self, data: Mapping[str, Any] | None = None, path: str = "/"):
        self.path = path
        self._data: dict[str, Any] = dict(data or {})

    def input(self, name: str, default: Any = None) -> Any:
        """Value of a named field, or default when it was not sent."""
        return self._data.get(name, default)

    def has(self, name: str) -> bool:
        """True when the field was sent, even if empty."""
        return name in self._data

    def filled(self, name: str) -> bool:
        """True when the field was sent with a non-blank value."""
        return not is_blank(self._data.get(name))

    def all(self) -> dict[str, Any]:
        return dict(self._data)

    def merge(self, values: Mapping[str, Any]) -> "CrudRequest":
        """Overwrite input values, used by widgets normalizing their field."""
        self._data.update(values)
        return self

    @classmethod
    async def from_request(cls, request: Request) -> "CrudRequest":
        """
        Read query parameters and the JSON or form body of a Starlette request.

        Body values win over query parameters with the same name. Repeated
        form keys become lists.

        Args:
            request: Incoming Starlette/FastAPI request

        Returns:
            CrudRequest snapshot
        """
        data: dict[str, Any] = dict(request.query_params)

        if request.method in _BODY_METHODS:
            content_type = request.headers.get("content-type", "")
            if content_type.startswith("application/json"):
                body = await request.json()
                if isinstance(body, dict):
                    data.update(body)
                else:
                    logger.debug(f"Ignoring non-object JSON body on {request.url.path}")
            elif content_type.startswith(_FORM_CONTENT_TYPES):
                form = await request.form()
                for key in form.keys():
                    values = form.getlist(key)
                    data[key] = values if len(values) > 1 else values[0]

        return cls(data, path=request.url.path)

    def __repr__(self) -> str:
        return f"CrudRequest(path={self.path!r}, fields={sorted(self._data)!r})"
