"""A framework-neutral request context that handlers write responses into."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs

__all__ = ["RequestContext"]

_NO_BODY_STATUSES = frozenset({204, 304})


def _jsonable(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return value


def _default(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return str(value)


def _body_allowed(status: int) -> bool:
    return not (100 <= status < 200 or status in _NO_BODY_STATUSES)


@dataclass
class RequestContext:
    """The request being served and the response written for it."""

    method: str = "GET"
    path: str = "/"
    raw_query: str = ""
    client_ip: str = ""
    user_agent: str = ""
    values: dict[str, Any] = field(default_factory=dict)
    status: int = 200
    payload: Any = None
    body: bytes | None = None
    aborted: bool = False

    def query(self, key: str) -> str:
        """Return the first value of a query parameter, or "" when absent."""
        found = parse_qs(self.raw_query, keep_blank_values=True).get(key)
        return found[0] if found else ""

    def get_string(self, key: str) -> str:
        """Return a stored value if it is a string, otherwise ""."""
        value = self.values.get(key)
        return value if isinstance(value, str) else ""

    def set(self, key: str, value: Any) -> None:
        """Store a value on the context."""
        self.values[key] = value

    def json(self, status: int, payload: Any) -> None:
        """Write ``payload`` as the JSON response with the given status."""
        self.status = int(status)
        self.payload = _jsonable(payload)
        if _body_allowed(self.status):
            self.body = json.dumps(self.payload, default=_default).encode("utf-8")
        else:
            self.body = b""

    def abort(self) -> None:
        """Stop further handlers from running for this request."""
        self.aborted = True

    @property
    def size(self) -> int:
        """Bytes written to the response body, or -1 when nothing was written."""
        return -1 if self.body is None else len(self.body)

    @property
    def written(self) -> bool:
        """True once a response has been written."""
        return self.body is not None