"""Standard API response payloads and the builders that create them."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Mapping

from .status import StatusCode, is_error, is_success

__all__ = [
    "MSG_SUCCESS",
    "MSG_CREATED",
    "MSG_UPDATED",
    "MSG_DELETED",
    "MSG_RETRIEVED",
    "MSG_BAD_REQUEST",
    "MSG_UNAUTHORIZED",
    "MSG_FORBIDDEN",
    "MSG_NOT_FOUND",
    "MSG_CONFLICT",
    "MSG_VALIDATION_FAILED",
    "MSG_INTERNAL_SERVER_ERROR",
    "MSG_SERVICE_UNAVAILABLE",
    "Response",
    "ErrorResponse",
    "ValidationErrorResponse",
    "Pagination",
    "PaginatedResponse",
    "ListResponse",
    "success",
    "created",
    "updated",
    "deleted",
    "no_content",
    "list_response",
    "error",
    "bad_request",
    "unauthorized",
    "forbidden",
    "not_found",
    "conflict",
    "internal_server_error",
    "validation_error",
    "new_pagination",
    "paginated",
    "get_offset",
    "ok",
    "ok_with_data",
    "created_with_data",
]

MSG_SUCCESS = "Success"
MSG_CREATED = "Resource created successfully"
MSG_UPDATED = "Resource updated successfully"
MSG_DELETED = "Resource deleted successfully"
MSG_RETRIEVED = "Data retrieved successfully"
MSG_BAD_REQUEST = "Bad request"
MSG_UNAUTHORIZED = "Unauthorized access"
MSG_FORBIDDEN = "Access forbidden"
MSG_NOT_FOUND = "Resource not found"
MSG_CONFLICT = "Resource conflict"
MSG_VALIDATION_FAILED = "Validation failed"
MSG_INTERNAL_SERVER_ERROR = "Internal server error"
MSG_SERVICE_UNAVAILABLE = "Service temporarily unavailable"

_NO_CONTENT_MESSAGE = "No content"


def _now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True)
class Response:
    """The standard API response."""

    code: int
    message: str
    data: Any = None
    timestamp: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form; ``data`` is left out when it is None."""
        result: dict[str, Any] = {"code": int(self.code), "message": self.message}
        if self.data is not None:
            result["data"] = self.data
        result["timestamp"] = self.timestamp.isoformat()
        return result

    def is_successful(self) -> bool:
        """Return True when the code is a 2xx status."""
        return is_success(self.code)

    def is_error(self) -> bool:
        """Return True when the code is a 4xx or 5xx status."""
        return is_error(self.code)


@dataclass(frozen=True)
class ErrorResponse:
    """An error response with optional error text and details."""

    code: int
    message: str
    error: str = ""
    details: Mapping[str, Any] | None = None
    timestamp: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form; empty ``error`` and ``details`` are left out."""
        result: dict[str, Any] = {"code": int(self.code), "message": self.message}
        if self.error:
            result["error"] = self.error
        if self.details:
            result["details"] = dict(self.details)
        result["timestamp"] = self.timestamp.isoformat()
        return result

    def with_details(self, details: Mapping[str, Any] | None) -> ErrorResponse:
        """Return a copy carrying the given details."""
        return dataclasses.replace(self, details=details)

    def with_error(self, err: BaseException | None) -> ErrorResponse:
        """Return a copy carrying the text of ``err``; unchanged when it is None."""
        if err is None:
            return dataclasses.replace(self)
        return dataclasses.replace(self, error=str(err))


@dataclass(frozen=True)
class ValidationErrorResponse:
    """A response listing validation failures per field."""

    code: int
    message: str
    errors: Mapping[str, list[str]] | None
    timestamp: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form."""
        return {
            "code": int(self.code),
            "message": self.message,
            "errors": None if self.errors is None else {k: list(v) for k, v in self.errors.items()},
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class Pagination:
    """Pagination metadata."""

    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form."""
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "total_pages": self.total_pages,
            "has_next": self.has_next,
            "has_prev": self.has_prev,
        }


@dataclass(frozen=True)
class PaginatedResponse:
    """A response holding one page of data and its pagination metadata."""

    code: int
    message: str
    data: Any
    pagination: Pagination
    timestamp: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form."""
        return {
            "code": int(self.code),
            "message": self.message,
            "data": self.data,
            "pagination": self.pagination.to_dict(),
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass(frozen=True)
class ListResponse:
    """A list response with an item count and no pagination."""

    code: int
    message: str
    data: Any
    count: int
    timestamp: datetime = field(default_factory=_now)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form."""
        return {
            "code": int(self.code),
            "message": self.message,
            "data": self.data,
            "count": self.count,
            "timestamp": self.timestamp.isoformat(),
        }


def success(data: Any = None, message: str = "") -> Response:
    """Build a 200 response with data."""
    return Response(StatusCode.OK, message or MSG_SUCCESS, data)


def created(data: Any = None, message: str = "") -> Response:
    """Build a 201 response for a created resource."""
    return Response(StatusCode.CREATED, message or MSG_CREATED, data)


def updated(data: Any = None, message: str = "") -> Response:
    """Build a 200 response for an updated resource."""
    return Response(StatusCode.OK, message or MSG_UPDATED, data)


def deleted(message: str = "") -> Response:
    """Build a 200 response for a deleted resource."""
    return Response(StatusCode.OK, message or MSG_DELETED)


def no_content(message: str = "") -> Response:
    """Build a 204 response."""
    return Response(StatusCode.NO_CONTENT, message or _NO_CONTENT_MESSAGE)


def list_response(data: Any, count: int, message: str = "") -> ListResponse:
    """Build a 200 list response without pagination."""
    return ListResponse(StatusCode.OK, message or MSG_RETRIEVED, data, count)


def error(code: int, message: str, err: BaseException | None = None) -> ErrorResponse:
    """Build an error response with the given code."""
    return ErrorResponse(code, message, "" if err is None else str(err))


def bad_request(message: str = "", err: BaseException | None = None) -> ErrorResponse:
    """Build a 400 response."""
    return error(StatusCode.BAD_REQUEST, message or MSG_BAD_REQUEST, err)


def unauthorized(message: str = "") -> ErrorResponse:
    """Build a 401 response."""
    return error(StatusCode.UNAUTHORIZED, message or MSG_UNAUTHORIZED)


def forbidden(message: str = "") -> ErrorResponse:
    """Build a 403 response."""
    return error(StatusCode.FORBIDDEN, message or MSG_FORBIDDEN)


def not_found(message: str = "") -> ErrorResponse:
    """Build a 404 response."""
    return error(StatusCode.NOT_FOUND, message or MSG_NOT_FOUND)


def conflict(message: str = "", err: BaseException | None = None) -> ErrorResponse:
    """Build a 409 response."""
    return error(StatusCode.CONFLICT, message or MSG_CONFLICT, err)


def internal_server_error(message: str = "", err: BaseException | None = None) -> ErrorResponse:
    """Build a 500 response."""
    return error(StatusCode.INTERNAL_SERVER_ERROR, message or MSG_INTERNAL_SERVER_ERROR, err)


def validation_error(
    errors: Mapping[str, list[str]] | None, message: str = ""
) -> ValidationErrorResponse:
    """Build a 400 response listing validation failures."""
    return ValidationErrorResponse(
        StatusCode.BAD_REQUEST, message or MSG_VALIDATION_FAILED, errors
    )


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


def new_pagination(page: int, limit: int, total: int) -> Pagination:
    """Build pagination metadata, clamping page to 1 and limit to 10 when below 1."""
    if page < 1:
        page = 1
    if limit < 1:
        limit = 10
    total_pages = max(_trunc_div(total + limit - 1, limit), 1)
    return Pagination(
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )


def paginated(
    data: Any, page: int, limit: int, total: int, message: str = ""
) -> PaginatedResponse:
    """Build a 200 response holding one page of data."""
    return PaginatedResponse(
        StatusCode.OK, message or MSG_RETRIEVED, data, new_pagination(page, limit, total)
    )


def get_offset(page: int, limit: int) -> int:
    """Return the row offset of a page for database queries."""
    if page < 1:
        page = 1
    return (page - 1) * limit


def ok() -> Response:
    """Build a plain success response."""
    return success(None, MSG_SUCCESS)


def ok_with_data(data: Any) -> Response:
    """Build a success response carrying data."""
    return success(data, MSG_RETRIEVED)


def created_with_data(data: Any) -> Response:
    """Build a created response carrying data."""
    return created(data, MSG_CREATED)