"""Helpers that build standard responses and write them into a request context."""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from .context import RequestContext
from .response import (
    MSG_CREATED,
    MSG_RETRIEVED,
    MSG_SUCCESS,
    bad_request,
    conflict,
    created,
    deleted,
    error,
    forbidden,
    internal_server_error,
    list_response,
    no_content,
    not_found,
    paginated,
    success,
    unauthorized,
    updated,
    validation_error,
)
from .status import StatusCode

__all__ = [
    "json_response",
    "success_json",
    "created_json",
    "updated_json",
    "deleted_json",
    "no_content_json",
    "error_json",
    "bad_request_json",
    "unauthorized_json",
    "forbidden_json",
    "not_found_json",
    "conflict_json",
    "internal_server_error_json",
    "validation_error_json",
    "paginated_json",
    "list_json",
    "get_pagination_params",
    "get_pagination_params_with_defaults",
    "ok_json",
    "ok_with_data_json",
    "created_with_data_json",
    "abort_with_error",
    "abort_with_bad_request",
    "abort_with_unauthorized",
    "abort_with_forbidden",
    "abort_with_not_found",
    "abort_with_internal_server_error",
]

logger = logging.getLogger("apiresponse")

_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1
_MAX_LIMIT = 100


def json_response(ctx: RequestContext, status: int, payload: Any) -> None:
    """Write a JSON response."""
    ctx.json(status, payload)


def success_json(ctx: RequestContext, data: Any = None, message: str = "") -> None:
    """Write a 200 success response."""
    json_response(ctx, StatusCode.OK, success(data, message))


def created_json(ctx: RequestContext, data: Any = None, message: str = "") -> None:
    """Write a 201 created response."""
    json_response(ctx, StatusCode.CREATED, created(data, message))


def updated_json(ctx: RequestContext, data: Any = None, message: str = "") -> None:
    """Write a 200 updated response."""
    json_response(ctx, StatusCode.OK, updated(data, message))


def deleted_json(ctx: RequestContext, message: str = "") -> None:
    """Write a 200 deleted response."""
    json_response(ctx, StatusCode.OK, deleted(message))


def no_content_json(ctx: RequestContext, message: str = "") -> None:
    """Write a 204 response."""
    json_response(ctx, StatusCode.NO_CONTENT, no_content(message))


def error_json(
    ctx: RequestContext, code: int, message: str, err: BaseException | None = None
) -> None:
    """Write an error response, logging 5xx as errors and 4xx as warnings."""
    fields: dict[str, Any] = {
        "method": ctx.method,
        "path": ctx.path,
        "status": int(code),
        "message": message,
    }
    request_id = ctx.get_string("request_id")
    if request_id:
        fields["request_id"] = request_id
    if err is not None:
        fields["error"] = str(err)

    if code >= 500:
        logger.error("API error response", extra={"fields": fields})
    elif code >= 400:
        logger.warning("API error response", extra={"fields": fields})

    json_response(ctx, code, error(code, message, err))


def bad_request_json(
    ctx: RequestContext, message: str = "", err: BaseException | None = None
) -> None:
    """Write a 400 response."""
    json_response(ctx, StatusCode.BAD_REQUEST, bad_request(message, err))


def unauthorized_json(ctx: RequestContext, message: str = "") -> None:
    """Write a 401 response."""
    json_response(ctx, StatusCode.UNAUTHORIZED, unauthorized(message))


def forbidden_json(ctx: RequestContext, message: str = "") -> None:
    """Write a 403 response."""
    json_response(ctx, StatusCode.FORBIDDEN, forbidden(message))


def not_found_json(ctx: RequestContext, message: str = "") -> None:
    """Write a 404 response."""
    json_response(ctx, StatusCode.NOT_FOUND, not_found(message))


def conflict_json(
    ctx: RequestContext, message: str = "", err: BaseException | None = None
) -> None:
    """Write a 409 response."""
    json_response(ctx, StatusCode.CONFLICT, conflict(message, err))


def internal_server_error_json(
    ctx: RequestContext, message: str = "", err: BaseException | None = None
) -> None:
    """Write a 500 response."""
    json_response(ctx, StatusCode.INTERNAL_SERVER_ERROR, internal_server_error(message, err))


def validation_error_json(
    ctx: RequestContext, errors: Mapping[str, list[str]] | None, message: str = ""
) -> None:
    """Write a 400 validation error response."""
    json_response(ctx, StatusCode.BAD_REQUEST, validation_error(errors, message))


def paginated_json(
    ctx: RequestContext, data: Any, page: int, limit: int, total: int, message: str = ""
) -> None:
    """Write a 200 paginated response."""
    json_response(ctx, StatusCode.OK, paginated(data, page, limit, total, message))


def list_json(ctx: RequestContext, data: Any, count: int, message: str = "") -> None:
    """Write a 200 list response."""
    json_response(ctx, StatusCode.OK, list_response(data, count, message))


def _positive_int(text: str) -> int | None:
    if not _INT_PATTERN.fullmatch(text):
        return None
    value = int(text)
    if not _INT_MIN <= value <= _INT_MAX or value <= 0:
        return None
    return value


def get_pagination_params_with_defaults(
    ctx: RequestContext, default_page: int, default_limit: int
) -> tuple[int, int]:
    """Return (page, limit) from the query, falling back to the given defaults."""
    page = _positive_int(ctx.query("page")) or default_page
    limit = _positive_int(ctx.query("limit")) or default_limit
    return page, limit


def get_pagination_params(ctx: RequestContext) -> tuple[int, int]:
    """Return (page, limit) from the query, defaulting to 1 and 10, limit capped at 100."""
    page, limit = get_pagination_params_with_defaults(ctx, 1, 10)
    return page, min(limit, _MAX_LIMIT)


def ok_json(ctx: RequestContext) -> None:
    """Write a plain success response."""
    success_json(ctx, None, MSG_SUCCESS)


def ok_with_data_json(ctx: RequestContext, data: Any) -> None:
    """Write a success response carrying data."""
    success_json(ctx, data, MSG_RETRIEVED)


def created_with_data_json(ctx: RequestContext, data: Any) -> None:
    """Write a created response carrying data."""
    created_json(ctx, data, MSG_CREATED)


def abort_with_error(
    ctx: RequestContext, code: int, message: str, err: BaseException | None = None
) -> None:
    """Write an error response and abort the request."""
    error_json(ctx, code, message, err)
    ctx.abort()


def abort_with_bad_request(
    ctx: RequestContext, message: str = "", err: BaseException | None = None
) -> None:
    """Write a 400 response and abort the request."""
    bad_request_json(ctx, message, err)
    ctx.abort()


def abort_with_unauthorized(ctx: RequestContext, message: str = "") -> None:
    """Write a 401 response and abort the request."""
    unauthorized_json(ctx, message)
    ctx.abort()


def abort_with_forbidden(ctx: RequestContext, message: str = "") -> None:
    """Write a 403 response and abort the request."""
    forbidden_json(ctx, message)
    ctx.abort()


def abort_with_not_found(ctx: RequestContext, message: str = "") -> None:
    """Write a 404 response and abort the request."""
    not_found_json(ctx, message)
    ctx.abort()


def abort_with_internal_server_error(
    ctx: RequestContext, message: str = "", err: BaseException | None = None
) -> None:
    """Write a 500 response and abort the request."""
    internal_server_error_json(ctx, message, err)
    ctx.abort()