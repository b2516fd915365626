"""Response helpers that also log what they send and why."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from .context import RequestContext
from .handlers import json_response
from .response import error, paginated, success, validation_error
from .status import StatusCode

__all__ = [
    "success_json_with_log",
    "error_json_with_log",
    "bad_request_json_with_log",
    "unauthorized_json_with_log",
    "forbidden_json_with_log",
    "not_found_json_with_log",
    "internal_server_error_json_with_log",
    "validation_error_json_with_log",
    "paginated_json_with_log",
    "abort_with_error_and_log",
    "abort_with_internal_server_error_and_log",
    "log_request",
    "log_response",
]

logger = logging.getLogger("apiresponse")


def _request_fields(
    ctx: RequestContext, *, ip: bool = False, user_agent: bool = False
) -> dict[str, Any]:
    fields: dict[str, Any] = {"method": ctx.method, "path": ctx.path}
    if ip:
        fields["ip"] = ctx.client_ip
    if user_agent:
        fields["user_agent"] = ctx.user_agent
    return fields


def _add_request_id(ctx: RequestContext, fields: dict[str, Any]) -> None:
    request_id = ctx.get_string("request_id")
    if request_id:
        fields["request_id"] = request_id


def _add_user_id(ctx: RequestContext, fields: dict[str, Any]) -> None:
    user_id = ctx.get_string("user_id")
    if user_id:
        fields["user_id"] = user_id


def _log(level: int, message: str, fields: dict[str, Any]) -> None:
    logger.log(level, message, extra={"fields": fields})


def success_json_with_log(ctx: RequestContext, data: Any = None, message: str = "") -> None:
    """Write a 200 success response and log it."""
    payload = success(data, message)
    fields = _request_fields(ctx)
    fields["status"] = int(StatusCode.OK)
    fields["message"] = message
    _add_request_id(ctx, fields)
    _add_user_id(ctx, fields)
    _log(logging.INFO, "Success response", fields)
    json_response(ctx, StatusCode.OK, payload)


def error_json_with_log(
    ctx: RequestContext, code: int, message: str, err: BaseException | None = None
) -> None:
    """Write an error response, logging at a level chosen by the code."""
    payload = error(code, message, err)
    fields = _request_fields(ctx, ip=True)
    fields["status"] = int(code)
    fields["message"] = message
    _add_request_id(ctx, fields)
    _add_user_id(ctx, fields)
    if err is not None:
        fields["error"] = str(err)

    if code >= 500:
        _log(logging.ERROR, "Server error response", fields)
    elif code >= 400:
        _log(logging.WARNING, "Client error response", fields)
    else:
        _log(logging.INFO, "Error response", fields)

    json_response(ctx, code, payload)


def bad_request_json_with_log(
    ctx: RequestContext, message: str = "", err: BaseException | None = None
) -> None:
    """Write a 400 response and log it."""
    error_json_with_log(ctx, StatusCode.BAD_REQUEST, message, err)


def unauthorized_json_with_log(ctx: RequestContext, message: str = "") -> None:
    """Log an unauthorized access attempt and write a 401 response."""
    fields = _request_fields(ctx, ip=True, user_agent=True)
    _add_request_id(ctx, fields)
    _log(logging.WARNING, "Unauthorized access attempt", fields)
    error_json_with_log(ctx, StatusCode.UNAUTHORIZED, message)


def forbidden_json_with_log(ctx: RequestContext, message: str = "") -> None:
    """Log a forbidden access attempt and write a 403 response."""
    fields = _request_fields(ctx, ip=True)
    _add_request_id(ctx, fields)
    _add_user_id(ctx, fields)
    _log(logging.WARNING, "Forbidden access attempt", fields)
    error_json_with_log(ctx, StatusCode.FORBIDDEN, message)


def not_found_json_with_log(ctx: RequestContext, message: str = "") -> None:
    """Log a missing resource and write a 404 response."""
    fields = _request_fields(ctx, ip=True)
    _add_request_id(ctx, fields)
    _log(logging.INFO, "Resource not found", fields)
    error_json_with_log(ctx, StatusCode.NOT_FOUND, message)


def internal_server_error_json_with_log(
    ctx: RequestContext, message: str = "", err: BaseException | None = None
) -> None:
    """Log an internal error and write a 500 response."""
    fields = _request_fields(ctx, ip=True, user_agent=True)
    _add_request_id(ctx, fields)
    _add_user_id(ctx, fields)
    if err is not None:
        fields["error"] = str(err)
    _log(logging.ERROR, "Internal server error", fields)
    error_json_with_log(ctx, StatusCode.INTERNAL_SERVER_ERROR, message, err)


def validation_error_json_with_log(
    ctx: RequestContext, errors: Mapping[str, list[str]] | None, message: str = ""
) -> None:
    """Write a 400 validation error response and log the failures."""
    payload = validation_error(errors, message)
    fields = _request_fields(ctx, ip=True)
    fields["validation_errors"] = None if errors is None else dict(errors)
    _add_request_id(ctx, fields)
    _log(logging.WARNING, "Validation error", fields)
    json_response(ctx, StatusCode.BAD_REQUEST, payload)


def paginated_json_with_log(
    ctx: RequestContext, data: Any, page: int, limit: int, total: int, message: str = ""
) -> None:
    """Write a 200 paginated response and log the page requested."""
    payload = paginated(data, page, limit, total, message)
    fields = _request_fields(ctx)
    fields["page"] = page
    fields["limit"] = limit
    fields["total"] = total
    _add_request_id(ctx, fields)
    _log(logging.INFO, "Paginated response", fields)
    json_response(ctx, StatusCode.OK, payload)


def abort_with_error_and_log(
    ctx: RequestContext, code: int, message: str, err: BaseException | None = None
) -> None:
    """Write and log an error response, then abort the request."""
    error_json_with_log(ctx, code, message, err)
    ctx.abort()


def abort_with_internal_server_error_and_log(
    ctx: RequestContext, message: str = "", err: BaseException | None = None
) -> None:
    """Write and log a 500 response, then abort the request."""
    internal_server_error_json_with_log(ctx, message, err)
    ctx.abort()


def log_request(ctx: RequestContext) -> None:
    """Log the details of an incoming request."""
    fields = _request_fields(ctx, ip=True, user_agent=True)
    _add_request_id(ctx, fields)
    _add_user_id(ctx, fields)
    if ctx.raw_query:
        fields["query"] = ctx.raw_query
    _log(logging.INFO, "Incoming request", fields)


def log_response(ctx: RequestContext, response_data: Any = None) -> None:
    """Log the status and size of the response written for a request."""
    fields = _request_fields(ctx)
    fields["status"] = ctx.status
    fields["size"] = ctx.size
    _add_request_id(ctx, fields)
    _log(logging.INFO, "Outgoing response", fields)