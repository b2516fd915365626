import json
import logging

import pytest

from apiresponse.context import RequestContext
from apiresponse.logged import (
    abort_with_error_and_log,
    abort_with_internal_server_error_and_log,
    bad_request_json_with_log,
    error_json_with_log,
    forbidden_json_with_log,
    internal_server_error_json_with_log,
    log_request,
    log_response,
    not_found_json_with_log,
    paginated_json_with_log,
    success_json_with_log,
    unauthorized_json_with_log,
    validation_error_json_with_log,
)


@pytest.fixture
def ctx():
    return RequestContext(
        method="POST",
        path="/items",
        client_ip="127.0.0.1",
        user_agent="test-agent",
    )


@pytest.fixture
def logs(caplog):
    caplog.set_level(logging.DEBUG, logger="apiresponse")
    return caplog


def _records(logs):
    return [r for r in logs.records if r.name == "apiresponse"]


def test_success_logs_info_and_writes_200(ctx, logs):
    ctx.set("request_id", "req-1")
    ctx.set("user_id", "user-1")
    success_json_with_log(ctx, {"id": 1}, "fine")
    assert ctx.status == 200
    assert ctx.payload["data"] == {"id": 1}
    assert ctx.payload["message"] == "fine"
    records = _records(logs)
    assert len(records) == 1
    record = records[0]
    assert record.levelno == logging.INFO
    assert record.getMessage() == "Success response"
    assert record.fields["request_id"] == "req-1"
    assert record.fields["user_id"] == "user-1"
    assert record.fields["status"] == 200
    assert record.fields["method"] == "POST"


def test_success_default_message_in_payload(ctx, logs):
    success_json_with_log(ctx, None, "")
    assert ctx.payload["message"] == "Success"
    assert "data" not in ctx.payload
    fields = _records(logs)[0].fields
    assert "request_id" not in fields
    assert "user_id" not in fields


@pytest.mark.parametrize(
    "code, level, text",
    [
        (500, logging.ERROR, "Server error response"),
        (503, logging.ERROR, "Server error response"),
        (404, logging.WARNING, "Client error response"),
        (400, logging.WARNING, "Client error response"),
        (302, logging.INFO, "Error response"),
    ],
)
def test_error_level_depends_on_code(ctx, logs, code, level, text):
    error_json_with_log(ctx, code, "oops", None)
    assert ctx.status == code
    records = _records(logs)
    assert len(records) == 1
    assert records[0].levelno == level
    assert records[0].getMessage() == text
    assert records[0].fields["ip"] == "127.0.0.1"
    assert "error" not in records[0].fields


def test_error_includes_error_text(ctx, logs):
    error_json_with_log(ctx, 500, "oops", ValueError("boom"))
    assert ctx.payload["error"] == "boom"
    assert _records(logs)[0].fields["error"] == "boom"


def test_bad_request(ctx, logs):
    bad_request_json_with_log(ctx, "bad input", ValueError("x"))
    assert ctx.status == 400
    assert ctx.payload["message"] == "bad input"
    assert ctx.payload["error"] == "x"
    assert _records(logs)[0].levelno == logging.WARNING


def test_unauthorized_logs_attempt_then_error(ctx, logs):
    ctx.set("request_id", "req-2")
    unauthorized_json_with_log(ctx, "nope")
    assert ctx.status == 401
    assert ctx.payload["message"] == "nope"
    records = _records(logs)
    assert [r.getMessage() for r in records] == [
        "Unauthorized access attempt",
        "Client error response",
    ]
    assert records[0].fields["user_agent"] == "test-agent"
    assert records[0].fields["request_id"] == "req-2"


def test_forbidden_logs_user(ctx, logs):
    ctx.set("user_id", "user-9")
    forbidden_json_with_log(ctx, "no access")
    assert ctx.status == 403
    records = _records(logs)
    assert records[0].getMessage() == "Forbidden access attempt"
    assert records[0].fields["user_id"] == "user-9"
    assert records[1].fields["status"] == 403


def test_not_found_logs_info_first(ctx, logs):
    not_found_json_with_log(ctx, "missing")
    assert ctx.status == 404
    records = _records(logs)
    assert records[0].getMessage() == "Resource not found"
    assert records[0].levelno == logging.INFO
    assert records[1].levelno == logging.WARNING


def test_internal_server_error_logs_twice_at_error(ctx, logs):
    internal_server_error_json_with_log(ctx, "down", RuntimeError("db"))
    assert ctx.status == 500
    assert ctx.payload["error"] == "db"
    records = _records(logs)
    assert [r.getMessage() for r in records] == [
        "Internal server error",
        "Server error response",
    ]
    assert all(r.levelno == logging.ERROR for r in records)
    assert records[0].fields["error"] == "db"


def test_validation_error(ctx, logs):
    errors = {"name": ["required"]}
    validation_error_json_with_log(ctx, errors, "")
    assert ctx.status == 400
    assert ctx.payload["errors"] == errors
    assert ctx.payload["message"] == "Validation failed"
    record = _records(logs)[0]
    assert record.getMessage() == "Validation error"
    assert record.fields["validation_errors"] == errors


def test_paginated(ctx, logs):
    paginated_json_with_log(ctx, [1, 2], 2, 5, 12, "")
    assert ctx.status == 200
    assert ctx.payload["pagination"]["page"] == 2
    assert ctx.payload["pagination"]["has_prev"] is True
    record = _records(logs)[0]
    assert record.getMessage() == "Paginated response"
    assert (record.fields["page"], record.fields["limit"], record.fields["total"]) == (2, 5, 12)


def test_abort_with_error_and_log(ctx, logs):
    abort_with_error_and_log(ctx, 409, "clash", None)
    assert ctx.aborted is True
    assert ctx.status == 409
    assert _records(logs)[0].levelno == logging.WARNING


def test_abort_with_internal_server_error_and_log(ctx, logs):
    abort_with_internal_server_error_and_log(ctx, "down", None)
    assert ctx.aborted is True
    assert ctx.status == 500
    assert json.loads(ctx.body)["message"] == "down"


def test_log_request_includes_query(logs):
    ctx = RequestContext(method="GET", path="/a", raw_query="page=2", client_ip="10.0.0.1")
    log_request(ctx)
    assert ctx.body is None
    assert ctx.aborted is False
    records = _records(logs)
    assert len(records) == 1
    record = records[0]
    assert record.getMessage() == "Incoming request"
    assert record.levelno == logging.INFO
    assert record.fields["query"] == "page=2"
    assert record.fields["ip"] == "10.0.0.1"
    assert record.fields["method"] == "GET"
    assert record.fields["path"] == "/a"


def test_log_request_without_query(ctx, logs):
    ctx.set("user_id", "user-3")
    log_request(ctx)
    assert ctx.body is None
    assert ctx.aborted is False
    records = _records(logs)
    assert len(records) == 1
    fields = records[0].fields
    assert "query" not in fields
    assert fields["user_agent"] == "test-agent"
    assert fields["user_id"] == "user-3"


def test_log_response_before_and_after_write(ctx, logs):
    log_response(ctx, None)
    success_json_with_log(ctx, {"k": "v"}, "")
    log_response(ctx, None)
    records = [r for r in _records(logs) if r.getMessage() == "Outgoing response"]
    assert records[0].fields["size"] == -1
    assert records[1].fields["size"] == len(ctx.body)
    assert records[1].fields["status"] == 200
    assert ctx.body is not None