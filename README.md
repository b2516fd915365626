# apiresponse

A small library for building consistent JSON API responses. It has no third-party dependencies.

It provides:

- response envelopes: success, error, validation, paginated and list;
- pagination metadata and database offsets;
- classification of HTTP status codes;
- a framework-neutral `RequestContext`, with helpers that write responses into it, abort it, and log through the standard `logging` module.

## Installation

```
pip install apiresponse
```

To run the test suite:

```
pip install "apiresponse[test]"
pytest
```

## Building responses (`apiresponse.response`)

```python
from apiresponse.response import success, not_found, paginated, get_offset

resp = success({"id": 1}, "")
resp.code          # 200
resp.message       # "Success"
resp.to_dict()     # {"code": 200, "message": "Success", "data": {"id": 1}, "timestamp": "..."}

err = not_found("")
err.message        # "Resource not found"
err = err.with_details({"id": 42})

page = paginated(["a", "b"], page=2, limit=10, total=35, message="")
page.pagination.total_pages   # 4
page.pagination.has_next      # True
page.pagination.has_prev      # True

get_offset(3, 20)  # 40
```

The response classes are frozen dataclasses:

- `Response`
- `ErrorResponse`
- `ValidationErrorResponse`
- `PaginatedResponse`
- `ListResponse`
- `Pagination`

Each has a `to_dict()` method that returns a JSON-ready dict. The timestamp is given as an ISO 8601 string.

`Response.to_dict()` leaves out `data` when it is `None`. `ErrorResponse.to_dict()` leaves out an empty `error` or `details`.

`Response` has `is_successful()` and `is_error()`.

`ErrorResponse.with_details(details)` returns a new copy with the given details. `ErrorResponse.with_error(err)` returns a new copy with the text of the given exception; when `err` is `None` the copy keeps the old text.

Builders:

- `success`, `created`, `updated`, `deleted`, `no_content`
- `list_response`
- `error`, `bad_request`, `unauthorized`, `forbidden`, `not_found`, `conflict`, `internal_server_error`
- `validation_error`
- `paginated`

An empty message falls back to a default. For example, `created` uses `"Resource created successfully"` and `validation_error` uses `"Validation failed"`. The defaults are exported as the `MSG_*` constants.

The shortcuts `ok()`, `ok_with_data(data)` and `created_with_data(data)` use the predefined messages.

`new_pagination(page, limit, total)` treats a page below 1 as 1 and a limit below 1 as 10. It always reports at least one total page.

`get_offset(page, limit)` treats a page below 1 as 1.

## Status codes (`apiresponse.status`)

```python
from apiresponse.status import StatusCode, is_client_error, is_error

StatusCode.NOT_FOUND          # 404
is_client_error(404)          # True
is_error(503)                 # True
```

The module also has `is_informational`, `is_success`, `is_redirection` and `is_server_error`.

## Request context (`apiresponse.context`)

`RequestContext` is a dataclass describing one request. It holds:

- the request: `method`, `path`, `raw_query`, `client_ip` and `user_agent`;
- `values`, a dict of values stored by middleware.

It has these methods:

- `query(key)` returns the first value of a query parameter, or `""` when it is absent.
- `set(key, value)` stores a value.
- `get_string(key)` returns a stored value when it is a string, and `""` otherwise.
- `json(status, payload)` records a response. It stores `status` and `payload` (using the object's `to_dict()` if it has one) and sets `body` to the encoded JSON. For 1xx, 204 and 304 statuses the body is empty.
- `abort()` sets `aborted` to `True`.

It has two properties:

- `size` is the body length, or -1 when nothing has been written.
- `written` tells whether a response has been written.

## Handlers (`apiresponse.handlers`)

Helpers that build a response and write it to a context:

- `json_response`
- `success_json`, `created_json`, `updated_json`, `deleted_json`, `no_content_json`
- `error_json`
- `bad_request_json`, `unauthorized_json`, `forbidden_json`, `not_found_json`, `conflict_json`, `internal_server_error_json`
- `validation_error_json`, `paginated_json`, `list_json`
- `ok_json`, `ok_with_data_json`, `created_with_data_json`

`error_json` is the only one of these that logs. It logs 5xx codes as errors and 4xx codes as warnings.

The `abort_with_*` helpers write the matching response and then abort the context:

- `abort_with_error`
- `abort_with_bad_request`
- `abort_with_unauthorized`
- `abort_with_forbidden`
- `abort_with_not_found`
- `abort_with_internal_server_error`

`get_pagination_params(ctx)` reads `page` and `limit` from the query. It defaults to 1 and 10 and caps `limit` at 100. A value that is missing, not an integer, or not positive falls back to the default.

`get_pagination_params_with_defaults(ctx, default_page, default_limit)` works the same way with your own defaults and no cap.

## Logged variants (`apiresponse.logged`)

These helpers write the same responses as the handlers and also log request details such as method, path, client IP, request ID and user ID:

- `success_json_with_log`
- `error_json_with_log`
- `bad_request_json_with_log`
- `unauthorized_json_with_log`
- `forbidden_json_with_log`
- `not_found_json_with_log`
- `internal_server_error_json_with_log`
- `validation_error_json_with_log`
- `paginated_json_with_log`
- `abort_with_error_and_log`
- `abort_with_internal_server_error_and_log`

The request ID and user ID are read from the context values `request_id` and `user_id`.

`error_json_with_log` picks the log level from the code:

| Code  | Level   |
|-------|---------|
| 5xx   | error   |
| 4xx   | warning |
| other | info    |

`log_request(ctx)` records an incoming request. `log_response(ctx, response_data)` records the status and body size written to the context.

All logging goes to the `"apiresponse"` logger. The structured details are attached to each record as its `fields` attribute.

## What this package does not do

This package is not a web server, and it is not bound to any web framework. You copy the request data into a `RequestContext` yourself. After a handler runs, you send its `status` and `body` with your framework of choice.

It configures no log handlers or formatters. Set up the `"apiresponse"` logger in your application to see its output.