import json

from apiresponse.context import RequestContext
from apiresponse.response import not_found, success


def test_query_returns_first_value():
    ctx = RequestContext(raw_query="page=3&page=7&limit=20")
    assert ctx.query("page") == "3"
    assert ctx.query("limit") == "20"


def test_query_missing_and_blank():
    ctx = RequestContext(raw_query="empty=")
    assert ctx.query("empty") == ""
    assert ctx.query("absent") == ""


def test_get_string_and_set():
    ctx = RequestContext()
    ctx.set("request_id", "req-1")
    ctx.set("count", 5)
    assert ctx.get_string("request_id") == "req-1"
    assert ctx.get_string("count") == ""
    assert ctx.get_string("missing") == ""


def test_json_writes_response_object():
    ctx = RequestContext()
    resp = success({"id": 1}, "")
    ctx.json(200, resp)
    assert ctx.status == 200
    assert ctx.payload == resp.to_dict()
    assert json.loads(ctx.body) == resp.to_dict()
    assert ctx.size == len(ctx.body)


def test_json_plain_payload():
    ctx = RequestContext()
    ctx.json(404, not_found(""))
    assert ctx.status == 404
    assert json.loads(ctx.body)["message"] == "Resource not found"


def test_no_body_for_204():
    ctx = RequestContext()
    ctx.json(204, {"message": "No content"})
    assert ctx.body == b""
    assert ctx.size == 0
    assert ctx.payload == {"message": "No content"}


def test_size_before_write():
    ctx = RequestContext()
    assert ctx.size == -1
    assert ctx.written is False


def test_abort():
    ctx = RequestContext()
    assert ctx.aborted is False
    ctx.abort()
    assert ctx.aborted is True