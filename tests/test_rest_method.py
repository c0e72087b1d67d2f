import asyncio
import json
from unittest.mock import MagicMock

import pytest
from fastapi import APIRouter
from starlette.requests import Request

from filedesk.core.exceptions import (
    FileTooLargeException,
    InvalidParameterException,
    MissingParameterException,
    PermissionDeniedException,
    ValidationException,
)
from filedesk.rest.method import Parameter, ParameterType, RequestType, RestMethod
from filedesk.rest.module import RestModule, read_raw_parameters, register_modules
from filedesk.rest.request import RestRequest


async def noop(request):
    request.respond("ok")


def make_request():
    return RestRequest(request=MagicMock(), session=MagicMock())


@pytest.mark.parametrize(
    "type_, raw, expected",
    [
        (ParameterType.STRING, "abc", "abc"),
        (ParameterType.NUMBER, "42", 42),
        (ParameterType.NUMBER, "1.5", 1.5),
        (ParameterType.NUMBER, 7, 7),
        (ParameterType.BOOLEAN, "true", True),
        (ParameterType.BOOLEAN, False, False),
        (ParameterType.ANY, {"a": 1}, {"a": 1}),
    ],
)
def test_parameter_coercion(type_, raw, expected):
    assert Parameter("p", type_).coerce(raw) == expected


@pytest.mark.parametrize(
    "type_, raw",
    [
        (ParameterType.STRING, 12),
        (ParameterType.NUMBER, "twelve"),
        (ParameterType.NUMBER, True),
        (ParameterType.BOOLEAN, "yes"),
    ],
)
def test_parameter_rejects_wrong_type(type_, raw):
    with pytest.raises(InvalidParameterException) as exc_info:
        Parameter("p", type_).coerce(raw)
    assert exc_info.value.variables["PARAMETER"] == "p"


def test_parse_parameters():
    method = RestMethod(
        request="search",
        handler=noop,
        required_parameters=(Parameter("q", ParameterType.STRING),),
        optional_parameters=(Parameter("limit", ParameterType.NUMBER),),
    )
    assert method.parse_parameters({"q": "cats"}) == {"q": "cats"}
    assert method.parse_parameters({"q": "cats", "limit": "5", "extra": 1}) == {"q": "cats", "limit": 5}

    with pytest.raises(MissingParameterException) as exc_info:
        method.parse_parameters({"limit": "5"})
    assert exc_info.value.variable_list() == [{"name": "PARAMETER", "variable": "q"}]


# 测试中间件按顺序执行，任何一个失败都会终止处理函数
def test_middleware_runs_before_handler():
    calls = []

    async def first(request):
        calls.append("first")

    async def deny(request):
        calls.append("deny")
        raise PermissionDeniedException("file:upload")

    async def handler(request):
        calls.append("handler")

    allowed = RestMethod(request="a", handler=handler, middleware=(first,))
    asyncio.run(allowed.handle(make_request()))
    assert calls == ["first", "handler"]

    calls.clear()
    denied = RestMethod(request="b", handler=handler, middleware=(first, deny))
    with pytest.raises(PermissionDeniedException):
        asyncio.run(denied.handle(make_request()))
    assert calls == ["first", "deny"]


def test_response_carries_emitted_errors():
    request = make_request()
    request.error(FileTooLargeException())
    request.respond([1, 2])

    response = request.to_response()
    body = json.loads(response.body)
    assert response.status_code == 200
    assert body["code"] == "SUCCESS"
    assert body["data"] == [1, 2]
    assert [err["code"] for err in body["errors"]] == ["FILE_TOO_LARGE"]


def test_error_without_response_uses_error_status():
    request = make_request()
    request.error(FileTooLargeException())

    response = request.to_response()
    assert response.status_code == 413
    assert json.loads(response.body)["code"] == "FILE_TOO_LARGE"


def test_only_first_response_is_kept():
    request = make_request()
    request.respond("first")
    request.respond("second")
    assert json.loads(request.to_response().body)["data"] == "first"


def test_module_routes():
    method = RestMethod(request="profile-picture", handler=noop, request_type=RequestType.GET)
    module = RestModule(name="profile", methods=[method], parent_module="user")
    assert module.route_for(method) == "/user/profile/profile-picture"

    router = register_modules(APIRouter(), [module, RestModule(name="file", methods=[RestMethod("upload-file", noop)])])
    routes = {(route.path, tuple(route.methods)) for route in router.routes}
    assert ("/user/profile/profile-picture", ("GET",)) in routes
    assert ("/file/upload-file", ("POST",)) in routes


def make_starlette_request(method, body=b"", content_type=None, query=b""):
    headers = [(b"content-type", content_type.encode())] if content_type else []
    scope = {"type": "http", "method": method, "path": "/", "query_string": query, "headers": headers}

    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


def test_get_parameters_come_from_query_string():
    method = RestMethod(request="get-file", handler=noop, request_type=RequestType.GET)
    request = make_starlette_request("GET", query=b"id=abc")
    assert asyncio.run(read_raw_parameters(request, method)) == {"id": "abc"}


def test_post_parameters_come_from_json_body():
    method = RestMethod(request="rename", handler=noop)
    request = make_starlette_request("POST", body=b'{"name": "x", "count": 2}', content_type="application/json")
    assert asyncio.run(read_raw_parameters(request, method)) == {"name": "x", "count": 2}


def test_post_rejects_non_object_json():
    method = RestMethod(request="rename", handler=noop)
    request = make_starlette_request("POST", body=b"[1, 2]", content_type="application/json")
    with pytest.raises(ValidationException):
        asyncio.run(read_raw_parameters(request, method))


def test_multipart_body_is_left_for_handler():
    method = RestMethod(request="upload-file", handler=noop)
    request = make_starlette_request("POST", body=b"--x--", content_type="multipart/form-data; boundary=x")
    assert asyncio.run(read_raw_parameters(request, method)) == {}
