import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from filedesk.core.api_response import response_error
from filedesk.core.exceptions import BaseBusinessException, ValidationException
from filedesk.core.logger import logger
from filedesk.db.session import get_session
from filedesk.rest.method import RequestType, RestMethod
from filedesk.rest.request import RestRequest


@dataclass
class RestModule:
    """一组 RestMethod，路由为 /{parent_module}/{name}/{method.request}。"""
    name: str
    methods: List[RestMethod] = field(default_factory=list)
    parent_module: Optional[str] = None

    @property
    def path(self) -> str:
        if self.parent_module:
            return f"/{self.parent_module}/{self.name}"
        return f"/{self.name}"

    def route_for(self, method: RestMethod) -> str:
        return f"{self.path}/{method.request}"


async def read_raw_parameters(request: Request, method: RestMethod) -> Dict[str, Any]:
    """
    GET 从查询字符串取参数，其它方法从 JSON 请求体取参数。
    multipart 请求体留给处理函数自己解析。
    """
    if method.request_type is RequestType.GET:
        return dict(request.query_params)

    content_type = request.headers.get("content-type", "")
    if not content_type.startswith("application/json"):
        return dict(request.query_params)

    body = await request.body()
    if not body:
        return {}
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise ValidationException(message="请求体不是合法的 JSON", cause=e)
    if not isinstance(payload, dict):
        raise ValidationException(message="请求体必须是 JSON 对象")
    return payload


def build_endpoint(method: RestMethod):
    async def endpoint(request: Request, session: AsyncSession = Depends(get_session)) -> JSONResponse:
        try:
            raw = await read_raw_parameters(request, method)
            rest_request = RestRequest(request, session, method.parse_parameters(raw))
            await method.handle(rest_request)
        except BaseBusinessException as exc:
            return response_error(exc)
        return rest_request.to_response()

    endpoint.__name__ = method.request.replace("-", "_")
    return endpoint


def register_modules(router: APIRouter, modules: Iterable[RestModule]) -> APIRouter:
    for module in modules:
        for method in module.methods:
            path = module.route_for(method)
            router.add_api_route(
                path,
                build_endpoint(method),
                methods=[method.request_type.value],
                summary=method.summary or None,
                tags=[module.name],
            )
            logger.debug(f"Registered {method.request_type.value} {path}")
    return router
