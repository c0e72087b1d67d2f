from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Mapping, Sequence

from filedesk.core.exceptions import InvalidParameterException, MissingParameterException
from filedesk.rest.request import RestRequest

Handler = Callable[[RestRequest], Awaitable[None]]
Middleware = Callable[[RestRequest], Awaitable[None]]


class RequestType(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class ParameterType(str, Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ANY = "any"


@dataclass(frozen=True)
class Parameter:
    name: str
    type: ParameterType = ParameterType.ANY

    def coerce(self, value: Any) -> Any:
        """
        校验并转换参数值。查询字符串中的值都是 str，所以数字和布尔值也接受字符串形式。
        """
        if self.type is ParameterType.ANY:
            return value

        if self.type is ParameterType.STRING:
            if isinstance(value, str):
                return value

        elif self.type is ParameterType.NUMBER:
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return value
            if isinstance(value, str):
                try:
                    return int(value)
                except ValueError:
                    try:
                        return float(value)
                    except ValueError:
                        pass

        elif self.type is ParameterType.BOOLEAN:
            if isinstance(value, bool):
                return value
            if isinstance(value, str) and value.lower() in ("true", "false"):
                return value.lower() == "true"

        raise InvalidParameterException(self.name, self.type.value)


@dataclass(frozen=True)
class RestMethod:
    """
    一个 REST 方法 = 声明式的元数据 + 处理函数。
    middleware 按顺序在处理函数之前执行，任何一个抛出业务异常都会终止请求。
    """
    request: str
    handler: Handler
    request_type: RequestType = RequestType.POST
    required_parameters: Sequence[Parameter] = ()
    optional_parameters: Sequence[Parameter] = ()
    middleware: Sequence[Middleware] = field(default_factory=tuple)
    summary: str = ""

    def parse_parameters(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        parameters: Dict[str, Any] = {}
        for parameter in self.required_parameters:
            if raw.get(parameter.name) is None:
                raise MissingParameterException(parameter.name)
            parameters[parameter.name] = parameter.coerce(raw[parameter.name])

        for parameter in self.optional_parameters:
            if raw.get(parameter.name) is not None:
                parameters[parameter.name] = parameter.coerce(raw[parameter.name])
        return parameters

    async def handle(self, request: RestRequest) -> None:
        for middleware in self.middleware:
            await middleware(request)
        await self.handler(request)
