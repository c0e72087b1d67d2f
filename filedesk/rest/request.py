from typing import Any, Dict, List, Optional

from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from filedesk.config.config_settings.config_schema import AppConfig
from filedesk.core.api_response import response_error, response_success
from filedesk.core.exceptions import BaseBusinessException
from filedesk.core.logger import logger
from filedesk.infra.storage.storage_factory import StorageFactory
from filedesk.schemas.users.user_context import UserContext


class RestRequest:
    """
    交给 RestMethod 处理函数的请求对象。

    处理函数通过 respond() 给出最终结果，通过 error() 发出错误。
    两者可以同时出现：例如批量上传中部分文件失败时，先逐个 error()，最后仍然 respond()。
    """

    def __init__(self, request: Request, session: AsyncSession, parameters: Optional[Dict[str, Any]] = None):
        self.request = request
        self.session = session
        self.parameters: Dict[str, Any] = parameters or {}
        self.user: Optional[UserContext] = None
        self.errors: List[BaseBusinessException] = []
        self.responded = False
        self._data: Any = None

    @property
    def config(self) -> AppConfig:
        return self.request.app.state.config

    @property
    def storage_factory(self) -> StorageFactory:
        return self.request.app.state.storage_factory

    def respond(self, data: Any = None) -> None:
        if self.responded:
            logger.warning(f"Ignoring second response for {self.request.url.path}")
            return
        self._data = data
        self.responded = True

    def error(self, exc: BaseBusinessException) -> None:
        logger.warning(f"Error emitted for {self.request.url.path}: {exc}")
        self.errors.append(exc)

    def to_response(self) -> JSONResponse:
        if self.responded:
            return response_success(self._data, errors=self.errors)
        if self.errors:
            return response_error(self.errors[0])
        return response_success(None)
