# filedesk/rest/middleware/authorization.py

from filedesk.core.exceptions import PermissionDeniedException, UnauthorizedException
from filedesk.core.logger import logger
from filedesk.rest.request import RestRequest
from filedesk.schemas.users.user_context import UserContext
from filedesk.utils.jwt_utils import decode_token


class AuthorizationMiddleware:
    """
    能力校验中间件：解析 Bearer Token，确认调用者拥有指定的 capability，
    通过后把 UserContext 挂到 request.user 上。
    """

    def __init__(self, capability: str):
        self.capability = capability

    async def __call__(self, request: RestRequest) -> None:
        auth_header = request.request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            raise UnauthorizedException(message="缺少 Bearer Token")

        token = auth_header[len("Bearer "):].strip()
        payload = decode_token(request.config.security_settings, token)

        capabilities = payload.get("capabilities") or []
        if not isinstance(capabilities, list):
            raise UnauthorizedException(message="Token 中的 capabilities 格式不正确")

        user = UserContext(
            id=str(payload["sub"]),
            capabilities=[str(c) for c in capabilities],
            is_superuser=bool(payload.get("is_superuser", False)),
        )
        if not user.can(self.capability):
            logger.warning(f"User {user.id} lacks capability '{self.capability}'")
            raise PermissionDeniedException(self.capability)

        request.user = user


def require(capability: str) -> AuthorizationMiddleware:
    return AuthorizationMiddleware(capability)
