# filedesk/utils/jwt_utils.py

from datetime import datetime, timedelta, UTC
from typing import Any, Dict, List, Optional
import uuid

import jwt
from jwt import ExpiredSignatureError, InvalidTokenError

from filedesk.config.config_settings.config_schema import SecuritySettings
from filedesk.core.exceptions import UnauthorizedException

DEFAULT_ISSUER = "filedesk"


# =====================
# Token 生成
# =====================

def create_token(
    security: SecuritySettings,
    subject: str,
    capabilities: Optional[List[str]] = None,
    expires_delta: timedelta = timedelta(minutes=30),
    is_superuser: bool = False,
) -> str:
    """
    签发带 capabilities 声明的 access token。
    """
    now = datetime.now(UTC)
    to_encode: Dict[str, Any] = {
        "sub": subject,
        "capabilities": list(capabilities or []),
        "is_superuser": is_superuser,
        "exp": now + expires_delta,
        "iat": now,
        "nbf": now,
        "iss": security.jwt_issuer or DEFAULT_ISSUER,
        "jti": str(uuid.uuid4()),
    }
    if security.jwt_audience:
        to_encode["aud"] = security.jwt_audience

    return jwt.encode(to_encode, security.secret, algorithm=security.jwt_algorithm or "HS256")


# =====================
# Token 解码
# =====================

def decode_token(security: SecuritySettings, token: str) -> dict:
    try:
        return jwt.decode(
            token,
            security.secret,
            algorithms=[security.jwt_algorithm or "HS256"],
            issuer=security.jwt_issuer or DEFAULT_ISSUER,
            audience=security.jwt_audience or None,
            options={"require": ["sub", "exp"]},
        )
    except ExpiredSignatureError as e:
        raise UnauthorizedException(message="Token 已过期", cause=e)
    except InvalidTokenError as e:
        raise UnauthorizedException(message=f"无效的 Token: {e}", cause=e)
