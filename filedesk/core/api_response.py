from typing import Any, List, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from filedesk.core.exceptions import BaseBusinessException
from filedesk.core.logger import logger
from filedesk.core.response_codes import ResponseCodeEnum


# === 自动序列化工具 ===
def to_json_compatible(data: Any) -> Any:
    if isinstance(data, BaseModel):
        # 响应模型统一按 alias (camelCase) 输出
        return data.model_dump(by_alias=True)

    if isinstance(data, (list, tuple)):
        return [to_json_compatible(item) for item in data]

    if isinstance(data, dict):
        return {k: to_json_compatible(v) for k, v in data.items()}

    return data  # int, str, bool, None, etc.


# === 成功响应 ===
def response_success(
    data: Any = None,
    code: ResponseCodeEnum = ResponseCodeEnum.SUCCESS,
    message: Optional[str] = None,
    errors: Optional[List[BaseBusinessException]] = None,
) -> JSONResponse:
    """
    errors 用于携带在最终响应之前已经发出的单文件错误。
    """
    final_message = message or code.message
    logger.debug(f"Response Success | code: {code.code}, message: {final_message}")

    encoded_data = jsonable_encoder(to_json_compatible(data))

    return JSONResponse(
        status_code=code.http_status,
        content={
            "code": code.code,
            "message": final_message,
            "data": encoded_data,
            "errors": [err.to_dict() for err in errors or []],
        },
    )


# === 错误响应 ===
def response_error(exc: BaseBusinessException) -> JSONResponse:
    logger.warning(f"Response Error | http_status: {exc.status_code}, code: {exc.code}, message: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
