# filedesk/core/exceptions/base_exception.py

from typing import Dict, List, Optional

from filedesk.core.response_codes import ResponseCodeEnum


class BaseBusinessException(Exception):
    """
    所有对外可见错误的基类。

    除了稳定的业务码，还可以携带：
    - variables: 用于前端消息插值的命名变量，如 [{"name": "FIELD", "variable": "files"}]
    - cause: 底层异常，仅用于诊断
    """

    def __init__(
            self,
            code_enum: ResponseCodeEnum = ResponseCodeEnum.SERVER_ERROR,
            message: Optional[str] = None,
            cause: Optional[BaseException] = None,
            variables: Optional[Dict[str, str]] = None,
            status_code: Optional[int] = None,
    ):
        self.code_enum = code_enum
        self.code = code_enum.code
        self.message = message or code_enum.message
        self.status_code = status_code or code_enum.http_status
        self.cause = cause
        self.variables = variables or {}
        super().__init__(self.message)

    def __str__(self):
        return f"[{self.code}] {self.message}"

    def variable_list(self) -> List[Dict[str, str]]:
        return [{"name": name, "variable": value} for name, value in self.variables.items()]

    def to_dict(self):
        return {
            "code": self.code,
            "message": self.message,
            "variables": self.variable_list(),
            "cause": repr(self.cause) if self.cause is not None else None,
            "data": None,
        }


class NotFoundException(BaseBusinessException):
    """
    当请求的资源在数据库中不存在时抛出。
    """
    def __init__(self, code_enum: ResponseCodeEnum, message: Optional[str] = None):
        super().__init__(code_enum, message=message)


class ValidationException(BaseBusinessException):
    def __init__(self, message: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(ResponseCodeEnum.VALIDATION_ERROR, message=message, cause=cause)


class UnauthorizedException(BaseBusinessException):
    def __init__(self, message: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(ResponseCodeEnum.UNAUTHORIZED, message=message, cause=cause)


class PermissionDeniedException(BaseBusinessException):
    """
    权限不足
    """
    def __init__(self, capability: str):
        super().__init__(
            ResponseCodeEnum.FORBIDDEN,
            message=f"操作失败：缺少 '{capability}' 权限",
            variables={"CAPABILITY": capability},
        )
