from filedesk.core.exceptions.base_exception import BaseBusinessException
from filedesk.core.response_codes import ResponseCodeEnum


class MissingParameterException(BaseBusinessException):
    def __init__(self, name: str):
        super().__init__(
            ResponseCodeEnum.MISSING_PARAMETER,
            message=f"缺少必填参数: {name}",
            variables={"PARAMETER": name},
        )


class InvalidParameterException(BaseBusinessException):
    def __init__(self, name: str, expected: str):
        super().__init__(
            ResponseCodeEnum.INVALID_PARAMETER,
            message=f"参数 {name} 的类型应为 {expected}",
            variables={"PARAMETER": name, "TYPE": expected},
        )
