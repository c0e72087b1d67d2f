from typing import Optional

from filedesk.core.exceptions.base_exception import BaseBusinessException
from filedesk.core.response_codes import ResponseCodeEnum


class DuplicateEntryException(BaseBusinessException):
    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(ResponseCodeEnum.DUPLICATE_ENTRY, cause=cause)


class DatabaseUnavailableException(BaseBusinessException):
    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(ResponseCodeEnum.DATABASE_UNAVAILABLE, cause=cause)


class DatabaseOperationException(BaseBusinessException):
    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(ResponseCodeEnum.DATABASE_ERROR, cause=cause)
