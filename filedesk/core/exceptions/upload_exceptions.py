from typing import Optional

from filedesk.core.exceptions.base_exception import BaseBusinessException, NotFoundException
from filedesk.core.response_codes import ResponseCodeEnum


# === 结构性校验失败：整个请求被拒绝 ===
class TooManyFilesException(BaseBusinessException):
    def __init__(self, field: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(
            ResponseCodeEnum.TOO_MANY_FILES,
            cause=cause,
            variables={"FIELD": field or "unknown"},
        )


class FileTooLargeException(BaseBusinessException):
    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(ResponseCodeEnum.FILE_TOO_LARGE, cause=cause)


class MimeTypeNotAllowedException(BaseBusinessException):
    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(ResponseCodeEnum.MIME_TYPE_NOT_ALLOWED, cause=cause)


class NoFilesUploadedException(BaseBusinessException):
    def __init__(self):
        super().__init__(ResponseCodeEnum.NO_FILES_UPLOADED)


class UnknownUploadException(BaseBusinessException):
    def __init__(self, cause: Optional[BaseException] = None):
        super().__init__(ResponseCodeEnum.UNKNOWN_ERROR, cause=cause)


# === 单个文件处理失败：不影响同一请求中的其他文件 ===
class UploadedFileNotFoundException(BaseBusinessException):
    def __init__(self, filename: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(
            ResponseCodeEnum.FILE_NOT_FOUND,
            cause=cause,
            variables={"FILENAME": filename} if filename else None,
        )


class FileRecordNotFoundException(NotFoundException):
    def __init__(self, message: Optional[str] = None):
        super().__init__(ResponseCodeEnum.FILE_RECORD_NOT_FOUND, message=message)
