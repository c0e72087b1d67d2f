from enum import Enum
from typing import Optional


class UploadErrorKind(str, Enum):
    # files 字段超出数量上限，或文件出现在了未声明的字段中
    UNEXPECTED_FILE = "unexpected_file"
    FILE_TOO_LARGE = "file_too_large"
    MIME_TYPE_NOT_ALLOWED = "mime_type_not_allowed"
    UNKNOWN = "unknown"


class UploadLimitError(Exception):
    """UploadParser 抛出的唯一异常类型，由 kind 区分具体原因。"""

    def __init__(self, kind: UploadErrorKind, field: Optional[str] = None, cause: Optional[BaseException] = None):
        self.kind = kind
        self.field = field
        self.cause = cause
        super().__init__(f"{kind.value} (field={field})")
