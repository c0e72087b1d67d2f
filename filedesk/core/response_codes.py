from enum import Enum


class ResponseCodeEnum(Enum):
    """
    对外暴露的稳定业务码。
    每个成员是 (code, 默认消息, HTTP 状态码)，前端根据 code 渲染本地化消息。
    """

    # === 通用响应码 ===
    SUCCESS = ("SUCCESS", "请求成功", 200)
    VALIDATION_ERROR = ("VALIDATION_ERROR", "参数验证失败", 400)
    MISSING_PARAMETER = ("MISSING_PARAMETER", "缺少必填参数", 400)
    INVALID_PARAMETER = ("INVALID_PARAMETER", "参数类型错误", 400)
    UNAUTHORIZED = ("UNAUTHORIZED", "认证失败", 401)
    FORBIDDEN = ("FORBIDDEN", "没有权限", 403)
    SERVER_ERROR = ("SERVER_ERROR", "服务器内部错误", 500)

    # === 文件上传 ===
    TOO_MANY_FILES = ("TOO_MANY_FILES", "上传的文件数量超出限制", 400)
    FILE_TOO_LARGE = ("FILE_TOO_LARGE", "上传的文件过大", 413)
    MIME_TYPE_NOT_ALLOWED = ("MIME_TYPE_NOT_ALLOWED", "不支持的文件类型", 415)
    FILE_NOT_FOUND = ("FILE_NOT_FOUND", "无法读取上传的文件", 404)
    NO_FILES_UPLOADED = ("NO_FILES_UPLOADED", "没有上传任何文件", 400)
    UNKNOWN_ERROR = ("UNKNOWN_ERROR", "上传过程中发生未知错误", 400)

    # === 文件记录 / 头像 ===
    FILE_RECORD_NOT_FOUND = ("FILE_RECORD_NOT_FOUND", "文件记录不存在", 404)
    PROFILE_PICTURE_NOT_FOUND = ("PROFILE_PICTURE_NOT_FOUND", "当前用户没有设置头像", 404)

    # === 数据库 ===
    DUPLICATE_ENTRY = ("DUPLICATE_ENTRY", "数据已存在", 409)
    DATABASE_UNAVAILABLE = ("DATABASE_UNAVAILABLE", "数据库暂时不可用", 503)
    DATABASE_ERROR = ("DATABASE_ERROR", "数据库操作失败", 500)

    def __init__(self, code: str, message: str, http_status: int):
        self._code = code
        self._message = message
        self._http_status = http_status

    @property
    def code(self):
        return self._code

    @property
    def message(self):
        return self._message

    @property
    def http_status(self):
        return self._http_status
