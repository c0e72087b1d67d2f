from filedesk.core.exceptions.base_exception import NotFoundException
from filedesk.core.response_codes import ResponseCodeEnum


# === 用户相关异常 ===
class ProfilePictureNotFoundException(NotFoundException):
    def __init__(self, message: str = None):
        super().__init__(ResponseCodeEnum.PROFILE_PICTURE_NOT_FOUND, message=message)
