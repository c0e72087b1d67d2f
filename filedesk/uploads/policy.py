from dataclasses import dataclass
from typing import FrozenSet

from filedesk.config.config_settings.config_schema import StorageProfileConfig

UPLOAD_FIELD_NAME = "files"


@dataclass(frozen=True)
class UploadPolicy:
    """一次上传请求的结构性限制，由调用方显式传入，不读取全局配置。"""
    profile_name: str
    max_files: int
    allowed_mime_types: FrozenSet[str]
    max_file_size: int
    default_folder: str = ""
    field_name: str = UPLOAD_FIELD_NAME

    @classmethod
    def from_profile(cls, profile_name: str, profile: StorageProfileConfig) -> "UploadPolicy":
        return cls(
            profile_name=profile_name,
            max_files=profile.max_upload_files,
            allowed_mime_types=frozenset(profile.allowed_file_types),
            max_file_size=profile.max_file_size,
            default_folder=profile.default_folder,
        )

    def allows_mime_type(self, mime_type: str) -> bool:
        return mime_type in self.allowed_mime_types
