from dataclasses import dataclass

from filedesk.infra.storage.storage_interface import StorageClientInterface


@dataclass(frozen=True)
class StoredFilePart:
    """已通过结构性校验并写入存储的一个文件分段。"""
    field_name: str
    filename: str
    mime_type: str
    size: int
    object_name: str
    profile_name: str
    client: StorageClientInterface
