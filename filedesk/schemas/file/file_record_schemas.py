from uuid import UUID

from filedesk.schemas.base import CamelORMModel


class FileRecordRead(CamelORMModel):
    """
    持久化后的文件记录对外的序列化形式 (FileRecordView)。
    只暴露元数据，不包含存储路径等内部信息。
    """
    id: UUID
    filename: str
    file_size: int
    mime_type: str
    download_url: str
    content_hash: str
