from typing import Optional

from sqlmodel import Field

from filedesk.models.base.base_model import BaseModel


class FileRecord(BaseModel, table=True):
    """
    文件记录实体类。
    在数据库中存储上传到对象存储的文件的元数据，文件本身的字节由存储客户端保存。
    """
    __tablename__ = "file_record"

    # --- 核心元数据 ---
    filename: str = Field(..., description="客户端声明的原始文件名，未经清洗，不参与存储路径的生成")
    file_size: int = Field(..., ge=0, description="文件大小（字节）")
    mime_type: str = Field(..., description="客户端声明的 MIME 类型")
    download_url: str = Field(..., description="根据存储位置生成的下载地址")
    content_hash: str = Field(..., index=True, description="文件内容的 SHA-256 摘要")

    # --- 存储位置 ---
    object_name: str = Field(
        ...,
        unique=True,
        index=True,
        description="文件在对象存储中的唯一路径/键"
    )
    profile_name: str = Field(..., index=True, description="上传时使用的 Storage Profile 名称")

    # --- 业务与关联 ---
    uploader_id: Optional[str] = Field(default=None, index=True, description="上传者 (JWT sub)")
