import uuid

from sqlmodel import Field

from filedesk.models.base.base_model import BaseModel


class ProfilePicture(BaseModel, table=True):
    """用户与其头像文件记录之间的一对一关联。"""
    __tablename__ = "profile_picture"

    user_id: str = Field(..., unique=True, index=True, description="用户标识 (JWT sub)")
    file_id: uuid.UUID = Field(foreign_key="file_record.id", index=True)
