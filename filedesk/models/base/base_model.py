import uuid

from sqlmodel import Field

from filedesk.models.base.timestamp_mixin import TimestampMixin


class BaseModel(TimestampMixin):
    """所有表模型的基类：UUID 主键 + 时间戳。子类需声明 table=True 和 __tablename__。"""
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)
