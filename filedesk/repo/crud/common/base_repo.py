from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)


class BaseRepository(Generic[ModelType, CreateSchemaType]):
    def __init__(self, db: AsyncSession, model: Type[ModelType]):
        self.db = db
        self.model = model

    # ==========================
    # 事务控制方法 (Transaction Control)
    # ==========================

    async def commit(self):
        """提交当前数据库会话中的所有更改。"""
        await self.db.commit()

    async def rollback(self):
        """回滚当前数据库会话中的所有更改。"""
        await self.db.rollback()

    # ==========================
    # 数据创建方法 (Create)
    # ==========================

    async def create(self, obj_in: Union[CreateSchemaType, Dict[str, Any], ModelType]) -> ModelType:
        """
        创建一个新的对象实例，并将其添加到会话中。
        可以直接传入已经构造好的模型实例。
        """
        if isinstance(obj_in, self.model):
            db_obj = obj_in
        else:
            create_data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
            db_obj = self.model(**create_data)
        self.db.add(db_obj)
        await self.db.flush()
        await self.db.refresh(db_obj)
        return db_obj

    # ==========================
    # 数据查询方法 (Read)
    # ==========================

    async def get_by_id(self, item_id: Any) -> Optional[ModelType]:
        return await self.db.get(self.model, item_id)

    async def find_by_field(self, value: Any, field: str) -> Optional[ModelType]:
        column = getattr(self.model, field)
        result = await self.db.execute(select(self.model).where(column == value))
        return result.scalars().first()

    # ==========================
    # 数据删除方法 (Delete)
    # ==========================

    async def delete(self, db_obj: ModelType) -> None:
        await self.db.delete(db_obj)
        await self.db.flush()
