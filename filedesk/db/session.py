from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

import filedesk.models  # noqa: F401  注册所有表模型
from filedesk.config.config_settings.config_schema import DatabaseConfig
from filedesk.core.logger import logger


class Database:
    """持有数据库引擎和 Session 工厂。由应用启动时根据配置创建，挂在 app.state 上。"""

    def __init__(self, config: DatabaseConfig):
        self.engine = create_async_engine(config.url, echo=config.echo)
        self.session_factory = async_sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)

    # 初始化数据库（启动时调用）
    async def create_db_and_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database tables are ready.")

    async def dispose(self) -> None:
        await self.engine.dispose()


# 获取 DB session（依赖注入用）
async def get_session(request: Request) -> AsyncIterator[AsyncSession]:
    """
    提供一个数据库会话。
    提交由 Service 层按记录控制，这里只负责在请求结束时回滚未提交的更改并关闭会话。
    """
    database: Database = request.app.state.database
    session = database.session_factory()
    try:
        yield session
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
