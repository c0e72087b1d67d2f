from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from filedesk.core.exceptions import FileRecordNotFoundException
from filedesk.db.errors import translate_database_error
from filedesk.infra.storage.storage_factory import StorageFactory
from filedesk.models.files.file_record import FileRecord
from filedesk.repo.crud.file.file_record_repo import FileRecordRepository
from filedesk.schemas.file.file_record_schemas import FileRecordRead
from filedesk.services._base_service import BaseService


class FileRecordService(BaseService):
    """
    文件记录业务服务层。
    封装了与文件元数据 (FileRecord) 相关的数据库操作，
    每条记录单独提交，一条记录失败不会影响同一会话中的其他记录。
    """

    def __init__(self, file_repo: FileRecordRepository, factory: StorageFactory):
        super().__init__()
        self.file_repo = file_repo
        self.factory = factory

    async def save_record(self, record: FileRecord) -> FileRecord:
        """
        持久化一条文件记录。
        数据库异常会被回滚并翻译成对应的业务异常。
        """
        try:
            saved = await self.file_repo.create(record)
            await self.file_repo.commit()
        except SQLAlchemyError as e:
            await self.file_repo.rollback()
            self.logger.error(f"Persisting file record for {record.object_name} failed: {e!r}")
            raise translate_database_error(e) from e
        return saved

    async def get_record(self, record_id: UUID) -> Optional[FileRecord]:
        return await self.file_repo.get_by_id(record_id)

    async def get_file_record_by_id(self, record_id: UUID) -> FileRecordRead:
        record = await self.get_record(record_id)
        if not record:
            raise FileRecordNotFoundException()
        return FileRecordRead.model_validate(record)

    async def delete_file(self, record_id: UUID) -> None:
        """删除文件记录以及它在对象存储中的文件。"""
        record = await self.get_record(record_id)
        if not record:
            return

        object_name, profile_name = record.object_name, record.profile_name
        try:
            await self.file_repo.delete(record)
            await self.file_repo.commit()
        except SQLAlchemyError as e:
            await self.file_repo.rollback()
            raise translate_database_error(e) from e

        client = self.factory.get_client_by_profile(profile_name)
        await run_in_threadpool(client.remove_object, object_name)
        self.logger.info(f"Deleted file record {record_id} and object {object_name}")
