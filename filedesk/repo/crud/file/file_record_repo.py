from sqlalchemy.ext.asyncio import AsyncSession

from filedesk.models.files.file_record import FileRecord
from filedesk.repo.crud.common.base_repo import BaseRepository


class FileRecordRepository(BaseRepository[FileRecord, FileRecord]):
    """
    FileRecordRepository 提供了所有与文件记录数据库操作相关的方法。
    记录由上传流程直接构造成 FileRecord 实例后传入 create()。
    """
    def __init__(self, db: AsyncSession):
        super().__init__(db, FileRecord)
