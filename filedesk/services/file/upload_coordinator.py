from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence

from starlette.concurrency import run_in_threadpool
from starlette.requests import Request

from filedesk.core.exceptions import (
    BaseBusinessException,
    FileTooLargeException,
    MimeTypeNotAllowedException,
    NoFilesUploadedException,
    TooManyFilesException,
    UnknownUploadException,
    UploadedFileNotFoundException,
)
from filedesk.models.files.file_record import FileRecord
from filedesk.schemas.file.file_record_schemas import FileRecordRead
from filedesk.services._base_service import BaseService
from filedesk.services.file.file_record_service import FileRecordService
from filedesk.services.file.hashing import compute_content_hash
from filedesk.uploads.errors import UploadErrorKind, UploadLimitError
from filedesk.uploads.policy import UploadPolicy
from filedesk.uploads.stored_part import StoredFilePart
from filedesk.uploads.upload_parser import UploadParser


class FilePartState(str, Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    HASH_COMPUTING = "hash_computing"
    HASH_COMPUTED = "hash_computed"
    HASH_FAILED = "hash_failed"
    PERSISTING = "persisting"
    PERSISTED = "persisted"
    PERSIST_FAILED = "persist_failed"


@dataclass
class FileOutcome:
    part: StoredFilePart
    state: FilePartState = FilePartState.VALIDATED
    record: Optional[FileRecordRead] = None
    error: Optional[BaseBusinessException] = None


@dataclass
class UploadOutcome:
    outcomes: List[FileOutcome] = field(default_factory=list)

    @property
    def records(self) -> List[FileRecordRead]:
        """成功的文件记录，保持提交顺序。"""
        return [outcome.record for outcome in self.outcomes if outcome.record is not None]

    @property
    def errors(self) -> List[BaseBusinessException]:
        return [outcome.error for outcome in self.outcomes if outcome.error is not None]


FileErrorCallback = Callable[[BaseBusinessException], None]


def translate_upload_error(err: UploadLimitError) -> BaseBusinessException:
    """把解析阶段的 UploadLimitError 映射成对外的业务异常。"""
    if err.kind is UploadErrorKind.UNEXPECTED_FILE:
        return TooManyFilesException(field=err.field, cause=err.cause or err)
    if err.kind is UploadErrorKind.FILE_TOO_LARGE:
        return FileTooLargeException(cause=err)
    if err.kind is UploadErrorKind.MIME_TYPE_NOT_ALLOWED:
        return MimeTypeNotAllowedException(cause=err)
    return UnknownUploadException(cause=err.cause or err)


class UploadCoordinator(BaseService):
    """
    上传并登记文件的流程协调者。

    1. 由 UploadParser 做结构性校验并写入存储，失败时整个请求被拒绝；
    2. 按提交顺序逐个处理文件：构造记录 -> 生成 download_url -> 计算内容摘要 -> 持久化；
    3. 单个文件失败只影响它自己，错误通过 on_file_error 逐个发出；
    4. 所有文件处理完后返回结果，成功列表可能为空。
    """

    def __init__(self, parser: UploadParser, file_record_service: FileRecordService):
        super().__init__()
        self.parser = parser
        self.file_record_service = file_record_service

    async def handle_upload(
            self,
            request: Request,
            policy: UploadPolicy,
            uploader_id: Optional[str] = None,
            on_file_error: Optional[FileErrorCallback] = None,
    ) -> UploadOutcome:
        try:
            parts = await self.parser.parse(request, policy)
        except UploadLimitError as e:
            self.logger.warning(f"Upload rejected for profile '{policy.profile_name}': {e}")
            raise translate_upload_error(e) from e

        if not parts:
            raise NoFilesUploadedException()

        return await self.process_files(parts, uploader_id=uploader_id, on_file_error=on_file_error)

    async def process_files(
            self,
            parts: Sequence[StoredFilePart],
            uploader_id: Optional[str] = None,
            on_file_error: Optional[FileErrorCallback] = None,
    ) -> UploadOutcome:
        outcome = UploadOutcome()

        # 顺序处理，不并发
        for part in parts:
            file_outcome = FileOutcome(part=part)
            outcome.outcomes.append(file_outcome)
            try:
                file_outcome.record = await self._handle_file(file_outcome, uploader_id)
            except BaseBusinessException as err:
                file_outcome.error = err
                self.logger.warning(
                    f"Processing '{part.filename}' ({part.object_name}) ended in "
                    f"{file_outcome.state.value}: {err}"
                )
                if on_file_error:
                    on_file_error(err)

        self.logger.info(
            f"Processed {len(parts)} file(s): {len(outcome.records)} succeeded, {len(outcome.errors)} failed"
        )
        return outcome

    async def _handle_file(self, file_outcome: FileOutcome, uploader_id: Optional[str]) -> FileRecordRead:
        part = file_outcome.part

        record = FileRecord(
            filename=part.filename,
            file_size=part.size,
            mime_type=part.mime_type,
            object_name=part.object_name,
            profile_name=part.profile_name,
            uploader_id=uploader_id,
        )
        record.download_url = part.client.build_final_url(part.object_name)

        file_outcome.state = FilePartState.HASH_COMPUTING
        try:
            record.content_hash = await compute_content_hash(part.client, part.object_name)
        except Exception as e:
            file_outcome.state = FilePartState.HASH_FAILED
            await self._discard(part)
            raise UploadedFileNotFoundException(filename=part.filename, cause=e) from e
        file_outcome.state = FilePartState.HASH_COMPUTED

        file_outcome.state = FilePartState.PERSISTING
        try:
            saved = await self.file_record_service.save_record(record)
        except BaseBusinessException:
            file_outcome.state = FilePartState.PERSIST_FAILED
            await self._discard(part)
            raise
        file_outcome.state = FilePartState.PERSISTED
        return FileRecordRead.model_validate(saved)

    async def _discard(self, part: StoredFilePart) -> None:
        """失败的文件不会有 FileRecord，删除它已写入的存储对象。清理失败只记录日志。"""
        try:
            await run_in_threadpool(part.client.remove_object, part.object_name)
        except Exception as e:
            self.logger.error(f"Failed to clean up {part.object_name}: {e}")
