import os
from datetime import datetime
from typing import List, Tuple
from uuid import uuid4

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import FormData, UploadFile
from starlette.exceptions import HTTPException
from starlette.formparsers import MultiPartException
from starlette.requests import Request

from filedesk.core.logger import get_logger
from filedesk.infra.storage.storage_factory import StorageFactory
from filedesk.uploads.errors import UploadErrorKind, UploadLimitError
from filedesk.uploads.policy import UploadPolicy
from filedesk.uploads.stored_part import StoredFilePart

DEFAULT_MIME_TYPE = "application/octet-stream"
# Starlette 的 MultiPartParser 超出 max_files 时的错误信息前缀
TOO_MANY_FILES_DETAIL = "Too many files"

logger = get_logger(__name__)


class UploadParser:
    """
    解析 multipart 请求，执行结构性校验 (字段名/数量、MIME、大小)，
    并把通过校验的文件写入对应 Profile 的存储客户端。

    所有分段都在写入任何文件之前完成校验，所以结构性失败不会留下任何已存储的对象。
    """

    def __init__(self, factory: StorageFactory):
        self.factory = factory

    async def parse(self, request: Request, policy: UploadPolicy) -> List[StoredFilePart]:
        # 多留一个名额，刚好超出一个时由 _validate 报告具体的字段名
        try:
            form = await request.form(max_files=policy.max_files + 1)
        except (MultiPartException, HTTPException) as e:
            if self._is_too_many_files(e):
                raise UploadLimitError(UploadErrorKind.UNEXPECTED_FILE, field=policy.field_name, cause=e)
            raise UploadLimitError(UploadErrorKind.UNKNOWN, cause=e)

        uploads = [(field, value) for field, value in form.multi_items() if isinstance(value, UploadFile)]
        try:
            accepted = await self._validate(uploads, policy)
            return await self._store_all(accepted, policy)
        finally:
            await self._close_all(form)

    async def _validate(
            self,
            uploads: List[Tuple[str, UploadFile]],
            policy: UploadPolicy,
    ) -> List[Tuple[UploadFile, int]]:
        """按提交顺序校验每个文件分段，遇到第一个违规立即失败。"""
        accepted: List[Tuple[UploadFile, int]] = []
        for field, upload in uploads:
            if field != policy.field_name or len(accepted) >= policy.max_files:
                raise UploadLimitError(UploadErrorKind.UNEXPECTED_FILE, field=field)

            if not policy.allows_mime_type(upload.content_type or DEFAULT_MIME_TYPE):
                raise UploadLimitError(UploadErrorKind.MIME_TYPE_NOT_ALLOWED, field=field)

            size = await self._measure(upload)
            if size > policy.max_file_size:
                raise UploadLimitError(UploadErrorKind.FILE_TOO_LARGE, field=field)

            accepted.append((upload, size))
        return accepted

    @staticmethod
    def _is_too_many_files(err: Exception) -> bool:
        # 表单解析失败时，Request.form() 会把 MultiPartException 转成 HTTPException(400)
        detail = err.detail if isinstance(err, HTTPException) else err.message
        return str(detail).startswith(TOO_MANY_FILES_DETAIL)

    @staticmethod
    async def _measure(upload: UploadFile) -> int:
        if upload.size is not None:
            return upload.size
        await upload.seek(0)
        upload.file.seek(0, os.SEEK_END)
        size = upload.file.tell()
        await upload.seek(0)
        return size

    async def _store_all(self, accepted: List[Tuple[UploadFile, int]], policy: UploadPolicy) -> List[StoredFilePart]:
        client = self.factory.get_client_by_profile(policy.profile_name)
        stored: List[StoredFilePart] = []
        try:
            for upload, size in accepted:
                stored.append(await self._store(client, upload, size, policy))
        except Exception as e:
            logger.exception(f"Storing uploaded files failed after {len(stored)} file(s): {e}")
            await self._discard(stored)
            raise UploadLimitError(UploadErrorKind.UNKNOWN, field=policy.field_name, cause=e)
        return stored

    async def _store(self, client, upload: UploadFile, size: int, policy: UploadPolicy) -> StoredFilePart:
        filename = upload.filename or "unnamed"
        mime_type = upload.content_type or DEFAULT_MIME_TYPE
        object_name = self.generate_object_name(policy.default_folder, filename)

        await upload.seek(0)
        await run_in_threadpool(
            client.put_object,
            object_name=object_name,
            data=upload.file,
            length=size,
            content_type=mime_type,
        )
        logger.info(f"Stored upload '{filename}' as {object_name} ({size} bytes)")
        return StoredFilePart(
            field_name=policy.field_name,
            filename=filename,
            mime_type=mime_type,
            size=size,
            object_name=object_name,
            profile_name=policy.profile_name,
            client=client,
        )

    @staticmethod
    def generate_object_name(default_folder: str, original_filename: str) -> str:
        """
        生成对象键：{格式化后的 default_folder}/{uuid}{扩展名}。
        原始文件名只贡献小写的扩展名。
        """
        now = datetime.now()
        try:
            folder = default_folder.format(year=now.year, month=now.month, day=now.day)
        except (KeyError, IndexError) as e:
            raise ValueError(f"Unsupported placeholder in storage folder '{default_folder}': {e}")

        ext = os.path.splitext(original_filename)[-1].lower()
        return f"{folder}/{uuid4().hex}{ext}".lstrip("/")

    @staticmethod
    async def _discard(stored: List[StoredFilePart]) -> None:
        for part in stored:
            try:
                await run_in_threadpool(part.client.remove_object, part.object_name)
            except Exception as e:
                logger.error(f"Failed to clean up {part.object_name}: {e}")

    @staticmethod
    async def _close_all(form: FormData) -> None:
        for _, value in form.multi_items():
            if isinstance(value, UploadFile):
                await value.close()
