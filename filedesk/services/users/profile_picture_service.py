from starlette.requests import Request
from sqlalchemy.exc import SQLAlchemyError

from filedesk.core.exceptions import ProfilePictureNotFoundException
from filedesk.db.errors import translate_database_error
from filedesk.models.users.profile_picture import ProfilePicture
from filedesk.repo.crud.users.profile_picture_repo import ProfilePictureRepository
from filedesk.schemas.file.file_record_schemas import FileRecordRead
from filedesk.services._base_service import BaseService
from filedesk.services.file.file_record_service import FileRecordService
from filedesk.services.file.upload_coordinator import UploadCoordinator
from filedesk.uploads.policy import UploadPolicy


class ProfilePictureService(BaseService):
    """用户头像：复用上传流程，只保留每个用户最新的一张图片。"""

    def __init__(
            self,
            coordinator: UploadCoordinator,
            file_record_service: FileRecordService,
            picture_repo: ProfilePictureRepository,
    ):
        super().__init__()
        self.coordinator = coordinator
        self.file_record_service = file_record_service
        self.picture_repo = picture_repo

    async def set_picture(self, request: Request, user_id: str, policy: UploadPolicy) -> FileRecordRead:
        outcome = await self.coordinator.handle_upload(request, policy, uploader_id=user_id)

        # policy 限制为单个文件，这里只有一个结果
        if outcome.errors:
            raise outcome.errors[0]
        new_record = outcome.records[0]

        previous_file_id = None
        try:
            mapping = await self.picture_repo.get_by_user_id(user_id)
            if mapping:
                previous_file_id = mapping.file_id
                mapping.file_id = new_record.id
                self.picture_repo.db.add(mapping)
            else:
                await self.picture_repo.create(ProfilePicture(user_id=user_id, file_id=new_record.id))
            await self.picture_repo.commit()
        except SQLAlchemyError as e:
            await self.picture_repo.rollback()
            raise translate_database_error(e) from e

        if previous_file_id is not None:
            await self.file_record_service.delete_file(previous_file_id)
        self.logger.info(f"User {user_id} profile picture set to file {new_record.id}")
        return new_record

    async def get_picture(self, user_id: str) -> FileRecordRead:
        mapping = await self.picture_repo.get_by_user_id(user_id)
        if not mapping:
            raise ProfilePictureNotFoundException()
        return await self.file_record_service.get_file_record_by_id(mapping.file_id)

    async def delete_picture(self, user_id: str) -> None:
        mapping = await self.picture_repo.get_by_user_id(user_id)
        if not mapping:
            raise ProfilePictureNotFoundException()

        file_id = mapping.file_id
        try:
            await self.picture_repo.delete(mapping)
            await self.picture_repo.commit()
        except SQLAlchemyError as e:
            await self.picture_repo.rollback()
            raise translate_database_error(e) from e

        await self.file_record_service.delete_file(file_id)
        self.logger.info(f"User {user_id} profile picture removed")
