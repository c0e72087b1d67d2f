# filedesk/rest/dependencies.py
# 按请求组装 Repository 和 Service

from filedesk.repo.crud.file.file_record_repo import FileRecordRepository
from filedesk.repo.crud.users.profile_picture_repo import ProfilePictureRepository
from filedesk.rest.request import RestRequest
from filedesk.services.file.file_record_service import FileRecordService
from filedesk.services.file.upload_coordinator import UploadCoordinator
from filedesk.services.users.profile_picture_service import ProfilePictureService
from filedesk.uploads.policy import UploadPolicy
from filedesk.uploads.upload_parser import UploadParser


def get_file_record_service(request: RestRequest) -> FileRecordService:
    return FileRecordService(FileRecordRepository(request.session), request.storage_factory)


def get_upload_coordinator(request: RestRequest) -> UploadCoordinator:
    return UploadCoordinator(UploadParser(request.storage_factory), get_file_record_service(request))


def get_profile_picture_service(request: RestRequest) -> ProfilePictureService:
    return ProfilePictureService(
        coordinator=get_upload_coordinator(request),
        file_record_service=get_file_record_service(request),
        picture_repo=ProfilePictureRepository(request.session),
    )


def get_upload_policy(request: RestRequest, profile_name: str) -> UploadPolicy:
    return UploadPolicy.from_profile(profile_name, request.storage_factory.get_profile_config(profile_name))
