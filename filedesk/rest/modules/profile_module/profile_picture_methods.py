from filedesk.rest.dependencies import get_profile_picture_service, get_upload_policy
from filedesk.rest.method import RequestType, RestMethod
from filedesk.rest.middleware import require
from filedesk.rest.request import RestRequest


async def set_profile_picture(request: RestRequest) -> None:
    """上传新头像并替换当前头像，旧的文件记录和存储对象一并删除。"""
    policy = get_upload_policy(request, request.config.modules.profile_picture_profile)
    service = get_profile_picture_service(request)
    request.respond(await service.set_picture(request.request, request.user.id, policy))


async def delete_profile_picture(request: RestRequest) -> None:
    service = get_profile_picture_service(request)
    await service.delete_picture(request.user.id)
    request.respond(None)


async def get_profile_picture(request: RestRequest) -> None:
    service = get_profile_picture_service(request)
    request.respond(await service.get_picture(request.user.id))


set_profile_picture_method = RestMethod(
    request="set-profile-picture",
    request_type=RequestType.POST,
    handler=set_profile_picture,
    middleware=(require("profile:write"),),
    summary="设置头像",
)

delete_profile_picture_method = RestMethod(
    request="delete-profile-picture",
    request_type=RequestType.POST,
    handler=delete_profile_picture,
    middleware=(require("profile:write"),),
    summary="删除头像",
)

profile_picture_method = RestMethod(
    request="profile-picture",
    request_type=RequestType.GET,
    handler=get_profile_picture,
    middleware=(require("profile:read"),),
    summary="获取头像",
)
