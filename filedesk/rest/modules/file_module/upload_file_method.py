from filedesk.rest.dependencies import get_upload_coordinator, get_upload_policy
from filedesk.rest.method import RequestType, RestMethod
from filedesk.rest.middleware import require
from filedesk.rest.request import RestRequest


async def upload_file(request: RestRequest) -> None:
    """
    上传一个或多个文件 (multipart 字段 files) 并登记文件记录。
    单个文件的失败通过 request.error 逐个发出，最后总是返回成功列表。
    """
    policy = get_upload_policy(request, request.config.modules.file_upload_profile)
    coordinator = get_upload_coordinator(request)

    outcome = await coordinator.handle_upload(
        request.request,
        policy,
        uploader_id=request.user.id if request.user else None,
        on_file_error=request.error,
    )
    request.respond(outcome.records)


upload_file_method = RestMethod(
    request="upload-file",
    request_type=RequestType.POST,
    handler=upload_file,
    middleware=(require("file:upload"),),
    summary="上传文件",
)
