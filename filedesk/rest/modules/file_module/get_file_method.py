from uuid import UUID

from filedesk.core.exceptions import ValidationException
from filedesk.rest.dependencies import get_file_record_service
from filedesk.rest.method import Parameter, ParameterType, RequestType, RestMethod
from filedesk.rest.middleware import require
from filedesk.rest.request import RestRequest


async def get_file(request: RestRequest) -> None:
    try:
        record_id = UUID(request.parameters["id"])
    except ValueError as e:
        raise ValidationException(message="id 不是合法的 UUID", cause=e)

    service = get_file_record_service(request)
    request.respond(await service.get_file_record_by_id(record_id))


get_file_method = RestMethod(
    request="get-file",
    request_type=RequestType.GET,
    handler=get_file,
    required_parameters=(Parameter("id", ParameterType.STRING),),
    middleware=(require("file:read"),),
    summary="获取文件记录",
)
