"""消息发送接口"""

from fastapi import APIRouter, Request, status

from wabridge_core.common.exceptions import ClientNotReadyError, ValidationError
from wabridge_core.domain.schemas.message import ChatMessage
from wabridge_core.domain.schemas.request import SendMessageRequest
from wabridge_web_api.deps import SendServiceDep

router = APIRouter()


@router.post(
    "",
    response_model=ChatMessage,
    status_code=status.HTTP_201_CREATED,
    summary="发送消息",
)
async def send_message(request: Request, send_service: SendServiceDep):
    """先检查客户端状态再解析请求体"""
    if not send_service.client.is_ready():
        raise ClientNotReadyError()

    try:
        payload = await request.json()
        send_request = SendMessageRequest.model_validate(payload)
    except ValueError as e:
        raise ValidationError(
            f"Could not parse send message request: {e}",
            field="message",
            error_code="INVALID_SEND_REQUEST",
        ) from e

    return await send_service.send(send_request)
