"""Webhook 订阅接口"""

from fastapi import APIRouter, status

from wabridge_core.common.exceptions import ValidationError
from wabridge_core.domain.schemas.webhook import (
    ListenerResponse,
    WebhookDeleteResponse,
    WebhookSubscribeRequest,
    WebhookSubscribeResponse,
)
from wabridge_web_api.deps import RegistryDep

router = APIRouter()


@router.post(
    "/subscribe",
    response_model=WebhookSubscribeResponse,
    status_code=status.HTTP_201_CREATED,
    summary="订阅事件",
)
async def subscribe(registry: RegistryDep, payload: WebhookSubscribeRequest | None = None):
    url = payload.url if payload else None
    if not url:
        raise ValidationError(
            "The request is missing the mandatory 'url' field",
            field="url",
            error_code="MISSING_FIELD",
        )

    listener_id = registry.add(url)
    return WebhookSubscribeResponse(id=listener_id)


@router.get("", response_model=list[ListenerResponse], summary="订阅列表")
async def list_webhooks(registry: RegistryDep):
    return [ListenerResponse.model_validate(listener) for listener in registry.list()]


@router.delete("/{listener_id}", response_model=WebhookDeleteResponse, summary="取消订阅")
async def delete_webhook(listener_id: str, registry: RegistryDep):
    """未知 ID 同样返回成功"""
    try:
        parsed_id = int(listener_id)
    except ValueError:
        raise ValidationError("Invalid id", field="id", error_code="INVALID_ID") from None

    registry.remove(parsed_id)
    return WebhookDeleteResponse()
