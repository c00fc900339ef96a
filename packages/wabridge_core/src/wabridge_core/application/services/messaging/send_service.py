"""消息发送服务

把发送请求转换为客户端可发送的内容。媒体消息读取上传的附件后立即消费，
同一个 mediaId 只能发送一次。
"""

from __future__ import annotations

import base64
from typing import Any

from loguru import logger

from wabridge_core.application.services.messaging.chat_client import ChatClient
from wabridge_core.common.exceptions import (
    BridgeException,
    ChatClientError,
    ClientNotReadyError,
    ValidationError,
)
from wabridge_core.domain.models.content import (
    ContactsContent,
    LocationContent,
    MediaContent,
    OutgoingContent,
    PollContent,
    TextContent,
)
from wabridge_core.domain.schemas.message import ChatMessage
from wabridge_core.domain.schemas.request import (
    MessageBodyContact,
    MessageBodyLocation,
    MessageBodyMedia,
    MessageBodyPoll,
    MessageBodyText,
    SendMessageRequest,
)
from wabridge_core.infrastructure.storage.media_store import MediaStore


class MessageSendService:
    """消息发送服务"""

    def __init__(self, client: ChatClient, media_store: MediaStore):
        self.client = client
        self.media_store = media_store

    async def send(self, request: SendMessageRequest) -> ChatMessage:
        """发送消息

        Raises:
            ClientNotReadyError: 客户端未就绪
            ValidationError: 请求内容无法转换（包括 mediaId 不存在或已被消费）
            ChatNotFoundError: 会话不存在
            ChatClientError: 发送失败
        """
        if not self.client.is_ready():
            raise ClientNotReadyError()

        try:
            content, options = await self.build_content(request)
        except BridgeException as e:
            logger.warning(f"发送请求解析失败: {e.message}")
            raise ValidationError(
                f"Could not parse send message request: {e.message}",
                field="message",
                error_code="INVALID_SEND_REQUEST",
            ) from e

        try:
            message = await self.client.send_message(request.chat_id, content, options)
        except ChatClientError:
            raise
        except Exception as e:
            logger.error(f"消息发送失败: chat={request.chat_id}, error={e}")
            raise ChatClientError("Failed to send message", error_code="SEND_FAILED") from e
        logger.info(f"消息已发送: chat={request.chat_id}, type={request.message.type}")
        return message

    async def build_content(
        self, request: SendMessageRequest
    ) -> tuple[OutgoingContent, dict[str, Any]]:
        options: dict[str, Any] = {}
        if request.options is not None:
            options.update(request.options.model_dump(by_alias=True, exclude_none=True))

        body = request.message
        if isinstance(body, MessageBodyText):
            return TextContent(text=body.text), options

        if isinstance(body, MessageBodyLocation):
            return (
                LocationContent(
                    latitude=body.latitude,
                    longitude=body.longitude,
                    address=body.address,
                    name=body.name,
                    url=body.url,
                ),
                options,
            )

        if isinstance(body, MessageBodyPoll):
            return (
                PollContent(
                    name=body.name,
                    options=list(body.options),
                    allow_multiple_answers=body.allow_multiple_answers,
                ),
                options,
            )

        if isinstance(body, MessageBodyContact):
            contacts = [await self.client.get_contact_by_id(cid) for cid in body.contact_ids]
            return ContactsContent(contacts=contacts), options

        if isinstance(body, MessageBodyMedia):
            data, record = await self.media_store.read(body.media_id)
            await self.media_store.consume(body.media_id)
            options.update(
                body.model_dump(by_alias=True, exclude_none=True, exclude={"type", "media_id"})
            )
            return (
                MediaContent(
                    mime_type=record.mime_type,
                    data=base64.b64encode(data).decode("ascii"),
                    filename=record.file_name,
                ),
                options,
            )

        raise TypeError(f"未知消息类型: {type(body).__name__}")
