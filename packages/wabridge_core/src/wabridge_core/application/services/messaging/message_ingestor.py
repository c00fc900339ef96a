"""入站消息处理

原始消息 -> ChatMessage -> 附件落盘 -> 事件分发。
带附件的消息在下载结束（成功或失败）后才会分发，
订阅方收到的 media 标记要么是已保存的文件，要么是 saved=False 的占位。
"""

from __future__ import annotations

from loguru import logger

from wabridge_core.application.services.messaging.chat_client import InboundMessage
from wabridge_core.application.services.messaging.messaging_cache import MessagingCache
from wabridge_core.application.services.webhooks.dispatcher import DispatchReport, EventDispatcher
from wabridge_core.common.exceptions import MediaDownloadError
from wabridge_core.domain.events import MessageEvent, SelfMessageEvent, WebhookEvent
from wabridge_core.domain.schemas.message import ChatMessage, Media
from wabridge_core.infrastructure.storage.media_store import MediaStore


class MessageConverter:
    """原始消息转换为对外消息结构"""

    def __init__(self, cache: MessagingCache):
        self.cache = cache

    async def convert(self, raw: InboundMessage) -> ChatMessage:
        contact_id = raw.author or raw.from_
        chat_id = raw.to if raw.from_me else raw.from_

        contact = await self.cache.contact(contact_id, raw.get_contact)
        chat = await self.cache.chat(chat_id, raw.get_chat)
        quoted_msg_id = await raw.get_quoted_message_id() if raw.has_quoted_msg else None

        return ChatMessage(
            id=raw.id,
            body=raw.body,
            timestamp=raw.timestamp,
            from_=raw.from_,
            to=raw.to,
            author=raw.author,
            type=raw.type,
            has_media=raw.has_media,
            ack=raw.ack,
            device_type=raw.device_type,
            is_forwarded=raw.is_forwarded,
            is_status=raw.is_status,
            mentioned_ids=list(raw.mentioned_ids),
            has_quoted_msg=raw.has_quoted_msg,
            quoted_msg_id=quoted_msg_id,
            from_me=raw.from_me,
            media=Media.placeholder() if raw.has_media else None,
            chat=chat,
            contact=contact,
        )


class MessageIngestor:
    """入站消息处理器"""

    def __init__(
        self,
        dispatcher: EventDispatcher,
        media_store: MediaStore,
        cache: MessagingCache,
    ):
        self.dispatcher = dispatcher
        self.media_store = media_store
        self.converter = MessageConverter(cache)

    async def handle(self, raw: InboundMessage) -> DispatchReport:
        """处理一条消息并等待本轮分发结束"""
        event = await self.build_event(raw)
        return await self.dispatcher.dispatch(event)

    async def build_event(self, raw: InboundMessage) -> WebhookEvent:
        message = await self.converter.convert(raw)
        if message.has_media:
            media = await self._save_media(raw)
            message = message.model_copy(update={"media": media})

        if message.from_me:
            return SelfMessageEvent(message)
        return MessageEvent(message)

    async def _save_media(self, raw: InboundMessage) -> Media:
        try:
            downloaded = await raw.download_media()
            if downloaded is None:
                raise MediaDownloadError("附件下载失败: 上游未返回数据")
            file_name, mime_type = await self.media_store.save_downloaded(
                downloaded.data, downloaded.mime_type
            )
        except Exception as e:
            logger.error(f"附件保存失败: message={raw.id}, error={e}")
            return Media.placeholder()

        return Media(saved=True, file_location=f"/media/{file_name}", mime_type=mime_type)
