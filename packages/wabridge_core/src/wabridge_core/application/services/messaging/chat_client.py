"""聊天客户端接口

桥接服务不直接依赖具体的 WhatsApp 实现。接入方实现 ChatClient 负责发送，
收到消息时包装为 InboundMessage 并调用 ChatClient.emit_message，
由应用启动时注册的处理函数（MessageIngestor.handle）完成转换和分发。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from wabridge_core.common.exceptions import ClientNotReadyError
from wabridge_core.domain.models.content import OutgoingContent
from wabridge_core.domain.schemas.message import Chat, ChatMessage, Contact


@dataclass(frozen=True)
class DownloadedMedia:
    """客户端下载到的附件，data 为 base64 编码"""

    mime_type: str
    data: str
    filename: str | None = None


@dataclass
class InboundMessage(ABC):
    """客户端收到的原始消息"""

    id: str
    from_: str
    to: str
    body: str = ""
    timestamp: int = 0
    author: str | None = None
    type: str = "chat"
    has_media: bool = False
    ack: int | None = None
    device_type: str | None = None
    is_forwarded: bool = False
    is_status: bool = False
    from_me: bool = False
    has_quoted_msg: bool = False
    mentioned_ids: list[str] = field(default_factory=list)

    @abstractmethod
    async def get_contact(self) -> Contact:
        """发送者联系人"""

    @abstractmethod
    async def get_chat(self) -> Chat:
        """所属会话"""

    async def get_quoted_message_id(self) -> str | None:
        return None

    @abstractmethod
    async def download_media(self) -> DownloadedMedia | None:
        """下载附件，无数据时返回 None"""


MessageHandler = Callable[[InboundMessage], Awaitable[Any]]


class ChatClient(ABC):
    """聊天客户端"""

    _message_handler: MessageHandler | None = None

    def set_message_handler(self, handler: MessageHandler | None) -> None:
        """注册入站消息处理函数，传入 None 取消注册"""
        self._message_handler = handler

    async def emit_message(self, raw: InboundMessage) -> None:
        """收到消息时由客户端实现调用"""
        if self._message_handler is None:
            logger.warning(f"未注册消息处理函数，丢弃消息: {raw.id}")
            return
        await self._message_handler(raw)

    @abstractmethod
    def is_ready(self) -> bool:
        """是否已登录并可发送"""

    @abstractmethod
    async def send_message(
        self, chat_id: str, content: OutgoingContent, options: dict[str, Any]
    ) -> ChatMessage:
        """发送消息

        Raises:
            ChatNotFoundError: 会话不存在
            ChatClientError: 发送失败
        """

    @abstractmethod
    async def get_contact_by_id(self, contact_id: str) -> Contact:
        """按 ID 获取联系人"""


class DisconnectedChatClient(ChatClient):
    """未接入任何客户端时使用，始终处于未就绪状态"""

    def is_ready(self) -> bool:
        return False

    async def send_message(
        self, chat_id: str, content: OutgoingContent, options: dict[str, Any]
    ) -> ChatMessage:
        raise ClientNotReadyError()

    async def get_contact_by_id(self, contact_id: str) -> Contact:
        raise ClientNotReadyError()
