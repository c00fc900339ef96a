"""Webhook 事件定义

所有推送给订阅方的事件都序列化为 {"type": ..., "data": ...}。
新增事件类型时继承 WebhookEvent 并指定 event_type。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from wabridge_core.domain.schemas.message import ChatMessage


@dataclass(frozen=True)
class WebhookEvent:
    """事件基类"""

    event_type: ClassVar[str] = "event"

    data: Any

    @property
    def type(self) -> str:
        return self.event_type

    def payload(self) -> Any:
        """事件数据的可序列化形式"""
        if isinstance(self.data, ChatMessage):
            return self.data.wire_dict()
        if hasattr(self.data, "model_dump"):
            return self.data.model_dump(by_alias=True)
        return self.data

    def to_envelope(self) -> dict[str, Any]:
        """投递信封"""
        return {"type": self.type, "data": self.payload()}


@dataclass(frozen=True)
class MessageEvent(WebhookEvent):
    """收到消息"""

    event_type: ClassVar[str] = "message"

    data: ChatMessage


@dataclass(frozen=True)
class SelfMessageEvent(WebhookEvent):
    """本账号发出的消息"""

    event_type: ClassVar[str] = "selfMessage"

    data: ChatMessage
