"""
Schema 模块

对外传输结构（请求、响应、推送载荷）。
"""

from wabridge_core.domain.schemas.common import ErrorResponse, HealthResponse
from wabridge_core.domain.schemas.media import MediaUploadResponse
from wabridge_core.domain.schemas.message import Chat, ChatMessage, Contact, Media
from wabridge_core.domain.schemas.request import (
    MessageBodyContact,
    MessageBodyLocation,
    MessageBodyMedia,
    MessageBodyPoll,
    MessageBodyText,
    SendMessageOptions,
    SendMessageRequest,
)
from wabridge_core.domain.schemas.webhook import (
    ListenerResponse,
    WebhookDeleteResponse,
    WebhookSubscribeRequest,
    WebhookSubscribeResponse,
)

__all__ = [
    "Chat",
    "ChatMessage",
    "Contact",
    "ErrorResponse",
    "HealthResponse",
    "ListenerResponse",
    "Media",
    "MediaUploadResponse",
    "MessageBodyContact",
    "MessageBodyLocation",
    "MessageBodyMedia",
    "MessageBodyPoll",
    "MessageBodyText",
    "SendMessageOptions",
    "SendMessageRequest",
    "WebhookDeleteResponse",
    "WebhookSubscribeRequest",
    "WebhookSubscribeResponse",
]
