"""消息收发服务"""

from wabridge_core.application.services.messaging.chat_client import (
    ChatClient,
    DisconnectedChatClient,
    DownloadedMedia,
    InboundMessage,
    MessageHandler,
)
from wabridge_core.application.services.messaging.message_ingestor import (
    MessageConverter,
    MessageIngestor,
)
from wabridge_core.application.services.messaging.messaging_cache import MessagingCache
from wabridge_core.application.services.messaging.send_service import MessageSendService

__all__ = [
    "ChatClient",
    "DisconnectedChatClient",
    "DownloadedMedia",
    "InboundMessage",
    "MessageHandler",
    "MessageConverter",
    "MessageIngestor",
    "MessageSendService",
    "MessagingCache",
]
