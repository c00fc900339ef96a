"""消息解析缓存

联系人和会话在短时间内会被同一批消息反复查询，
缓存 120 秒以减少对聊天客户端的调用。
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from wabridge_core.common.config import settings
from wabridge_core.domain.schemas.message import Chat, Contact
from wabridge_core.infrastructure.cache.expiring_cache import ExpiringCache


class MessagingCache:
    """联系人/会话缓存"""

    def __init__(self, ttl: float | None = None, check_period: float | None = None, **kwargs):
        ttl = settings.MESSAGING_CACHE_TTL if ttl is None else ttl
        check_period = settings.MESSAGING_CACHE_CHECK_PERIOD if check_period is None else check_period
        self.contacts: ExpiringCache[Contact] = ExpiringCache(
            "contacts", ttl=ttl, check_period=check_period, **kwargs
        )
        self.chats: ExpiringCache[Chat] = ExpiringCache(
            "chats", ttl=ttl, check_period=check_period, **kwargs
        )

    async def contact(self, contact_id: str, loader: Callable[[], Awaitable[Contact]]) -> Contact:
        """读穿获取联系人"""
        return await self.contacts.get_or_load(contact_id, loader)

    async def chat(self, chat_id: str, loader: Callable[[], Awaitable[Chat]]) -> Chat:
        """读穿获取会话"""
        return await self.chats.get_or_load(chat_id, loader)

    async def start(self) -> None:
        await self.contacts.start()
        await self.chats.start()

    async def stop(self) -> None:
        await self.contacts.stop()
        await self.chats.stop()

    @property
    def stats(self) -> dict:
        return {"contacts": self.contacts.stats, "chats": self.chats.stats}
