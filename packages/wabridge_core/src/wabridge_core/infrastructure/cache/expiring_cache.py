"""过期缓存

基于 TTLIndex 的轻量缓存，用于短时间缓存从聊天客户端查询到的联系人、会话等记录。
读取时遇到已过期的条目按未命中处理，后台任务按 check_period 周期清理。
存入和取出的都是深拷贝，调用方无法修改缓存内部状态。
"""

from __future__ import annotations

import asyncio
import contextlib
import copy
import time
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from loguru import logger

from wabridge_core.infrastructure.cache.ttl_index import TTLIndex

V = TypeVar("V")


class ExpiringCache(Generic[V]):
    """固定 TTL 的读穿缓存"""

    def __init__(
        self,
        name: str,
        ttl: float = 120,
        check_period: float = 120,
        clock: Callable[[], float] = time.time,
    ):
        self.name = name
        self.ttl = ttl
        self.check_period = check_period
        self._index: TTLIndex[V] = TTLIndex(name=name, clock=clock)
        self._task: asyncio.Task | None = None
        self._stats = {"hits": 0, "misses": 0, "sets": 0, "expired": 0}

    def __len__(self) -> int:
        return len(self._index)

    @property
    def stats(self) -> dict:
        """获取统计信息"""
        return self._stats.copy()

    def get(self, key: str) -> V | None:
        """读取缓存，过期条目视为未命中"""
        if self._index.is_expired(key, self.ttl):
            if self._index.remove(key) is not None:
                self._stats["expired"] += 1
            self._stats["misses"] += 1
            return None

        self._stats["hits"] += 1
        return copy.deepcopy(self._index.get(key))

    def set(self, key: str, value: V) -> None:
        """写入缓存"""
        self._index.put(key, copy.deepcopy(value))
        self._stats["sets"] += 1

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[V]]) -> V:
        """读穿：未命中时调用 loader 并写入缓存"""
        cached = self.get(key)
        if cached is not None:
            return cached

        value = await loader()
        self.set(key, value)
        return copy.deepcopy(value)

    async def purge(self) -> int:
        """清理所有过期条目

        Returns:
            清理数量
        """
        evicted = await self._index.sweep(max_idle=self.ttl)
        self._stats["expired"] += len(evicted)
        return len(evicted)

    async def start(self) -> None:
        """启动后台清理任务"""
        if self._task and not self._task.done():
            return
        self._task = asyncio.create_task(self._purge_loop())
        logger.debug(f"缓存 '{self.name}' 清理任务已启动，间隔: {self.check_period}s")

    async def stop(self) -> None:
        """停止后台清理任务"""
        if self._task and not self._task.done():
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        self._task = None

    async def _purge_loop(self) -> None:
        while True:
            try:
                await asyncio.sleep(self.check_period)
                await self.purge()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"缓存 '{self.name}' 清理异常: {e}")
