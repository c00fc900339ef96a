"""临时资源 TTL 索引

将不透明字符串 ID 映射到资源描述对象，并记录最后写入时间。

- 读取不刷新时间戳，过期只取决于写入时间
- sweep 按 `now - touched_at > max_idle` 淘汰（恰好等于 max_idle 的条目保留）
- 淘汰前先执行注册的副作用（例如删除磁盘文件），副作用异常只记录日志

所有操作运行在同一个事件循环中，写操作之间不会交错，因此不加锁。
"""

from __future__ import annotations

import inspect
import time
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

from loguru import logger

V = TypeVar("V")

EvictCallback = Callable[[str, V], Awaitable[None] | None]


@dataclass
class IndexEntry(Generic[V]):
    """索引条目"""

    value: V
    touched_at: float


class TTLIndex(Generic[V]):
    """带空闲淘汰的内存索引"""

    def __init__(
        self,
        name: str = "default",
        on_evict: EvictCallback | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.name = name
        self._entries: dict[str, IndexEntry[V]] = {}
        self._on_evict = on_evict
        self._clock = clock

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def now(self) -> float:
        """当前时钟读数"""
        return self._clock()

    def put(self, key: str, value: V) -> None:
        """插入或覆盖条目，并记录当前时间"""
        self._entries[key] = IndexEntry(value=value, touched_at=self._clock())

    def get(self, key: str) -> V | None:
        """读取条目（不刷新时间戳）"""
        entry = self._entries.get(key)
        return entry.value if entry else None

    def touched_at(self, key: str) -> float | None:
        """条目最后写入时间"""
        entry = self._entries.get(key)
        return entry.touched_at if entry else None

    def remove(self, key: str) -> V | None:
        """删除条目，不存在时不做任何事

        Returns:
            被删除的值，不存在时返回 None
        """
        entry = self._entries.pop(key, None)
        return entry.value if entry else None

    def is_expired(self, key: str, max_idle: float, now: float | None = None) -> bool:
        """判断条目是否已超过空闲时间，不存在的条目视为已过期"""
        entry = self._entries.get(key)
        if entry is None:
            return True
        current = self._clock() if now is None else now
        return current - entry.touched_at > max_idle

    def expired_keys(self, now: float, max_idle: float) -> list[str]:
        """返回所有空闲超过 max_idle 的键"""
        return [
            key for key, entry in self._entries.items() if now - entry.touched_at > max_idle
        ]

    async def sweep(self, now: float | None = None, max_idle: float = 0) -> list[str]:
        """淘汰空闲超过 max_idle 的条目

        Args:
            now: 当前时间，默认读取时钟
            max_idle: 最大空闲秒数

        Returns:
            被淘汰的键列表
        """
        current = self._clock() if now is None else now
        evicted: list[str] = []

        for key in self.expired_keys(current, max_idle):
            entry = self._entries.get(key)
            if entry is None:
                # 副作用执行期间已被其他协程删除
                continue

            if self._on_evict is not None:
                try:
                    result = self._on_evict(key, entry.value)
                    if inspect.isawaitable(result):
                        await result
                except Exception as e:
                    logger.error(f"索引 '{self.name}' 淘汰回调失败: key={key}, error={e}")

            # 回调期间被重新 put 或移除的条目不计入淘汰
            if self._entries.get(key) is entry:
                del self._entries[key]
                evicted.append(key)

        if evicted:
            logger.debug(f"索引 '{self.name}' 淘汰 {len(evicted)} 条, 剩余 {len(self._entries)} 条")
        return evicted

    def clear(self) -> None:
        """清空索引（不执行淘汰副作用）"""
        self._entries.clear()
