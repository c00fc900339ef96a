"""Webhook 监听器注册表

维护订阅地址集合。每个监听器有单调递增的 ID 和连续失败计数，
连续失败达到阈值后在本轮分发结束时被移除，需要重新订阅。
对外只返回监听器副本，内部列表只能通过本类的方法修改。
"""

from __future__ import annotations

from dataclasses import replace

from loguru import logger

from wabridge_core.common.config import settings
from wabridge_core.common.exceptions import ListenerExistsError
from wabridge_core.domain.models.listener import Listener


class ListenerRegistry:
    """监听器注册表"""

    def __init__(self, max_failures: int | None = None):
        self.max_failures = settings.WEBHOOK_MAX_FAILURES if max_failures is None else max_failures
        self._listeners: list[Listener] = []
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._listeners)

    def has(self, url: str) -> bool:
        """是否已存在该地址的监听器"""
        return any(listener.url == url for listener in self._listeners)

    def add(self, url: str) -> int:
        """注册监听器

        Returns:
            新监听器 ID

        Raises:
            ListenerExistsError: 该地址已注册
        """
        if self.has(url):
            raise ListenerExistsError(url)

        listener_id = self._next_id
        self._next_id += 1
        self._listeners.append(Listener(id=listener_id, url=url))
        logger.info(f"Webhook 已订阅: id={listener_id}, url={url}")
        return listener_id

    def remove(self, listener_id: int) -> None:
        """移除监听器，ID 不存在时不做任何事"""
        before = len(self._listeners)
        self._listeners = [item for item in self._listeners if item.id != listener_id]
        if len(self._listeners) < before:
            logger.info(f"Webhook 已取消订阅: id={listener_id}")

    def get(self, listener_id: int) -> Listener | None:
        """获取监听器副本"""
        listener = self._find(listener_id)
        return replace(listener) if listener else None

    def list(self) -> list[Listener]:
        """按注册顺序返回监听器副本"""
        return [replace(listener) for listener in self._listeners]

    def record_success(self, listener_id: int) -> None:
        """投递成功，失败计数清零"""
        listener = self._find(listener_id)
        if listener is not None:
            listener.consecutive_failures = 0

    def record_failure(self, listener_id: int) -> int:
        """投递失败，失败计数加一

        Returns:
            当前连续失败次数，监听器已不存在时返回 0
        """
        listener = self._find(listener_id)
        if listener is None:
            return 0
        listener.consecutive_failures += 1
        return listener.consecutive_failures

    def prune(self) -> list[Listener]:
        """移除连续失败次数达到阈值的监听器

        Returns:
            被移除的监听器
        """
        removed = [item for item in self._listeners if item.consecutive_failures >= self.max_failures]
        if not removed:
            return []

        self._listeners = [
            item for item in self._listeners if item.consecutive_failures < self.max_failures
        ]
        for listener in removed:
            logger.warning(
                f"Webhook 连续失败 {listener.consecutive_failures} 次，已移除: "
                f"id={listener.id}, url={listener.url}"
            )
        return removed

    def _find(self, listener_id: int) -> Listener | None:
        for listener in self._listeners:
            if listener.id == listener_id:
                return listener
        return None
