"""Webhook 事件分发器

一轮分发：
1. 取监听器快照
2. 所有投递共享一个截止时间（默认 5 秒）
3. 并发 POST 事件信封，2xx 记成功，其余（网络异常、非 2xx、超时取消）记失败
4. 全部结束或截止时间到达后，未完成的投递被取消并记失败
5. 移除连续失败达到阈值的监听器

每轮每个监听器只投递一次，不做轮内重试。分发轮次串行执行。
"""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass, field

import httpx
from loguru import logger

from wabridge_core.application.services.webhooks.registry import ListenerRegistry
from wabridge_core.common.config import settings
from wabridge_core.common.utils.serialization import to_json
from wabridge_core.domain.events import WebhookEvent
from wabridge_core.domain.models.listener import Listener


@dataclass
class DispatchReport:
    """单轮分发结果"""

    event_type: str
    delivered: list[int] = field(default_factory=list)
    failed: list[int] = field(default_factory=list)
    timed_out: list[int] = field(default_factory=list)
    pruned: list[int] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.delivered) + len(self.failed)


class EventDispatcher:
    """事件分发器"""

    def __init__(
        self,
        registry: ListenerRegistry,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
        verify_ssl: bool | None = None,
    ):
        self.registry = registry
        self.timeout = settings.WEBHOOK_DISPATCH_TIMEOUT if timeout is None else timeout
        self.verify_ssl = settings.WEBHOOK_VERIFY_SSL if verify_ssl is None else verify_ssl
        self._client = client
        self._owns_client = client is None
        self._round_lock = asyncio.Lock()
        self._background: set[asyncio.Task] = set()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                verify=self.verify_ssl,
                timeout=self.timeout,
                trust_env=False,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    async def dispatch(self, event: WebhookEvent) -> DispatchReport:
        """向所有监听器分发事件并等待本轮结束"""
        async with self._round_lock:
            report = DispatchReport(event_type=event.type)
            listeners = self.registry.list()

            if listeners:
                body = to_json(event.to_envelope())
                await self._deliver_round(listeners, body, report)

            report.pruned = [listener.id for listener in self.registry.prune()]

        if report.total:
            logger.debug(
                f"事件 '{report.event_type}' 分发完成: 成功 {len(report.delivered)}, "
                f"失败 {len(report.failed)}, 超时 {len(report.timed_out)}, 移除 {len(report.pruned)}"
            )
        return report

    async def _deliver_round(
        self, listeners: list[Listener], body: str, report: DispatchReport
    ) -> None:
        tasks = {
            asyncio.create_task(self._notify(listener, body)): listener
            for listener in listeners
        }

        done, pending = await asyncio.wait(tasks, timeout=self.timeout)

        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        for task, listener in tasks.items():
            if task in done and not task.cancelled() and task.exception() is None and task.result():
                self.registry.record_success(listener.id)
                report.delivered.append(listener.id)
                continue

            if task in pending:
                report.timed_out.append(listener.id)
                logger.warning(f"Webhook 投递超时 ({self.timeout}s): id={listener.id}, url={listener.url}")
            failures = self.registry.record_failure(listener.id)
            report.failed.append(listener.id)
            logger.debug(f"Webhook 连续失败次数: id={listener.id}, failures={failures}")

    async def _notify(self, listener: Listener, body: str) -> bool:
        """向单个监听器投递一次"""
        try:
            response = await self._get_client().post(
                listener.url,
                content=body,
                headers={"Content-Type": "application/json"},
            )
        except httpx.TimeoutException:
            logger.warning(f"Webhook 请求超时: id={listener.id}, url={listener.url}")
            return False
        except httpx.RequestError as e:
            logger.warning(f"Webhook 请求异常: id={listener.id}, url={listener.url}, error={e}")
            return False
        except Exception as e:
            logger.error(f"Webhook 投递未知异常: id={listener.id}, url={listener.url}, error={e}")
            return False

        if not response.is_success:
            logger.warning(
                f"Webhook 投递失败: id={listener.id}, url={listener.url}, HTTP {response.status_code}"
            )
            return False
        return True

    def submit(self, event: WebhookEvent) -> asyncio.Task:
        """后台分发事件，不阻塞调用方"""
        task = asyncio.create_task(self.dispatch(event))
        self._background.add(task)
        task.add_done_callback(self._on_background_done)
        return task

    def _on_background_done(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"后台分发异常: {task.exception()}")

    async def drain(self) -> None:
        """等待所有后台分发完成"""
        if self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def aclose(self) -> None:
        """等待后台分发并关闭自建的 HTTP 客户端"""
        await self.drain()
        if self._owns_client and self._client is not None:
            with contextlib.suppress(Exception):
                await self._client.aclose()
            self._client = None
