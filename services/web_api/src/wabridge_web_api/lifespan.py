"""应用生命周期管理

构建桥接服务的各个组件并挂到 app.state，启动和停止后台清理任务。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from loguru import logger

from wabridge_core.application.services.messaging import (
    MessageIngestor,
    MessageSendService,
    MessagingCache,
)
from wabridge_core.application.services.webhooks import EventDispatcher, ListenerRegistry
from wabridge_core.common.config import settings
from wabridge_core.infrastructure.storage.media_store import MediaStore


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期上下文管理器"""
    try:
        await init_services(app)
        logger.info("应用程序已启动")
        yield
    except Exception as e:
        logger.error(f"启动失败: {e}")
        raise
    finally:
        await shutdown_services(app)


async def init_services(app: FastAPI) -> None:
    """初始化所有应用服务"""
    logger.info("=" * 50)
    logger.info(f"初始化 {settings.APP_NAME} v{settings.APP_VERSION}")
    logger.info("=" * 50)

    logger.info("[1/4] 初始化媒体存储")
    media_store = MediaStore(media_root=getattr(app.state, "media_root", None))
    await media_store.start()
    app.state.media_store = media_store

    logger.info("[2/4] 初始化 Webhook 分发")
    registry = ListenerRegistry()
    dispatcher = EventDispatcher(registry, client=getattr(app.state, "webhook_client", None))
    app.state.registry = registry
    app.state.dispatcher = dispatcher

    logger.info("[3/4] 初始化消息缓存")
    cache = MessagingCache()
    await cache.start()
    app.state.messaging_cache = cache

    logger.info("[4/4] 初始化消息服务")
    ingestor = MessageIngestor(dispatcher, media_store, cache)
    app.state.chat_client.set_message_handler(ingestor.handle)
    app.state.send_service = MessageSendService(app.state.chat_client, media_store)

    logger.info("=" * 50)
    logger.info(f"{settings.APP_NAME} 初始化完成，媒体目录: {media_store.media_root}")
    logger.info("=" * 50)


async def shutdown_services(app: FastAPI) -> None:
    """关闭所有应用服务"""
    logger.info("正在关闭服务")

    app.state.chat_client.set_message_handler(None)

    cache = getattr(app.state, "messaging_cache", None)
    if cache is not None:
        await cache.stop()

    dispatcher = getattr(app.state, "dispatcher", None)
    if dispatcher is not None:
        await dispatcher.aclose()

    media_store = getattr(app.state, "media_store", None)
    if media_store is not None:
        await media_store.stop()

    logger.info("所有服务已关闭")
