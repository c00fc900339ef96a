"""应用工厂模块。

提供 create_app() 工厂函数，用于创建 FastAPI 应用实例。
"""

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from wabridge_core.application.services.messaging.chat_client import (
    ChatClient,
    DisconnectedChatClient,
)
from wabridge_core.common.config import settings
from wabridge_core.common.exceptions import BridgeException
from wabridge_core.common.logging import setup_logging
from wabridge_web_api.exceptions import (
    bridge_exception_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from wabridge_web_api.lifespan import lifespan
from wabridge_web_api.routes import register_routes


def create_app(
    chat_client: ChatClient | None = None,
    media_root: str | None = None,
    webhook_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """创建并配置 FastAPI 应用。

    Args:
        chat_client: 聊天客户端，未提供时使用始终未就绪的占位客户端
        media_root: 媒体目录，默认使用配置
        webhook_client: Webhook 投递使用的 HTTP 客户端，默认由分发器自行创建

    Returns:
        FastAPI: 已配置的应用实例。
    """
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=settings.APP_DESCRIPTION,
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.chat_client = chat_client if chat_client is not None else DisconnectedChatClient()
    app.state.media_root = media_root
    app.state.webhook_client = webhook_client

    # 注册异常处理器
    app.add_exception_handler(BridgeException, bridge_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # 注册路由
    register_routes(app)

    return app
