from fastapi import APIRouter, FastAPI

from wabridge_web_api.routes.health import router as health_router
from wabridge_web_api.routes.media import router as media_router
from wabridge_web_api.routes.messages import router as messages_router
from wabridge_web_api.routes.webhooks import router as webhooks_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["基础"])
api_router.include_router(webhooks_router, prefix="/webhook", tags=["Webhook"])
api_router.include_router(media_router, prefix="/media", tags=["媒体"])
api_router.include_router(messages_router, prefix="/message", tags=["消息"])


def register_routes(app: FastAPI) -> None:
    """注册所有 API 路由"""
    app.include_router(api_router)


__all__ = ["api_router", "register_routes"]
