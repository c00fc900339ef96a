"""
wabridge 服务入口

`python -m wabridge_web_api` 或 `wabridge` 命令启动。直接启动时没有接入聊天客户端，
/health 返回 loading，Webhook 订阅和媒体上传接口照常可用；
接入方应在自己的进程中调用 create_app(chat_client=...)。
"""

import uvicorn
from loguru import logger

from wabridge_core.common.config import settings


def main() -> None:
    logger.info(f"启动 {settings.APP_NAME} v{settings.APP_VERSION}: {settings.SERVER_HOST}:{settings.SERVER_PORT}")
    uvicorn.run(
        "wabridge_web_api.app_factory:create_app",
        factory=True,
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.SERVER_RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
