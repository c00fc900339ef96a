"""应用配置模块

提供统一的配置管理，支持环境变量和 .env 文件。
"""

import os
from functools import cached_property
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _find_project_root() -> Path:
    """查找项目根目录（包含 .env 文件的目录，或最顶层的 pyproject.toml）"""
    current = Path(__file__).resolve()

    for parent in current.parents:
        if (parent / ".env").exists():
            return parent

    root = None
    for parent in current.parents:
        if (parent / "pyproject.toml").exists():
            root = parent

    if root:
        return root

    return current.parent.parent.parent.parent.parent.parent


class Settings(BaseSettings):
    """应用配置类"""

    # === 服务器配置 ===
    SERVER_HOST: str = Field(default="0.0.0.0")
    SERVER_PORT: int = Field(default=8080)
    SERVER_RELOAD: bool = Field(default=False)

    # === 日志配置 ===
    LOG_LEVEL: str = Field(default="INFO")
    LOG_TO_FILE: bool = Field(default=False)

    # === 应用信息 ===
    APP_NAME: str = "wabridge"
    APP_DESCRIPTION: str = "聊天客户端桥接服务：Webhook 事件分发与临时媒体存储"
    APP_VERSION: str = "0.4.0"

    # === 路径配置 ===
    BASE_DIR: str = Field(default_factory=lambda: str(_find_project_root()))
    MEDIA_DIRECTORY: str = Field(default="")

    @cached_property
    def data_dir(self) -> str:
        """数据目录"""
        return os.path.join(self.BASE_DIR, "data")

    @cached_property
    def LOG_FILE_PATH(self) -> str:
        return os.path.join(self.data_dir, "logs", "app.log")

    @cached_property
    def media_root(self) -> str:
        """媒体根目录，incoming/outgoing 位于其下"""
        if self.MEDIA_DIRECTORY:
            return self.MEDIA_DIRECTORY
        return os.path.join(self.data_dir, "media")

    # === 媒体配置 ===
    FILE_CLEAR_INTERVAL_SECONDS: int = Field(default=15 * 60)
    MAX_UPLOAD_SIZE: int = 64 * 1024 * 1024

    # === Webhook 配置 ===
    WEBHOOK_DISPATCH_TIMEOUT: float = Field(default=5.0)
    WEBHOOK_MAX_FAILURES: int = Field(default=3)
    WEBHOOK_VERIFY_SSL: bool = Field(default=True)

    # === 联系人/会话缓存配置 ===
    MESSAGING_CACHE_TTL: int = Field(default=120)
    MESSAGING_CACHE_CHECK_PERIOD: int = Field(default=120)

    model_config = SettingsConfigDict(
        env_file=str(_find_project_root() / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_positive_values(self) -> "Settings":
        """验证端口、清理间隔等必须为正数"""
        if self.SERVER_PORT <= 0:
            raise ValueError(f"SERVER_PORT 无效: {self.SERVER_PORT}，必须为正数")
        if self.FILE_CLEAR_INTERVAL_SECONDS <= 0:
            raise ValueError(
                f"FILE_CLEAR_INTERVAL_SECONDS 无效: {self.FILE_CLEAR_INTERVAL_SECONDS}，必须为正数"
            )
        if self.WEBHOOK_DISPATCH_TIMEOUT <= 0:
            raise ValueError(
                f"WEBHOOK_DISPATCH_TIMEOUT 无效: {self.WEBHOOK_DISPATCH_TIMEOUT}，必须为正数"
            )
        if self.WEBHOOK_MAX_FAILURES <= 0:
            raise ValueError(f"WEBHOOK_MAX_FAILURES 无效: {self.WEBHOOK_MAX_FAILURES}，必须为正数")
        return self


# 全局配置实例
settings = Settings()
