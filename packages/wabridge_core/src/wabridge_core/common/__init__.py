"""
Common 模块

通用功能：
- config: 配置管理
- logging: 日志配置
- exceptions: 异常定义
- ids: ID 生成
"""

from wabridge_core.common.config import settings
from wabridge_core.common.exceptions import (
    BridgeException,
    ChatClientError,
    ChatNotFoundError,
    ClientNotReadyError,
    ListenerExistsError,
    MediaDownloadError,
    MediaNotFoundError,
    NotFoundError,
    SerializationError,
    StorageError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from wabridge_core.common.ids import generate_media_id
from wabridge_core.common.logging import setup_logging

__all__ = [
    # config
    "settings",
    # logging
    "setup_logging",
    # exceptions
    "BridgeException",
    "ChatClientError",
    "ChatNotFoundError",
    "ClientNotReadyError",
    "ListenerExistsError",
    "MediaDownloadError",
    "MediaNotFoundError",
    "NotFoundError",
    "SerializationError",
    "StorageError",
    "UnsupportedMediaTypeError",
    "ValidationError",
    # ids
    "generate_media_id",
]
