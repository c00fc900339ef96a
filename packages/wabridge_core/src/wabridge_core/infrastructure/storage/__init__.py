"""
Storage 模块

- media_store: 临时媒体存储（incoming / outgoing 两个目录）
- mime_types: 支持的 MIME 类型表
"""

from wabridge_core.infrastructure.storage.media_store import MediaStore
from wabridge_core.infrastructure.storage.mime_types import (
    SUPPORTED_MIME_TYPES,
    get_file_extension,
)

__all__ = [
    "MediaStore",
    "SUPPORTED_MIME_TYPES",
    "get_file_extension",
]
