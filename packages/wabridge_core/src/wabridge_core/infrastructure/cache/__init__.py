"""
Cache 模块

- ttl_index: 按写入时间淘汰的通用索引（媒体记录、联系人/会话缓存共用）
- expiring_cache: 基于 TTLIndex 的读穿缓存
"""

from wabridge_core.infrastructure.cache.expiring_cache import ExpiringCache
from wabridge_core.infrastructure.cache.ttl_index import IndexEntry, TTLIndex

__all__ = [
    "ExpiringCache",
    "IndexEntry",
    "TTLIndex",
]
