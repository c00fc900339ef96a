"""
Infrastructure 模块

- cache: TTL 索引与过期缓存
- storage: 临时媒体存储
"""
