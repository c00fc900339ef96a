"""
序列化工具模块

Webhook 投递载荷统一在这里序列化，使用 ujson 替代标准 json 库以提升性能。
"""

from datetime import datetime

import ujson
from loguru import logger

from wabridge_core.common.exceptions import SerializationError


def _default_json_serializer(obj):
    """默认的 JSON 序列化处理器，处理特殊类型"""
    if isinstance(obj, datetime):
        return obj.isoformat()
    if hasattr(obj, "model_dump"):
        return obj.model_dump(by_alias=True)
    if hasattr(obj, "__dict__"):
        return obj.__dict__
    return str(obj)


def to_json(obj, ensure_ascii=False, sort_keys=False, default=None):
    """
    将对象序列化为紧凑 JSON 字符串

    Raises:
        SerializationError: 序列化失败时抛出
    """
    try:
        serializer = default if default is not None else _default_json_serializer
        return ujson.dumps(
            obj,
            ensure_ascii=ensure_ascii,
            sort_keys=sort_keys,
            default=serializer,
        )
    except (TypeError, ValueError, OverflowError) as e:
        obj_type = type(obj).__name__
        logger.error(f"JSON 序列化失败: 对象类型 {obj_type}, 错误: {e}")
        raise SerializationError(f"无法序列化类型 {obj_type}: {e}") from e


def from_json(data):
    """
    将 JSON 字符串反序列化为对象

    Raises:
        SerializationError: 反序列化失败时抛出
    """
    try:
        return ujson.loads(data)
    except (ValueError, TypeError) as e:
        logger.error(f"JSON 反序列化失败: {e}")
        raise SerializationError(f"无法反序列化 JSON: {e}") from e
