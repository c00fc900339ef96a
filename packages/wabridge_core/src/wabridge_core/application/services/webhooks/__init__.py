"""
Webhook 模块

- registry: 监听器注册表
- dispatcher: 事件分发器
"""

from wabridge_core.application.services.webhooks.dispatcher import DispatchReport, EventDispatcher
from wabridge_core.application.services.webhooks.registry import ListenerRegistry

__all__ = [
    "DispatchReport",
    "EventDispatcher",
    "ListenerRegistry",
]
