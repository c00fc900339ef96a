"""Webhook 监听器模型"""

from dataclasses import dataclass


@dataclass
class Listener:
    """已订阅的 Webhook 地址及其失败计数"""

    id: int
    url: str
    consecutive_failures: int = 0

