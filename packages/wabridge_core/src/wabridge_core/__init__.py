"""
wabridge 核心库

WhatsApp 桥接服务的核心组件：
- Webhook 监听器注册与事件分发
- 临时媒体存储
- 消息收发服务
"""

__version__ = "0.4.0"
