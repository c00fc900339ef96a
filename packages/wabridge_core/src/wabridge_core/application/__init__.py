"""
Application 模块

业务服务：webhooks（订阅与分发）、messaging（消息收发）。
"""
