"""
Domain 模块

- models: 进程内记录
- schemas: 对外传输结构
- events: Webhook 事件
"""
