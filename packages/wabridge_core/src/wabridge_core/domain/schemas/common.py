"""
通用 Schema
"""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """健康检查响应"""

    status: str
    whatsapp: str


class ErrorResponse(BaseModel):
    """错误响应"""

    error: str
    error_code: str | None = None
