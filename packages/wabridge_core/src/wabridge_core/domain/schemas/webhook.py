"""
Webhook Schema

订阅管理接口的请求和响应模式。
"""

from pydantic import BaseModel, ConfigDict, Field


class WebhookSubscribeRequest(BaseModel):
    """订阅请求"""

    url: str | None = Field(None, description="接收事件的地址")


class WebhookSubscribeResponse(BaseModel):
    """订阅响应"""

    id: int


class ListenerResponse(BaseModel):
    """监听器信息"""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    url: str
    consecutive_failures: int = Field(0, serialization_alias="failedAttempts")


class WebhookDeleteResponse(BaseModel):
    """删除响应"""

    success: bool = True
