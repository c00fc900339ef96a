"""
媒体 Schema
"""

from pydantic import BaseModel, Field


class MediaUploadResponse(BaseModel):
    """上传响应"""

    media_id: str = Field(..., serialization_alias="mediaId")
