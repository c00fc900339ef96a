"""
发送消息请求 Schema

POST /message 的请求体，按 message.type 区分消息类型。
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RequestModel(BaseModel):
    """请求基类，接受 camelCase 和 snake_case 字段"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageBodyText(RequestModel):
    """文本消息"""

    type: Literal["text"]
    text: str


class MessageBodyLocation(RequestModel):
    """位置消息"""

    type: Literal["location"]
    latitude: float
    longitude: float
    address: str | None = None
    name: str | None = None
    url: str | None = None


class MessageBodyPoll(RequestModel):
    """投票消息"""

    type: Literal["poll"]
    name: str
    options: list[str] = Field(..., min_length=1)
    allow_multiple_answers: bool


class MessageBodyContact(RequestModel):
    """名片消息"""

    type: Literal["contact"]
    contact_ids: list[str] = Field(..., min_length=1)


class MessageBodyMedia(RequestModel):
    """媒体消息，media_id 为 /media/upload 返回的 ID"""

    type: Literal["media"]
    media_id: str = Field(..., min_length=1)
    send_audio_as_voice: bool | None = None
    send_video_as_gif: bool | None = None
    send_media_as_sticker: bool | None = None
    send_media_as_document: bool | None = None
    is_view_once: bool | None = None
    caption: str | None = None
    sticker_author: str | None = None
    sticker_name: str | None = None
    sticker_categories: list[str] | None = None


SendMessageBody = Annotated[
    MessageBodyText | MessageBodyLocation | MessageBodyPoll | MessageBodyContact | MessageBodyMedia,
    Field(discriminator="type"),
]


class SendMessageOptions(RequestModel):
    """发送选项"""

    link_preview: bool | None = None
    parse_v_cards: bool | None = Field(default=None, alias="parseVCards")
    quoted_message_id: str | None = None
    send_seen: bool | None = None


class SendMessageRequest(RequestModel):
    """发送消息请求"""

    chat_id: str = Field(..., min_length=1)
    message: SendMessageBody
    options: SendMessageOptions | None = None
