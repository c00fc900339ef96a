"""
消息 Schema

推送给 Webhook 订阅方的消息结构，序列化时使用 camelCase 字段名。
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """camelCase 序列化基类"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Contact(CamelModel):
    """联系人"""

    id: str

    is_blocked: bool = False
    is_business: bool = False
    is_enterprise: bool = False
    is_group: bool = False
    is_me: bool = False
    is_my_contact: bool = False
    is_user: bool = True
    is_wa_contact: bool = Field(default=True, alias="isWAContact")

    name: str | None = None
    number: str = ""
    pushname: str = ""
    short_name: str | None = None

    about: str | None = None


class Chat(CamelModel):
    """会话"""

    id: str
    name: str | None = None
    is_archived: bool = False
    is_group: bool = False
    is_muted: bool = False
    is_pinned: bool = False
    is_read_only: bool = False
    last_activity: int = 0
    mute_expiration: int = 0
    unread_count: int = 0


class Media(CamelModel):
    """消息附件标记

    hasMedia 为 True 的消息必须带有该标记。下载完成前 saved=False、
    file_location 为空，下载结束（无论成功失败）后才会被分发。
    """

    saved: bool = False
    file_location: str = ""
    mime_type: str = ""

    @classmethod
    def placeholder(cls) -> "Media":
        """尚未保存的占位标记"""
        return cls(saved=False, file_location="", mime_type="")


class ChatMessage(CamelModel):
    """推送给订阅方的消息"""

    id: str
    body: str = ""
    timestamp: int = 0
    from_: str = Field(alias="from")
    to: str
    author: str | None = None
    type: str = "chat"
    has_media: bool = False
    ack: int | None = None
    device_type: str | None = None
    is_forwarded: bool = False
    is_status: bool = False
    mentioned_ids: list[str] = Field(default_factory=list)
    has_quoted_msg: bool = False
    quoted_msg_id: str | None = None
    from_me: bool = False

    media: Media | None = None

    chat: Chat
    contact: Contact

    def wire_dict(self) -> dict:
        """按对外字段名导出"""
        return self.model_dump(by_alias=True)
