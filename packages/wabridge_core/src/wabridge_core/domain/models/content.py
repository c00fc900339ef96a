"""发送内容模型

由发送请求转换而来，交给聊天客户端发送。
"""

from dataclasses import dataclass, field

from wabridge_core.domain.schemas.message import Contact


@dataclass(frozen=True)
class TextContent:
    text: str


@dataclass(frozen=True)
class LocationContent:
    latitude: float
    longitude: float
    address: str | None = None
    name: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class PollContent:
    name: str
    options: list[str]
    allow_multiple_answers: bool = False


@dataclass(frozen=True)
class ContactsContent:
    """名片，只有一个联系人时客户端按单张名片发送"""

    contacts: list[Contact] = field(default_factory=list)


@dataclass(frozen=True)
class MediaContent:
    """媒体内容，data 为 base64 编码"""

    mime_type: str
    data: str
    filename: str | None = None


OutgoingContent = TextContent | LocationContent | PollContent | ContactsContent | MediaContent
