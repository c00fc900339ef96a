"""
领域模型

进程内记录，仅由所属组件持有：
- Listener: 由 ListenerRegistry 持有
- MediaRecord: 由 MediaStore 持有
"""

from wabridge_core.domain.models.content import (
    ContactsContent,
    LocationContent,
    MediaContent,
    OutgoingContent,
    PollContent,
    TextContent,
)
from wabridge_core.domain.models.listener import Listener
from wabridge_core.domain.models.media import MediaDirection, MediaRecord

__all__ = [
    "ContactsContent",
    "LocationContent",
    "MediaContent",
    "OutgoingContent",
    "PollContent",
    "TextContent",
    "Listener",
    "MediaDirection",
    "MediaRecord",
]
