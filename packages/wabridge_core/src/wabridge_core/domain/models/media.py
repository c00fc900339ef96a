"""媒体记录模型"""

from dataclasses import dataclass
from enum import Enum


class MediaDirection(str, Enum):
    """媒体方向"""

    INCOMING = "incoming"  # 从入站消息下载的附件
    OUTGOING = "outgoing"  # 通过上传接口提交、等待发送的附件


@dataclass(frozen=True)
class MediaRecord:
    """媒体 ID 与磁盘文件的映射

    记录本身不可变，写入时间由 TTLIndex 维护。
    """

    id: str
    path: str
    mime_type: str
    direction: MediaDirection

    @property
    def file_name(self) -> str:
        """磁盘文件名，格式为 <id>.<ext>"""
        return self.path.replace("\\", "/").rsplit("/", 1)[-1]
