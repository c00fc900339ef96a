"""ID 生成模块"""

import uuid


def generate_media_id() -> str:
    """生成媒体 ID

    媒体 ID 同时作为磁盘文件名的主体，只包含十六进制字符。

    Returns:
        32 位十六进制字符串
    """
    return uuid.uuid4().hex
