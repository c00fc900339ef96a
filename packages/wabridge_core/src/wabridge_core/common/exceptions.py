"""
wabridge 异常模块

仅包含与 HTTP 无关的异常定义，HTTP 映射见 wabridge_web_api.exceptions。
"""

from __future__ import annotations

# =============================================================================
# 基础异常类
# =============================================================================


class BridgeException(Exception):
    """wabridge 异常基类"""

    def __init__(self, message: str, error_code: str | None = None):
        self.message = message
        self.error_code = error_code
        super().__init__(message)


class ValidationError(BridgeException):
    """验证错误异常"""

    def __init__(self, message: str, field: str | None = None, error_code: str = "VALIDATION_ERROR"):
        self.field = field
        super().__init__(message, error_code=error_code)


class NotFoundError(BridgeException):
    """资源不存在异常"""

    def __init__(self, resource: str, identifier: str | int | None = None, error_code: str = "NOT_FOUND"):
        self.resource = resource
        self.identifier = identifier
        message = f"{resource} 不存在"
        if identifier is not None:
            message = f"{resource} '{identifier}' 不存在"
        super().__init__(message, error_code=error_code)


class SerializationError(BridgeException):
    """序列化错误异常"""

    def __init__(self, message: str):
        super().__init__(message, error_code="SERIALIZATION_ERROR")


# =============================================================================
# 媒体相关异常
# =============================================================================


class UnsupportedMediaTypeError(ValidationError):
    """不支持的 MIME 类型"""

    def __init__(self, mime_type: str | None):
        self.mime_type = mime_type
        super().__init__(
            f"Unsupported MIME type: {mime_type}",
            field="mimetype",
            error_code="UNSUPPORTED_MEDIA_TYPE",
        )


class MediaNotFoundError(NotFoundError):
    """媒体文件不存在（未上传、已被消费或已过期）"""

    def __init__(self, media_id: str):
        self.media_id = media_id
        super().__init__("媒体文件", media_id, error_code="MEDIA_NOT_FOUND")


class MediaDownloadError(BridgeException):
    """附件下载失败（上游返回空数据）"""

    def __init__(self, message: str):
        super().__init__(message, error_code="MEDIA_DOWNLOAD_ERROR")


class StorageError(BridgeException):
    """存储错误（写入磁盘失败等）"""

    def __init__(self, message: str):
        super().__init__(message, error_code="STORAGE_ERROR")


# =============================================================================
# Webhook 相关异常
# =============================================================================


class ListenerExistsError(BridgeException):
    """该 URL 已注册监听器"""

    def __init__(self, url: str):
        self.url = url
        super().__init__(
            "A listener for this url has already been registered",
            error_code="LISTENER_EXISTS",
        )


# =============================================================================
# 聊天客户端相关异常
# =============================================================================


class ChatClientError(BridgeException):
    """聊天客户端错误基类"""

    def __init__(self, message: str, error_code: str = "CHAT_CLIENT_ERROR"):
        super().__init__(message, error_code=error_code)


class ClientNotReadyError(ChatClientError):
    """聊天客户端尚未就绪"""

    def __init__(self, message: str = "WhatsApp client is not ready yet"):
        super().__init__(message, error_code="CLIENT_NOT_READY")


class ChatNotFoundError(ChatClientError):
    """会话不存在"""

    def __init__(self, chat_id: str):
        self.chat_id = chat_id
        super().__init__(
            "The chat could not be found - The chat id should end in @c.us",
            error_code="CHAT_NOT_FOUND",
        )
