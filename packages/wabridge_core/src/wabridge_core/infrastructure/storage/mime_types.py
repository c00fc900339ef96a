"""支持的媒体类型表

MIME 类型 -> 文件扩展名。不在表内的类型一律拒绝。
"""

SUPPORTED_MIME_TYPES: dict[str, str] = {
    # 图片
    "image/jpeg": "jpeg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/bmp": "bmp",
    "image/heic": "heic",
    # 视频
    "video/mp4": "mp4",
    "video/3gpp": "3gp",
    "video/quicktime": "mov",
    "video/webm": "webm",
    "video/x-matroska": "mkv",
    # 音频
    "audio/ogg": "ogg",
    "audio/ogg; codecs=opus": "ogg",
    "audio/mpeg": "mp3",
    "audio/mp4": "m4a",
    "audio/aac": "aac",
    "audio/amr": "amr",
    "audio/wav": "wav",
    "audio/webm": "weba",
    # 文档
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/vnd.ms-excel": "xls",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "xlsx",
    "application/vnd.ms-powerpoint": "ppt",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": "pptx",
    "application/vnd.oasis.opendocument.text": "odt",
    "application/rtf": "rtf",
    "application/zip": "zip",
    "application/x-7z-compressed": "7z",
    "application/vnd.rar": "rar",
    "application/json": "json",
    "text/plain": "txt",
    "text/csv": "csv",
    "text/vcard": "vcf",
    "text/x-vcard": "vcf",
}


def normalize_mime_type(mime_type: str | None) -> str:
    """统一大小写和参数分隔格式（"audio/ogg;codecs=opus" -> "audio/ogg; codecs=opus"）"""
    if not mime_type:
        return ""
    parts = [p.strip() for p in mime_type.strip().lower().split(";") if p.strip()]
    return "; ".join(parts)


def get_file_extension(mime_type: str | None) -> str | None:
    """获取 MIME 类型对应的扩展名

    先按完整类型匹配，再忽略参数按主类型匹配。

    Returns:
        扩展名（不含点），不支持时返回 None
    """
    normalized = normalize_mime_type(mime_type)
    if not normalized:
        return None

    extension = SUPPORTED_MIME_TYPES.get(normalized)
    if extension is None:
        extension = SUPPORTED_MIME_TYPES.get(normalized.split(";", 1)[0])
    return extension
