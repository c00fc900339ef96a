"""媒体接口"""

from fastapi import APIRouter, File, UploadFile, status
from fastapi.responses import FileResponse
from loguru import logger

from wabridge_core.common.exceptions import NotFoundError, StorageError, ValidationError
from wabridge_core.domain.schemas.media import MediaUploadResponse
from wabridge_web_api.deps import MediaStoreDep

router = APIRouter()


@router.post(
    "/upload",
    response_model=MediaUploadResponse,
    status_code=status.HTTP_201_CREATED,
    summary="上传待发送附件",
)
async def upload_media(media_store: MediaStoreDep, media: UploadFile | None = File(None)):
    if media is None:
        raise ValidationError("No media file provided", field="media", error_code="MISSING_FILE")

    data = await media.read()
    try:
        media_id = await media_store.save_upload(data, media.content_type)
    except StorageError as e:
        logger.error(f"附件上传保存失败: {e.message}")
        raise StorageError("Failed to save file") from e
    finally:
        await media.close()

    return MediaUploadResponse(media_id=media_id)


@router.get("/{file_name}", summary="获取入站附件")
async def get_media(file_name: str, media_store: MediaStoreDep):
    path = media_store.resolve_incoming(file_name)
    if path is None:
        raise NotFoundError("媒体文件", file_name, error_code="MEDIA_NOT_FOUND")
    return FileResponse(path)
