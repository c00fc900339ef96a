"""临时媒体存储

媒体文件按方向存放在两个目录：
- incoming: 入站消息附件，通过 /media/{file_name} 对外暴露
- outgoing: 上传接口提交的附件，发送时按 ID 取出并消费

每个媒体 ID 对应磁盘上唯一的 <id>.<ext> 文件。记录写入后不会因读取而续期，
超过清理间隔的记录由后台任务删除；发送路径会提前消费。
服务重启后索引为空，残留文件不再可寻址，属于可接受的代价。
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import contextlib
import time
from collections.abc import Callable
from pathlib import Path

import aiofiles
import aiofiles.os
from loguru import logger

from wabridge_core.common.config import settings
from wabridge_core.common.exceptions import (
    MediaDownloadError,
    MediaNotFoundError,
    StorageError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from wabridge_core.common.ids import generate_media_id
from wabridge_core.domain.models.media import MediaDirection, MediaRecord
from wabridge_core.infrastructure.cache.ttl_index import TTLIndex
from wabridge_core.infrastructure.storage.mime_types import get_file_extension

INCOMING_DIR_NAME = "incoming"
OUTGOING_DIR_NAME = "outgoing"


class MediaStore:
    """媒体生命周期存储"""

    def __init__(
        self,
        media_root: str | None = None,
        clear_interval: float | None = None,
        max_file_size: int | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.media_root = Path(settings.media_root if media_root is None else media_root)
        self.clear_interval = (
            settings.FILE_CLEAR_INTERVAL_SECONDS if clear_interval is None else clear_interval
        )
        self.max_file_size = settings.MAX_UPLOAD_SIZE if max_file_size is None else max_file_size
        self._index: TTLIndex[MediaRecord] = TTLIndex(
            name="media", on_evict=self._delete_file, clock=clock
        )
        self._task: asyncio.Task | None = None
        self._stats = {
            "saved": 0,
            "consumed": 0,
            "swept": 0,
            "delete_errors": 0,
        }

        self._incoming_dir = self._ensure_dir(INCOMING_DIR_NAME)
        self._outgoing_dir = self._ensure_dir(OUTGOING_DIR_NAME)

    def __len__(self) -> int:
        return len(self._index)

    @property
    def stats(self) -> dict:
        """获取统计信息"""
        return self._stats.copy()

    # =========================================================================
    # 目录
    # =========================================================================

    def _ensure_dir(self, name: str) -> Path:
        path = self.media_root / name
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def incoming_dir(self) -> Path:
        """入站附件目录"""
        return self._incoming_dir

    @property
    def outgoing_dir(self) -> Path:
        """待发送附件目录"""
        return self._outgoing_dir

    # =========================================================================
    # 写入
    # =========================================================================

    async def save_upload(self, data: bytes, mime_type: str | None) -> str:
        """保存上传的附件到 outgoing 目录

        Args:
            data: 文件内容
            mime_type: 声明的 MIME 类型

        Returns:
            媒体 ID

        Raises:
            UnsupportedMediaTypeError: MIME 类型不支持（不会写入任何文件）
            StorageError: 写入磁盘失败
        """
        record = await self._persist(data, mime_type, MediaDirection.OUTGOING)
        return record.id

    async def save_downloaded(
        self, payload: bytes | str | None, mime_type: str | None
    ) -> tuple[str, str]:
        """保存入站消息附件到 incoming 目录

        Args:
            payload: 附件内容，字符串按 base64 解码
            mime_type: 附件 MIME 类型

        Returns:
            (文件名, MIME 类型)

        Raises:
            MediaDownloadError: 上游返回空数据或 base64 无法解码
            UnsupportedMediaTypeError: MIME 类型不支持
            StorageError: 写入磁盘失败
        """
        if not payload:
            raise MediaDownloadError("附件下载失败: 上游未返回数据")

        if isinstance(payload, str):
            try:
                data = base64.b64decode(payload, validate=True)
            except (binascii.Error, ValueError) as e:
                raise MediaDownloadError(f"附件数据不是有效的 base64: {e}") from e
        else:
            data = payload

        record = await self._persist(data, mime_type, MediaDirection.INCOMING)
        return record.file_name, record.mime_type

    async def _persist(
        self, data: bytes, mime_type: str | None, direction: MediaDirection
    ) -> MediaRecord:
        extension = get_file_extension(mime_type)
        if extension is None:
            raise UnsupportedMediaTypeError(mime_type)

        if len(data) > self.max_file_size:
            raise ValidationError(
                f"文件超出限制: {self.max_file_size / 1024 / 1024:.0f}MB", field="media"
            )

        media_id = generate_media_id()
        target_dir = self.incoming_dir if direction == MediaDirection.INCOMING else self.outgoing_dir
        path = target_dir / f"{media_id}.{extension}"

        try:
            async with aiofiles.open(path, "wb") as f:
                await f.write(data)
        except OSError as e:
            with contextlib.suppress(OSError):
                await aiofiles.os.remove(path)
            raise StorageError(f"保存失败: {e}") from e

        record = MediaRecord(
            id=media_id,
            path=str(path),
            mime_type=mime_type,
            direction=direction,
        )
        self._index.put(media_id, record)
        self._stats["saved"] += 1
        logger.debug(f"媒体已保存: {direction.value}/{record.file_name} ({len(data)} bytes)")
        return record

    # =========================================================================
    # 读取
    # =========================================================================

    def get_record(self, media_id: str) -> MediaRecord | None:
        """获取媒体记录（不续期）"""
        return self._index.get(media_id)

    def resolve(self, media_id: str) -> str | None:
        """媒体 ID -> 文件路径（不续期）"""
        record = self._index.get(media_id)
        return record.path if record else None

    def resolve_incoming(self, file_name: str) -> str | None:
        """按文件名解析入站附件路径，仅返回本存储登记过的 incoming 文件"""
        media_id = file_name.split(".", 1)[0]
        record = self._index.get(media_id)
        if record is None or record.direction != MediaDirection.INCOMING:
            return None
        if record.file_name != file_name:
            return None
        return record.path

    async def read(self, media_id: str) -> tuple[bytes, MediaRecord]:
        """读取媒体内容

        Raises:
            MediaNotFoundError: ID 不存在
            StorageError: 读取失败
        """
        record = self._index.get(media_id)
        if record is None:
            raise MediaNotFoundError(media_id)

        try:
            async with aiofiles.open(record.path, "rb") as f:
                data = await f.read()
        except OSError as e:
            raise StorageError(f"读取失败: {e}") from e
        return data, record

    # =========================================================================
    # 删除
    # =========================================================================

    async def consume(self, media_id: str) -> None:
        """删除文件和记录；未知 ID 不做任何事

        文件删除失败只记录日志，记录始终会从索引中移除。
        """
        record = self._index.remove(media_id)
        if record is None:
            return

        await self._delete_file(media_id, record)
        self._stats["consumed"] += 1

    async def _delete_file(self, media_id: str, record: MediaRecord) -> None:
        try:
            await aiofiles.os.remove(record.path)
        except FileNotFoundError:
            logger.warning(f"媒体文件已不存在: {record.path}")
        except OSError as e:
            self._stats["delete_errors"] += 1
            logger.error(f"Failed to delete file: {record.path}, error: {e}")

    async def sweep(self) -> int:
        """清理超过清理间隔的媒体

        Returns:
            清理数量
        """
        logger.debug("Cleaning up old files...")
        evicted = await self._index.sweep(max_idle=self.clear_interval)
        self._stats["swept"] += len(evicted)
        logger.info(f"媒体清理完成: 清理 {len(evicted)} 个, 剩余 {len(self._index)} 个")
        return len(evicted)

    async def clear(self) -> None:
        """删除所有已登记的媒体"""
        for media_id in list(self._index):
            await self.consume(media_id)

    # =========================================================================
    # 后台清理
    # =========================================================================

    async def start(self) -> None:
        """启动定期清理"""
        if self._task and not self._task.done():
            return

        self._task = asyncio.create_task(self._sweep_loop())
        logger.info(f"媒体清理任务已启动，检查间隔: {self.clear_interval}s, 目录: {self.media_root}")

    async def stop(self) -> None:
        """停止定期清理"""
        if self._task and not self._task.done():
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        self._task = None
        logger.info("媒体清理任务已停止")

    async def _sweep_loop(self) -> None:
        while True:
            try:
                await asyncio.sleep(self.clear_interval)
                await self.sweep()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"媒体清理循环异常: {e}")
