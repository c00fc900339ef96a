"""MediaStore 单元测试"""

import base64
from pathlib import Path

import pytest

from wabridge_core.common.exceptions import (
    MediaDownloadError,
    MediaNotFoundError,
    StorageError,
    UnsupportedMediaTypeError,
    ValidationError,
)
from wabridge_core.domain.models.media import MediaDirection
from wabridge_core.infrastructure.storage.media_store import MediaStore


@pytest.fixture
def store(tmp_path, clock):
    return MediaStore(media_root=str(tmp_path), clear_interval=60, clock=clock)


class TestMediaStoreDirectories:
    """测试目录创建"""

    def test_dirs_created(self, tmp_path, store):
        """测试初始化时创建 incoming/outgoing 目录"""
        assert (tmp_path / "incoming").is_dir()
        assert (tmp_path / "outgoing").is_dir()

    def test_dir_properties(self, tmp_path, store):
        """测试目录属性指向媒体根目录下的固定路径"""
        assert store.incoming_dir == tmp_path / "incoming"
        assert store.outgoing_dir == tmp_path / "outgoing"


class TestMediaStoreUpload:
    """测试上传保存"""

    @pytest.mark.asyncio
    async def test_save_upload(self, tmp_path, store):
        """测试上传文件写入 outgoing 目录"""
        media_id = await store.save_upload(b"png-bytes", "image/png")

        path = Path(store.resolve(media_id))
        assert path.parent == tmp_path / "outgoing"
        assert path.name == f"{media_id}.png"
        assert path.read_bytes() == b"png-bytes"

        record = store.get_record(media_id)
        assert record.direction == MediaDirection.OUTGOING
        assert record.mime_type == "image/png"

    @pytest.mark.asyncio
    async def test_unsupported_type_writes_nothing(self, tmp_path, store):
        """测试不支持的类型不写入文件"""
        with pytest.raises(UnsupportedMediaTypeError) as exc_info:
            await store.save_upload(b"data", "application/x-unknown")

        assert "Unsupported MIME type" in exc_info.value.message
        assert list((tmp_path / "outgoing").iterdir()) == []
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_mime_with_parameters(self, store):
        """测试带参数的 MIME 类型"""
        media_id = await store.save_upload(b"ogg", "audio/ogg; codecs=opus")
        assert store.resolve(media_id).endswith(".ogg")

    @pytest.mark.asyncio
    async def test_file_too_large(self, tmp_path, clock):
        """测试超过大小限制"""
        store = MediaStore(media_root=str(tmp_path), max_file_size=4, clock=clock)

        with pytest.raises(ValidationError):
            await store.save_upload(b"12345", "image/png")
        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_zero_size_limit_is_honored(self, tmp_path, clock):
        """测试显式传入 0 的大小限制不会被默认值替换"""
        store = MediaStore(media_root=str(tmp_path), max_file_size=0, clock=clock)

        assert store.max_file_size == 0
        with pytest.raises(ValidationError):
            await store.save_upload(b"1", "image/png")

    @pytest.mark.asyncio
    async def test_write_failure_leaves_no_record(self, tmp_path, store, monkeypatch):
        """测试写入失败时不登记记录"""
        import aiofiles

        def broken_open(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr(aiofiles, "open", broken_open)

        with pytest.raises(StorageError):
            await store.save_upload(b"data", "image/png")
        assert len(store) == 0


class TestMediaStoreDownload:
    """测试入站附件保存"""

    @pytest.mark.asyncio
    async def test_save_base64(self, tmp_path, store):
        """测试 base64 数据解码后写入 incoming 目录"""
        payload = base64.b64encode(b"hello").decode()

        file_name, mime_type = await store.save_downloaded(payload, "image/jpeg")

        assert mime_type == "image/jpeg"
        assert file_name.endswith(".jpeg")
        assert (tmp_path / "incoming" / file_name).read_bytes() == b"hello"
        assert store.resolve_incoming(file_name) == str(tmp_path / "incoming" / file_name)

    @pytest.mark.asyncio
    async def test_empty_payload(self, store):
        """测试上游返回空数据"""
        with pytest.raises(MediaDownloadError):
            await store.save_downloaded(None, "image/jpeg")
        with pytest.raises(MediaDownloadError):
            await store.save_downloaded("", "image/jpeg")

    @pytest.mark.asyncio
    async def test_invalid_base64(self, store):
        """测试无效 base64"""
        with pytest.raises(MediaDownloadError):
            await store.save_downloaded("not base64!!", "image/jpeg")

    @pytest.mark.asyncio
    async def test_resolve_incoming_rejects_outgoing(self, store):
        """测试 outgoing 文件不能通过入站路径访问"""
        media_id = await store.save_upload(b"x", "image/png")
        assert store.resolve_incoming(f"{media_id}.png") is None
        assert store.resolve_incoming("../outgoing/whatever.png") is None


class TestMediaStoreLifecycle:
    """测试读取、消费和清理"""

    @pytest.mark.asyncio
    async def test_read_and_consume(self, store):
        """测试读取后消费，文件和记录都被删除"""
        media_id = await store.save_upload(b"content", "application/pdf")
        path = Path(store.resolve(media_id))

        data, record = await store.read(media_id)
        assert data == b"content"
        assert record.file_name == path.name

        await store.consume(media_id)

        assert not path.exists()
        assert store.resolve(media_id) is None
        with pytest.raises(MediaNotFoundError):
            await store.read(media_id)

    @pytest.mark.asyncio
    async def test_consume_unknown_is_noop(self, store):
        """测试消费未知 ID 不报错"""
        await store.consume("unknown")
        assert store.stats["consumed"] == 0

    @pytest.mark.asyncio
    async def test_consume_when_file_already_gone(self, store):
        """测试文件已被外部删除时仍移除记录"""
        media_id = await store.save_upload(b"x", "image/png")
        Path(store.resolve(media_id)).unlink()

        await store.consume(media_id)

        assert store.get_record(media_id) is None

    @pytest.mark.asyncio
    async def test_sweep_boundary(self, store, clock):
        """测试恰好达到清理间隔的媒体保留，超过后删除"""
        media_id = await store.save_upload(b"x", "image/png")
        path = Path(store.resolve(media_id))

        clock.advance(60)
        assert await store.sweep() == 0
        assert path.exists()

        clock.advance(1)
        assert await store.sweep() == 1
        assert not path.exists()
        assert store.resolve(media_id) is None

    @pytest.mark.asyncio
    async def test_sweep_delete_error_still_removes_record(self, store, clock):
        """测试清理时删除文件失败只记录错误，记录仍被移除"""
        media_id = await store.save_upload(b"x", "image/png")
        path = Path(store.resolve(media_id))
        path.unlink()
        path.mkdir()

        clock.advance(61)
        assert await store.sweep() == 1

        assert store.resolve(media_id) is None
        assert store.stats["swept"] == 1
        assert store.stats["delete_errors"] == 1
        assert path.is_dir()

    @pytest.mark.asyncio
    async def test_read_does_not_extend(self, store, clock):
        """测试读取不续期"""
        media_id = await store.save_upload(b"x", "image/png")
        clock.advance(50)
        await store.read(media_id)
        clock.advance(11)

        assert await store.sweep() == 1

    @pytest.mark.asyncio
    async def test_clear(self, store):
        """测试清空所有媒体"""
        await store.save_upload(b"a", "image/png")
        await store.save_downloaded(base64.b64encode(b"b").decode(), "image/png")

        await store.clear()

        assert len(store) == 0

    @pytest.mark.asyncio
    async def test_start_stop(self, store):
        """测试后台清理任务启停"""
        await store.start()
        assert store._task is not None
        await store.stop()
        assert store._task is None
