"""Web API 路由测试"""

import base64
from dataclasses import dataclass

import httpx
import pytest
import ujson
from fastapi.testclient import TestClient

from wabridge_core.application.services.messaging import (
    ChatClient,
    DownloadedMedia,
    InboundMessage,
)
from wabridge_core.common.exceptions import ChatNotFoundError
from wabridge_core.domain.schemas.message import Chat, ChatMessage, Contact
from wabridge_web_api.app_factory import create_app
from wabridge_web_api.routes import api_router


class StubChatClient(ChatClient):
    def __init__(self, ready: bool = True):
        self.ready = ready
        self.sent = []

    def is_ready(self) -> bool:
        return self.ready

    async def send_message(self, chat_id, content, options) -> ChatMessage:
        if not chat_id.endswith("@c.us"):
            raise ChatNotFoundError(chat_id)
        self.sent.append((chat_id, content, options))
        return ChatMessage(
            id="sent-1",
            from_="me@c.us",
            to=chat_id,
            from_me=True,
            chat=Chat(id=chat_id),
            contact=Contact(id="me@c.us"),
        )

    async def get_contact_by_id(self, contact_id: str) -> Contact:
        return Contact(id=contact_id)


@dataclass
class StubInbound(InboundMessage):
    downloaded: DownloadedMedia | None = None

    async def get_contact(self) -> Contact:
        return Contact(id=self.from_, pushname="Bob")

    async def get_chat(self) -> Chat:
        return Chat(id=self.from_)

    async def download_media(self) -> DownloadedMedia | None:
        return self.downloaded


@pytest.fixture
def chat_client():
    return StubChatClient()


@pytest.fixture
def client(tmp_path, chat_client):
    app = create_app(chat_client=chat_client, media_root=str(tmp_path))
    with TestClient(app) as test_client:
        yield test_client


def test_api_router_has_routes():
    paths = {route.path for route in api_router.routes if hasattr(route, "path")}
    assert "/health" in paths
    assert "/webhook/subscribe" in paths
    assert "/media/upload" in paths
    assert "/message" in paths


class TestHealth:
    """测试健康检查"""

    def test_ready(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy", "whatsapp": "ready"}

    def test_loading(self, tmp_path):
        """测试未接入客户端时为 loading"""
        with TestClient(create_app(media_root=str(tmp_path))) as test_client:
            assert test_client.get("/health").json()["whatsapp"] == "loading"


class TestWebhookRoutes:
    """测试订阅接口"""

    def test_subscribe_list_delete(self, client):
        """测试订阅、列表和取消订阅"""
        resp = client.post("/webhook/subscribe", json={"url": "http://hook.test/a"})
        assert resp.status_code == 201
        assert resp.json() == {"id": 0}

        resp = client.get("/webhook")
        assert resp.status_code == 200
        assert resp.json() == [{"id": 0, "url": "http://hook.test/a", "failedAttempts": 0}]

        resp = client.delete("/webhook/0")
        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        assert client.get("/webhook").json() == []

    def test_subscribe_missing_url(self, client):
        resp = client.post("/webhook/subscribe", json={})
        assert resp.status_code == 400
        assert resp.json()["error"] == "The request is missing the mandatory 'url' field"

    def test_subscribe_duplicate(self, client):
        client.post("/webhook/subscribe", json={"url": "http://hook.test/a"})
        resp = client.post("/webhook/subscribe", json={"url": "http://hook.test/a"})
        assert resp.status_code == 409
        assert resp.json()["error_code"] == "LISTENER_EXISTS"

    def test_delete_invalid_id(self, client):
        resp = client.delete("/webhook/abc")
        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid id"

    def test_delete_unknown_id(self, client):
        assert client.delete("/webhook/42").status_code == 200


class TestMediaRoutes:
    """测试媒体接口"""

    def test_upload(self, client, tmp_path):
        resp = client.post("/media/upload", files={"media": ("a.png", b"png", "image/png")})
        assert resp.status_code == 201
        media_id = resp.json()["mediaId"]
        assert (tmp_path / "outgoing" / f"{media_id}.png").exists()

    def test_upload_missing_file(self, client):
        resp = client.post("/media/upload", data={"other": "x"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "No media file provided"

    def test_upload_unsupported_type(self, client, tmp_path):
        resp = client.post(
            "/media/upload", files={"media": ("a.bin", b"x", "application/x-unknown")}
        )
        assert resp.status_code == 400
        assert "Unsupported MIME type" in resp.json()["error"]
        assert list((tmp_path / "outgoing").iterdir()) == []

    def test_get_incoming_media(self, client):
        """测试获取入站附件"""
        store = client.app.state.media_store
        file_name, _ = client.portal.call(
            store.save_downloaded, base64.b64encode(b"img").decode(), "image/png"
        )

        resp = client.get(f"/media/{file_name}")

        assert resp.status_code == 200
        assert resp.content == b"img"

    def test_get_unknown_media(self, client):
        resp = client.get("/media/unknown.png")
        assert resp.status_code == 404


class TestMessageRoutes:
    """测试消息发送接口"""

    def test_send_text(self, client, chat_client):
        resp = client.post(
            "/message",
            json={"chatId": "1@c.us", "message": {"type": "text", "text": "hi"}},
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["id"] == "sent-1"
        assert body["from"] == "me@c.us"
        assert body["fromMe"] is True
        assert len(chat_client.sent) == 1

    def test_not_ready_checked_first(self, tmp_path):
        """测试客户端未就绪时返回 503，不解析请求体"""
        app = create_app(chat_client=StubChatClient(ready=False), media_root=str(tmp_path))
        with TestClient(app) as test_client:
            resp = test_client.post("/message", content=b"not json")
        assert resp.status_code == 503
        assert resp.json()["error"] == "WhatsApp client is not ready yet"

    def test_invalid_body(self, client):
        resp = client.post("/message", json={"chatId": "1@c.us", "message": {"type": "unknown"}})
        assert resp.status_code == 400
        assert resp.json()["error"].startswith("Could not parse send message request")

    def test_unknown_media_id(self, client):
        resp = client.post(
            "/message",
            json={"chatId": "1@c.us", "message": {"type": "media", "mediaId": "missing"}},
        )
        assert resp.status_code == 400

    def test_chat_not_found(self, client):
        resp = client.post(
            "/message",
            json={"chatId": "12345", "message": {"type": "text", "text": "hi"}},
        )
        assert resp.status_code == 404
        assert resp.json()["error"] == "The chat could not be found - The chat id should end in @c.us"

    def test_send_uploaded_media_once(self, client):
        """测试上传的附件只能发送一次"""
        media_id = client.post(
            "/media/upload", files={"media": ("a.pdf", b"pdf", "application/pdf")}
        ).json()["mediaId"]
        payload = {"chatId": "1@c.us", "message": {"type": "media", "mediaId": media_id}}

        assert client.post("/message", json=payload).status_code == 201
        assert client.post("/message", json=payload).status_code == 400


class TestInboundDelivery:
    """测试入站消息经客户端回调投递到订阅方"""

    @pytest.fixture
    def received(self):
        return []

    @pytest.fixture
    def bridge(self, tmp_path, chat_client, received):
        def consumer(request: httpx.Request) -> httpx.Response:
            received.append(ujson.loads(request.content))
            return httpx.Response(200)

        webhook_client = httpx.AsyncClient(transport=httpx.MockTransport(consumer))
        app = create_app(
            chat_client=chat_client, media_root=str(tmp_path), webhook_client=webhook_client
        )
        with TestClient(app) as test_client:
            yield test_client

    def test_message_delivered_to_subscriber(self, bridge, chat_client, received):
        """测试客户端收到的消息以 message 事件推送给订阅地址"""
        bridge.post("/webhook/subscribe", json={"url": "http://consumer.test/hook"})

        bridge.portal.call(
            chat_client.emit_message,
            StubInbound(id="in-1", from_="1@c.us", to="me@c.us", body="hello"),
        )

        assert len(received) == 1
        assert received[0]["type"] == "message"
        assert received[0]["data"]["id"] == "in-1"
        assert received[0]["data"]["body"] == "hello"
        assert received[0]["data"]["contact"]["pushname"] == "Bob"

    def test_media_saved_and_served(self, bridge, chat_client, received):
        """测试入站附件先落盘再推送，推送的地址可以下载"""
        bridge.post("/webhook/subscribe", json={"url": "http://consumer.test/hook"})
        downloaded = DownloadedMedia(mime_type="image/png", data=base64.b64encode(b"img").decode())

        bridge.portal.call(
            chat_client.emit_message,
            StubInbound(id="in-2", from_="1@c.us", to="me@c.us", has_media=True, downloaded=downloaded),
        )

        media = received[0]["data"]["media"]
        assert media["saved"] is True
        assert media["mimeType"] == "image/png"
        assert bridge.get(media["fileLocation"]).content == b"img"

    def test_handler_removed_on_shutdown(self, tmp_path, chat_client):
        """测试应用关闭后不再接收消息"""
        with TestClient(create_app(chat_client=chat_client, media_root=str(tmp_path))):
            assert chat_client._message_handler is not None
        assert chat_client._message_handler is None
