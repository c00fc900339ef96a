"""服务入口测试"""

from unittest.mock import patch

from fastapi import FastAPI

import wabridge_web_api
from wabridge_core.application.services.messaging import DisconnectedChatClient
from wabridge_core.common.config import settings
from wabridge_web_api.__main__ import main


class TestEntryPoint:
    """测试包导出与启动入口"""

    def test_package_exports_factory(self):
        """测试包只导出应用工厂"""
        assert wabridge_web_api.__all__ == ["create_app"]

        app = wabridge_web_api.create_app()

        assert isinstance(app, FastAPI)
        assert isinstance(app.state.chat_client, DisconnectedChatClient)
        assert app.state.webhook_client is None

    def test_main_runs_factory(self):
        """测试启动时以工厂模式交给 uvicorn"""
        with patch("wabridge_web_api.__main__.uvicorn.run") as run:
            main()

        run.assert_called_once()
        args, kwargs = run.call_args
        assert args == ("wabridge_web_api.app_factory:create_app",)
        assert kwargs["factory"] is True
        assert kwargs["host"] == settings.SERVER_HOST
        assert kwargs["port"] == settings.SERVER_PORT
