"""
依赖注入模块

从 app.state 取出生命周期内构建的组件
"""

from typing import Annotated

from fastapi import Depends, Request

from wabridge_core.application.services.messaging import ChatClient, MessageSendService
from wabridge_core.application.services.webhooks import ListenerRegistry
from wabridge_core.infrastructure.storage.media_store import MediaStore


def get_chat_client(request: Request) -> ChatClient:
    return request.app.state.chat_client


def get_registry(request: Request) -> ListenerRegistry:
    return request.app.state.registry


def get_media_store(request: Request) -> MediaStore:
    return request.app.state.media_store


def get_send_service(request: Request) -> MessageSendService:
    return request.app.state.send_service


ChatClientDep = Annotated[ChatClient, Depends(get_chat_client)]
RegistryDep = Annotated[ListenerRegistry, Depends(get_registry)]
MediaStoreDep = Annotated[MediaStore, Depends(get_media_store)]
SendServiceDep = Annotated[MessageSendService, Depends(get_send_service)]
