"""基础接口"""

from fastapi import APIRouter

from wabridge_core.domain.schemas.common import HealthResponse
from wabridge_web_api.deps import ChatClientDep

router = APIRouter()


@router.get("/health", response_model=HealthResponse, summary="健康检查")
async def health_check(client: ChatClientDep):
    return HealthResponse(
        status="healthy",
        whatsapp="ready" if client.is_ready() else "loading",
    )
