"""
Web API 异常模块

把核心库异常映射为 HTTP 响应，错误响应体统一为 {"error": ..., "error_code": ...}。
"""

from __future__ import annotations

from fastapi import status
from fastapi.responses import JSONResponse
from loguru import logger

from wabridge_core.common.exceptions import (
    BridgeException,
    ChatNotFoundError,
    ClientNotReadyError,
    ListenerExistsError,
    NotFoundError,
    ValidationError,
)
from wabridge_core.domain.schemas.common import ErrorResponse

# 按顺序匹配，子类在前
_STATUS_MAP: list[tuple[type[BridgeException], int]] = [
    (ListenerExistsError, status.HTTP_409_CONFLICT),
    (ClientNotReadyError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (ChatNotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
]


def status_code_for(exc: BridgeException) -> int:
    for exc_type, status_code in _STATUS_MAP:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def create_error_response(
    status_code: int, message: str, error_code: str | None = None
) -> JSONResponse:
    """创建统一的错误响应"""
    resp = ErrorResponse(error=message, error_code=error_code)
    return JSONResponse(status_code=status_code, content=resp.model_dump(exclude_none=True))


async def bridge_exception_handler(request, exc: BridgeException) -> JSONResponse:
    """处理核心库异常"""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"请求处理失败: {request.method} {request.url.path} -> {exc.message}")
    return create_error_response(status_code, exc.message, exc.error_code)


async def http_exception_handler(request, exc) -> JSONResponse:
    """处理 HTTP 异常"""
    return create_error_response(status_code=exc.status_code, message=str(exc.detail))


async def validation_exception_handler(request, exc) -> JSONResponse:
    """处理请求验证异常"""
    details = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error.get("loc", []))
        details.append(f"{field}: {error.get('msg', '验证失败')}")
    message = "请求参数验证失败"
    if details:
        message = f"{message}: {'; '.join(details)}"
    return create_error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        message=message,
        error_code="VALIDATION_ERROR",
    )


async def general_exception_handler(request, exc: Exception) -> JSONResponse:
    """处理未捕获的异常"""
    logger.exception("未处理异常: {}", exc)
    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="服务器内部错误",
        error_code="INTERNAL_ERROR",
    )
