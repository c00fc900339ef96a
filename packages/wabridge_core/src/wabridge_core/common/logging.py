"""日志配置模块

提供日志初始化、格式化和敏感信息脱敏功能。
Webhook URL 中常带有凭据或 token 参数，写入日志前统一脱敏。
"""

import os
import re
import sys
from typing import Any

from loguru import logger

from wabridge_core.common.config import settings

# 日志格式
CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

# 敏感字段模式（用于脱敏）
SENSITIVE_PATTERNS = [
    # URL 中的用户名密码
    (re.compile(r"(https?)://([^:/@\s]+):([^@/\s]+)@", re.IGNORECASE), r"\1://\2:***@"),
    # 查询参数中的 token/key/secret
    (
        re.compile(
            r"([?&](?:token|access_token|api[_-]?key|key|secret|signature|sig)=)([^&\s#]+)",
            re.IGNORECASE,
        ),
        r"\1***REDACTED***",
    ),
    # 授权头
    (
        re.compile(
            r'(Authorization)["\']?\s*[:=]\s*["\']?(Bearer\s+)?([a-zA-Z0-9_\-\.]{20,})["\']?',
            re.IGNORECASE,
        ),
        r"\1=***REDACTED***",
    ),
]


def sanitize_log_message(message: str) -> str:
    """对日志消息进行敏感信息脱敏"""
    if not message:
        return message

    sanitized = message
    for pattern, replacement in SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)

    return sanitized


class SanitizingFilter:
    """日志脱敏过滤器"""

    def __call__(self, record: dict[str, Any]) -> bool:
        if "message" in record:
            record["message"] = sanitize_log_message(record["message"])
        return True


def setup_logging(
    level: str | None = None,
    log_to_file: bool | None = None,
    log_file_path: str | None = None,
) -> None:
    """初始化日志系统，包含敏感信息脱敏

    Args:
        level: 日志级别，默认使用 settings.LOG_LEVEL
        log_to_file: 是否输出到文件，默认使用 settings.LOG_TO_FILE
        log_file_path: 日志文件路径，默认使用 settings.LOG_FILE_PATH
    """
    logger.remove()

    log_level = level or settings.LOG_LEVEL
    should_log_to_file = log_to_file if log_to_file is not None else settings.LOG_TO_FILE
    file_path = log_file_path or settings.LOG_FILE_PATH

    sanitizing_filter = SanitizingFilter()

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=log_level,
        colorize=True,
        filter=sanitizing_filter,
    )

    if should_log_to_file:
        log_dir = os.path.dirname(file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        logger.add(
            file_path,
            format=FILE_FORMAT,
            level=log_level,
            rotation="100 MB",
            retention="7 days",
            compression="zip",
            encoding="utf-8",
            enqueue=True,
            filter=sanitizing_filter,
        )

    logger.info(f"日志初始化完成: level={log_level}, file={should_log_to_file}, sanitize=True")
