"""Logging configuration.

- loguru: 调试与运行日志（抓取失败、目录回退等）
- structlog: 聚合请求的业务事件，带请求上下文
"""

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog
from loguru import logger

from src.core.config import settings

_LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40, "CRITICAL": 50}

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} - {message}"


def setup_logging(level: str | None = None) -> None:
    """Configure loguru sinks and the structlog pipeline."""
    level = (level or settings.LOG_LEVEL).upper()
    local = settings.ENVIRONMENT == "local"

    logger.remove()
    logger.add(sys.stderr, level=level, format=_CONSOLE_FORMAT, colorize=local)
    if not local:
        logger.add(
            "logs/vodhub_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="14 days",
            level="INFO",
            format=_FILE_FORMAT,
        )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(colors=True)
            if local
            else structlog.processors.JSONRenderer(ensure_ascii=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_LEVELS.get(level, 20)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    logger.info(f"Logging configured with level: {level}")


@contextmanager
def request_log_context(**values: Any) -> Iterator[None]:
    """在当前请求内为业务事件附加上下文字段（如 endpoint、category）。"""
    with structlog.contextvars.bound_contextvars(**values):
        yield


# ============================================================================
# 业务事件
# ============================================================================


class BusinessEvents:
    """聚合流程的业务事件。

    Usage:
        from src.core.infrastructure.logging import BusinessEvents

        BusinessEvents.source_search_failed(source_key="ffzy", reason="Timeout")
    """

    _log = structlog.get_logger("business.events")

    @classmethod
    def source_search_failed(
        cls,
        source_key: str,
        reason: str,
        duration_ms: int = 0,
        **extra: Any,
    ) -> None:
        """单个视频源搜索失败（超时、非 2xx、响应格式错误）。"""
        cls._log.warning(
            "source_search_failed",
            event_type="search",
            source_key=source_key,
            reason=reason,
            duration_ms=duration_ms,
            **extra,
        )

    @classmethod
    def aggregation_completed(
        cls,
        mode: str,
        keyword: str,
        sources_total: int,
        sources_failed: int,
        records_total: int,
        records_unique: int,
        latency_ms: int,
        **extra: Any,
    ) -> None:
        cls._log.info(
            "aggregation_completed",
            event_type="aggregate",
            mode=mode,
            keyword=keyword,
            sources_total=sources_total,
            sources_failed=sources_failed,
            records_total=records_total,
            records_unique=records_unique,
            latency_ms=latency_ms,
            **extra,
        )
