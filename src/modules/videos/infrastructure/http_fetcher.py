"""带总超时控制的 HTTP GET 抓取器。

失败（超时、非 2xx、网络错误）以 FetchResult 返回，不向调用方抛出。
"""

import asyncio
import time
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

import httpx
from loguru import logger

from src.core.config import settings


class FetchStatus(str, Enum):
    """抓取状态枚举。"""

    SUCCESS = "success"
    TIMEOUT = "timeout"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"


@dataclass
class FetchResult:
    """抓取结果封装。"""

    status: FetchStatus
    url: str
    response: httpx.Response | None = None
    status_code: int | None = None
    error_message: str | None = None
    duration_ms: int = 0

    @property
    def is_success(self) -> bool:
        return self.status == FetchStatus.SUCCESS

    @classmethod
    def success(
        cls, url: str, response: httpx.Response, duration_ms: int = 0
    ) -> "FetchResult":
        return cls(
            status=FetchStatus.SUCCESS,
            url=url,
            response=response,
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

    @classmethod
    def failed(
        cls,
        status: FetchStatus,
        url: str,
        error_message: str,
        status_code: int | None = None,
        duration_ms: int = 0,
    ) -> "FetchResult":
        return cls(
            status=status,
            url=url,
            status_code=status_code,
            error_message=error_message,
            duration_ms=duration_ms,
        )


def default_headers() -> dict[str, str]:
    return {
        "User-Agent": settings.FETCHER_USER_AGENT,
        "Accept": "application/json",
    }


def merge_headers(
    base: Mapping[str, str], overrides: Mapping[str, str] | None
) -> dict[str, str]:
    """合并请求头，调用方的值优先（键名不区分大小写）。"""
    merged = dict(base)
    if not overrides:
        return merged
    lowered = {key.lower(): key for key in merged}
    for key, value in overrides.items():
        existing = lowered.get(key.lower())
        if existing is not None:
            del merged[existing]
        merged[key] = value
        lowered[key.lower()] = key
    return merged


class TimedFetcher:
    """单次 GET 请求，附带硬性截止时间。"""

    def __init__(
        self,
        timeout_sec: float | None = None,
        headers: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.timeout_sec = timeout_sec or settings.FETCHER_TIMEOUT_SEC
        self.headers = dict(headers) if headers is not None else default_headers()
        self._transport = transport

    async def fetch(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        timeout_sec: float | None = None,
    ) -> FetchResult:
        start_time = time.time()
        deadline = timeout_sec or self.timeout_sec
        request_headers = merge_headers(self.headers, headers)

        try:
            async with asyncio.timeout(deadline):
                async with httpx.AsyncClient(
                    timeout=deadline,
                    follow_redirects=True,
                    transport=self._transport,
                ) as client:
                    response = await client.get(url, headers=request_headers)
            response.raise_for_status()
            return FetchResult.success(
                url, response, duration_ms=self._elapsed_ms(start_time)
            )
        except (TimeoutError, httpx.TimeoutException) as exc:
            logger.warning(f"Fetch timeout after {deadline}s for {url}: {exc!r}")
            return FetchResult.failed(
                FetchStatus.TIMEOUT,
                url,
                f"Timeout after {deadline}s",
                duration_ms=self._elapsed_ms(start_time),
            )
        except httpx.HTTPStatusError as exc:
            logger.warning(
                f"Fetch HTTP error for {url}: {exc.response.status_code}"
            )
            return FetchResult.failed(
                FetchStatus.HTTP_ERROR,
                url,
                f"HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
                duration_ms=self._elapsed_ms(start_time),
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning(f"Fetch error for {url}: {exc}")
            return FetchResult.failed(
                FetchStatus.NETWORK_ERROR,
                url,
                f"Error: {str(exc)}",
                duration_ms=self._elapsed_ms(start_time),
            )

    @staticmethod
    def _elapsed_ms(start_time: float) -> int:
        return int((time.time() - start_time) * 1000)
