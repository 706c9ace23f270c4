"""Per-source search execution.

对单个视频源执行关键词搜索并归一化结果。任何失败都吸收为空结果，
调用方只能看到“该源没有贡献”，无法区分无结果与不可达。
"""

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from loguru import logger

from src.modules.sources.domain.entities import SourceDescriptor
from src.modules.videos.domain.entities import VideoRecord
from src.modules.videos.domain.normalizer import normalize_record
from src.modules.videos.infrastructure.http_fetcher import TimedFetcher


@dataclass(frozen=True)
class SourceSearchResult:
    """单个源的搜索结果。"""

    source_key: str
    records: list[VideoRecord] = field(default_factory=list)
    error_message: str | None = None
    raw_count: int = 0
    duration_ms: int = 0

    @property
    def is_success(self) -> bool:
        return self.error_message is None


class SourceSearchClient:
    """Compose TimedFetcher and normalize_record for one source."""

    def __init__(self, fetcher: TimedFetcher | None = None):
        self.fetcher = fetcher or TimedFetcher()

    @staticmethod
    def build_search_url(source: SourceDescriptor, keyword: str) -> str:
        return source.build_search_url(quote(keyword, safe=""))

    async def search(self, source: SourceDescriptor, keyword: str) -> SourceSearchResult:
        """搜索单个源；任何异常都转为空结果，不影响其他源。"""
        try:
            return await self._search(source, keyword)
        except Exception as exc:
            logger.exception(f"Unexpected error searching {source.name}: {exc!r}")
            return SourceSearchResult(
                source_key=source.key,
                error_message=f"Unexpected error: {exc!r}",
            )

    async def _search(
        self, source: SourceDescriptor, keyword: str
    ) -> SourceSearchResult:
        search_url = self.build_search_url(source, keyword)
        fetch_result = await self.fetcher.fetch(
            search_url, headers=source.search_headers
        )

        if not fetch_result.is_success or fetch_result.response is None:
            logger.warning(
                f"Failed to fetch videos from {source.name}: "
                f"{fetch_result.error_message}"
            )
            return SourceSearchResult(
                source_key=source.key,
                error_message=fetch_result.error_message or "Unknown error",
                duration_ms=fetch_result.duration_ms,
            )

        try:
            payload = fetch_result.response.json()
        except ValueError as exc:
            logger.warning(f"Invalid JSON from {source.name}: {exc}")
            return SourceSearchResult(
                source_key=source.key,
                error_message=f"Invalid JSON: {exc}",
                duration_ms=fetch_result.duration_ms,
            )

        raw_items = self._extract_list(payload)
        if raw_items is None:
            logger.warning(f"Response from {source.name} has no video list")
            return SourceSearchResult(
                source_key=source.key,
                error_message="Response missing list",
                duration_ms=fetch_result.duration_ms,
            )

        records: list[VideoRecord] = []
        for raw_item in raw_items:
            if not isinstance(raw_item, dict):
                continue
            record = normalize_record(raw_item, source)
            if record is not None:
                records.append(record)

        logger.debug(
            f"Source {source.key} returned {len(records)}/{len(raw_items)} records "
            f"for '{keyword}' in {fetch_result.duration_ms}ms"
        )
        return SourceSearchResult(
            source_key=source.key,
            records=records,
            raw_count=len(raw_items),
            duration_ms=fetch_result.duration_ms,
        )

    @staticmethod
    def _extract_list(payload: Any) -> list[Any] | None:
        if not isinstance(payload, dict):
            return None
        items = payload.get("list")
        if not isinstance(items, list):
            return None
        return items
