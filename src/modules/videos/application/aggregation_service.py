"""视频聚合服务。

协调分类规划、多源并发搜索、合并去重、打乱与分页。
"""

import asyncio
import random
import time
from collections.abc import Sequence

from loguru import logger

from src.core.infrastructure.logging import BusinessEvents
from src.modules.sources.domain.entities import SourceDescriptor
from src.modules.videos.domain.category import CategoryPlan, CategoryPlanner
from src.modules.videos.domain.entities import (
    AggregatedPage,
    AggregationMode,
    VideoRecord,
)
from src.modules.videos.infrastructure.search_client import (
    SourceSearchClient,
    SourceSearchResult,
)

NO_SOURCES_MESSAGE = "暂无可用视频源"
SUCCESS_MESSAGE = "获取成功"


def deduplicate(
    records: Sequence[VideoRecord], mode: AggregationMode
) -> list[VideoRecord]:
    """按去重键合并，保留首次出现的条目。"""
    unique: dict[str, VideoRecord] = {}
    for record in records:
        unique.setdefault(record.dedup_key(mode), record)
    return list(unique.values())


def paginate(records: Sequence[VideoRecord], start: int, limit: int) -> list[VideoRecord]:
    """返回 ``[start, start + limit)`` 区间，越界时为空。"""
    if start < 0 or limit <= 0 or start >= len(records):
        return []
    return list(records[start : start + limit])


class VideoAggregationService:
    """多源视频聚合服务。

    职责：
    - 根据分类生成搜索关键词和过滤条件
    - 并发查询所有源（单源失败只贡献空结果）
    - 合并、过滤、去重、随机排序、分页
    """

    def __init__(
        self,
        search_client: SourceSearchClient,
        planner: CategoryPlanner,
        rng: random.Random | None = None,
        hot_source_limit: int = 3,
    ):
        self.search_client = search_client
        self.planner = planner
        self._rng = rng or random.Random()
        self.hot_source_limit = hot_source_limit

    async def aggregate_category(
        self,
        sources: Sequence[SourceDescriptor],
        category: str | None,
        start: int,
        limit: int,
    ) -> AggregatedPage:
        """全量模式：查询所有源，按源区分去重。"""
        plan = self.planner.plan(category)
        return await self._aggregate(
            sources, plan, AggregationMode.CATEGORY, start, limit
        )

    async def aggregate_hot(
        self,
        sources: Sequence[SourceDescriptor],
        start: int,
        limit: int,
    ) -> AggregatedPage:
        """热门模式：只查询前几个源，跨源去重。"""
        plan = self.planner.plan(None)
        return await self._aggregate(
            list(sources)[: self.hot_source_limit],
            plan,
            AggregationMode.HOT,
            start,
            limit,
        )

    async def _aggregate(
        self,
        sources: Sequence[SourceDescriptor],
        plan: CategoryPlan,
        mode: AggregationMode,
        start: int,
        limit: int,
    ) -> AggregatedPage:
        if not sources:
            logger.info("No video sources available, returning empty page")
            return AggregatedPage(
                requested_start=start,
                requested_limit=limit,
                message=NO_SOURCES_MESSAGE,
            )

        start_time = time.time()
        results = await self._fan_out(sources, plan.keyword)

        merged: list[VideoRecord] = []
        failed = 0
        for source, result in zip(sources, results, strict=True):
            if not result.is_success:
                failed += 1
                BusinessEvents.source_search_failed(
                    source_key=source.key,
                    reason=result.error_message or "Unknown error",
                    duration_ms=result.duration_ms,
                    keyword=plan.keyword,
                )
            merged.extend(result.records)

        if not plan.is_all:
            merged = [record for record in merged if plan.post_filter(record)]

        unique = deduplicate(merged, mode)
        self._rng.shuffle(unique)

        BusinessEvents.aggregation_completed(
            mode=mode.value,
            keyword=plan.keyword,
            sources_total=len(sources),
            sources_failed=failed,
            records_total=len(merged),
            records_unique=len(unique),
            latency_ms=int((time.time() - start_time) * 1000),
        )

        return AggregatedPage(
            items=paginate(unique, start, limit),
            requested_start=start,
            requested_limit=limit,
            total=len(unique),
            message=SUCCESS_MESSAGE,
        )

    async def _fan_out(
        self, sources: Sequence[SourceDescriptor], keyword: str
    ) -> list[SourceSearchResult]:
        # 等待全部源完成（屏障），单源失败只贡献空结果
        tasks = [self.search_client.search(source, keyword) for source in sources]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        results: list[SourceSearchResult] = []
        for source, outcome in zip(sources, outcomes, strict=True):
            if isinstance(outcome, BaseException):
                if not isinstance(outcome, Exception):
                    raise outcome
                logger.warning(f"Search task for {source.key} raised: {outcome!r}")
                outcome = SourceSearchResult(
                    source_key=source.key,
                    error_message=f"Unexpected error: {outcome!r}",
                )
            results.append(outcome)
        return results
