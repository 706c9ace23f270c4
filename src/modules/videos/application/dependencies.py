"""Video module application dependencies."""

from typing import NoReturn

from fastapi import Depends

from src.core.config import settings
from src.modules.videos.application.aggregation_service import (
    VideoAggregationService,
)
from src.modules.videos.domain.category import CategoryPlanner
from src.modules.videos.infrastructure.search_client import SourceSearchClient


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_source_search_client() -> SourceSearchClient:
    _missing_dependency("SourceSearchClient")


def get_category_planner() -> CategoryPlanner:
    return CategoryPlanner(all_keywords=settings.ALL_CATEGORY_KEYWORDS)


async def get_video_aggregation_service(
    search_client: SourceSearchClient = Depends(get_source_search_client),
    planner: CategoryPlanner = Depends(get_category_planner),
) -> VideoAggregationService:
    return VideoAggregationService(
        search_client=search_client,
        planner=planner,
        hot_source_limit=settings.HOT_SOURCE_LIMIT,
    )
