"""Video aggregation API routes."""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from loguru import logger

from src.core.config import settings
from src.core.infrastructure.logging import request_log_context
from src.core.interfaces.http.response import ListResponse
from src.modules.sources.application.dependencies import get_source_catalog_provider
from src.modules.sources.domain.catalog import SourceCatalogProvider
from src.modules.videos.application.aggregation_service import (
    VideoAggregationService,
)
from src.modules.videos.application.dependencies import get_video_aggregation_service
from src.modules.videos.domain.entities import AggregatedPage
from src.modules.videos.interfaces.schemas import VideoResponse

router = APIRouter(prefix="/source", tags=["videos"])


def _to_list_response(page: AggregatedPage) -> ListResponse[VideoResponse]:
    return ListResponse[VideoResponse].success(
        items=[VideoResponse.from_record(item) for item in page.items],
        message=page.message,
    )


def _internal_error(prefix: str, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ListResponse.error(
            f"{prefix}: {exc}", code=status.HTTP_500_INTERNAL_SERVER_ERROR
        ).to_content(),
    )


@router.get(
    "/category",
    response_model=ListResponse[VideoResponse],
    summary="按分类聚合视频",
    description="并发查询所有可用视频源，合并去重后随机排序并分页",
)
async def list_category_videos(
    category: str = Query(settings.DEFAULT_CATEGORY, description="分类名称"),
    start: int = Query(0, ge=0, description="起始偏移"),
    limit: int = Query(settings.CATEGORY_PAGE_LIMIT, ge=0, description="每页数量"),
    catalog: SourceCatalogProvider = Depends(get_source_catalog_provider),
    service: VideoAggregationService = Depends(get_video_aggregation_service),
):
    """Aggregate videos of one category across all sources."""
    try:
        with request_log_context(endpoint="category", category=category):
            sources = await catalog.load_sources(
                filter_adult=settings.FILTER_ADULT_SOURCES
            )
            page = await service.aggregate_category(sources, category, start, limit)
    except Exception as exc:
        logger.exception(f"Error in GET /source/category: {exc}")
        return _internal_error("获取视频失败", exc)

    return _to_list_response(page)


@router.get(
    "/hot",
    response_model=ListResponse[VideoResponse],
    summary="热门视频",
    description="查询前几个视频源的通用关键词结果，跨源去重后随机排序并分页",
)
async def list_hot_videos(
    start: int = Query(0, ge=0, description="起始偏移"),
    limit: int = Query(settings.HOT_PAGE_LIMIT, ge=0, description="每页数量"),
    catalog: SourceCatalogProvider = Depends(get_source_catalog_provider),
    service: VideoAggregationService = Depends(get_video_aggregation_service),
):
    """Aggregate trending videos from the leading sources."""
    try:
        with request_log_context(endpoint="hot"):
            sources = await catalog.load_sources(
                filter_adult=settings.FILTER_ADULT_SOURCES
            )
            page = await service.aggregate_hot(sources, start, limit)
    except Exception as exc:
        logger.exception(f"Error in GET /source/hot: {exc}")
        return _internal_error("获取热门视频失败", exc)

    return _to_list_response(page)
