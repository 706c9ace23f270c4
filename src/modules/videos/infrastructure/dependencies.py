"""Video module dependencies."""

from src.core.config import settings
from src.modules.videos.infrastructure.http_fetcher import TimedFetcher
from src.modules.videos.infrastructure.search_client import SourceSearchClient


async def get_source_search_client() -> SourceSearchClient:
    return SourceSearchClient(TimedFetcher(timeout_sec=settings.FETCHER_TIMEOUT_SEC))
