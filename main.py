"""vodHub Backend - 多源视频聚合服务入口。"""

import sentry_sdk
from fastapi import Depends, FastAPI
from fastapi.concurrency import asynccontextmanager
from fastapi.routing import APIRoute
from loguru import logger
from starlette.middleware.cors import CORSMiddleware

from src.core.config import settings
from src.core.domain.exceptions import DomainException
from src.core.infrastructure.logging import setup_logging
from src.core.interfaces.http.exceptions import (
    domain_exception_handler,
    global_exception_handler,
)
from src.core.interfaces.http.routers import api_router
from src.modules.sources.application import dependencies as sources_app_deps
from src.modules.sources.domain.catalog import SourceCatalogProvider
from src.modules.sources.infrastructure import dependencies as sources_infra_deps
from src.modules.videos.application import dependencies as videos_app_deps
from src.modules.videos.infrastructure import dependencies as videos_infra_deps

APP_VERSION = "0.1.0"


def custom_generate_unique_id(route: APIRoute) -> str:
    """Generate unique operation IDs for OpenAPI."""
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


# Initialize Sentry if configured
if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(
        dsn=str(settings.SENTRY_DSN),
        enable_tracing=True,
        environment=settings.ENVIRONMENT,
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Application lifespan manager."""
    setup_logging()
    logger.info("Starting vodHub backend...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    yield

    logger.info("Shutting down vodHub backend...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=(
        "多源视频聚合服务 - 并发查询多个视频源，归一化、去重、分页\n\n"
        "- `GET /api/source/category`：按分类聚合\n"
        "- `GET /api/source/hot`：热门视频"
    ),
    version=APP_VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    root_path=settings.ROOTPATH,
    generate_unique_id_function=custom_generate_unique_id,
    lifespan=lifespan,
)

# Dependency overrides (application -> infrastructure)
app.dependency_overrides[sources_app_deps.get_source_catalog_provider] = (
    sources_infra_deps.get_source_catalog_provider
)
app.dependency_overrides[videos_app_deps.get_source_search_client] = (
    videos_infra_deps.get_source_search_client
)

# Exception handlers
app.add_exception_handler(DomainException, domain_exception_handler)
app.add_exception_handler(Exception, global_exception_handler)

# CORS middleware
if settings.all_cors_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.all_cors_origins,
        allow_credentials=True,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/health", tags=["health"])
async def health_check(
    provider: SourceCatalogProvider = Depends(
        sources_app_deps.get_source_catalog_provider
    ),
):
    """Health check endpoint.

    聚合服务无状态，只报告配置中可用视频源的数量。
    """
    try:
        catalog = await provider.load_catalog()
    except DomainException as exc:
        return {
            "status": "degraded",
            "environment": settings.ENVIRONMENT,
            "version": APP_VERSION,
            "components": {"source_catalog": {"status": "error", "error": exc.message}},
        }

    sources = catalog.available_sources(filter_adult=settings.FILTER_ADULT_SOURCES)
    return {
        "status": "healthy" if sources else "degraded",
        "environment": settings.ENVIRONMENT,
        "version": APP_VERSION,
        "components": {
            "source_catalog": {
                "status": "ok",
                "loaded_from": catalog.loaded_from,
                "available_sources": len(sources),
            }
        },
    }


@app.get("/", tags=["root"])
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to vodHub API",
        "docs": f"{settings.API_PREFIX}/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "local",
    )
