"""Source module dependencies."""

from src.modules.sources.infrastructure.catalog_provider import (
    InfrastructureSourceCatalogProvider,
)


async def get_source_catalog_provider() -> InfrastructureSourceCatalogProvider:
    return InfrastructureSourceCatalogProvider()
