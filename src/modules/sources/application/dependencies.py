"""Source module application dependencies."""

from typing import NoReturn

from src.modules.sources.domain.catalog import SourceCatalogProvider


def _missing_dependency(name: str) -> NoReturn:
    raise RuntimeError(f"Missing dependency override for {name}")


async def get_source_catalog_provider() -> SourceCatalogProvider:
    _missing_dependency("SourceCatalogProvider")
