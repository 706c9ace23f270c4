"""Source catalog domain models and ports."""

from dataclasses import dataclass
from typing import Literal, Protocol

from src.modules.sources.domain.entities import SourceDescriptor


@dataclass(frozen=True)
class SourceCatalog:
    """Loaded catalog payload."""

    sources: list[SourceDescriptor]
    loaded_from: Literal["remote", "snapshot"]

    def available_sources(self, filter_adult: bool = True) -> list[SourceDescriptor]:
        """按声明顺序返回可用源，可选过滤成人内容源。"""
        return [
            source
            for source in self.sources
            if source.available and not (filter_adult and source.is_adult)
        ]


class SourceCatalogProvider(Protocol):
    """Port for loading the configured video sources."""

    async def load_catalog(self) -> SourceCatalog: ...

    async def load_sources(self, filter_adult: bool = True) -> list[SourceDescriptor]: ...
