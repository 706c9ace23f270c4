"""Infrastructure provider for the video source catalog."""

from __future__ import annotations

import json
from ipaddress import ip_address
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import httpx
from loguru import logger

from src.core.config import settings
from src.modules.sources.domain.catalog import SourceCatalog, SourceCatalogProvider
from src.modules.sources.domain.entities import SourceDescriptor
from src.modules.sources.domain.exceptions import SourceCatalogError


class InfrastructureSourceCatalogProvider(SourceCatalogProvider):
    """Load ``api_site`` catalog from remote URL with snapshot fallback."""

    def __init__(
        self,
        *,
        catalog_url: str | None = None,
        timeout_sec: float | None = None,
        snapshot_path: Path | None = None,
        default_search_path: str | None = None,
        default_search_headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.catalog_url = catalog_url or settings.SOURCES_CONFIG_URL
        self.timeout_sec = timeout_sec or settings.SOURCES_CONFIG_FETCH_TIMEOUT_SEC
        self.snapshot_path = snapshot_path or settings.SOURCES_CONFIG_PATH
        self.default_search_path = (
            default_search_path
            if default_search_path is not None
            else settings.SOURCE_SEARCH_PATH
        )
        self.default_search_headers = (
            default_search_headers
            if default_search_headers is not None
            else {
                "User-Agent": settings.FETCHER_USER_AGENT,
                "Accept": "application/json",
            }
        )
        self._transport = transport

    async def load_sources(self, filter_adult: bool = True) -> list[SourceDescriptor]:
        """Load catalog and return available sources in declaration order."""
        catalog = await self.load_catalog()
        return catalog.available_sources(filter_adult=filter_adult)

    async def load_catalog(self) -> SourceCatalog:
        """Load catalog from remote, then fallback to local snapshot."""
        if self.catalog_url:
            try:
                sources = await self._load_catalog_from_remote(self.catalog_url)
                return SourceCatalog(sources=sources, loaded_from="remote")
            except (
                httpx.HTTPError,
                ValueError,
                json.JSONDecodeError,
            ) as exc:
                logger.warning(f"Failed to load source catalog remotely: {exc}")

        try:
            sources = self._load_catalog_from_snapshot()
        except (OSError, ValueError) as exc:
            raise SourceCatalogError(str(exc)) from exc
        return SourceCatalog(sources=sources, loaded_from="snapshot")

    async def _load_catalog_from_remote(self, url: str) -> list[SourceDescriptor]:
        if not self._is_allowed_public_http_url(url):
            raise ValueError("SOURCES_CONFIG_URL must be a public HTTP(S) URL")

        async with httpx.AsyncClient(
            timeout=self.timeout_sec,
            follow_redirects=False,
            transport=self._transport,
        ) as client:
            response = await client.get(
                url,
                headers={
                    "User-Agent": settings.FETCHER_USER_AGENT,
                    "Accept": "application/json",
                },
            )
            if 300 <= response.status_code < 400:
                raise ValueError("Redirect is not allowed for source catalog fetch")
            response.raise_for_status()
            payload = response.json()
            return self._parse_catalog_payload(payload)

    def _load_catalog_from_snapshot(self) -> list[SourceDescriptor]:
        payload = json.loads(Path(self.snapshot_path).read_text(encoding="utf-8"))
        return self._parse_catalog_payload(payload)

    def _parse_catalog_payload(self, payload: Any) -> list[SourceDescriptor]:
        if not isinstance(payload, dict):
            raise ValueError("Source catalog payload must be a JSON object")

        sites = payload.get("api_site")
        if not isinstance(sites, dict):
            raise ValueError("Source catalog payload missing api_site object")

        parsed_sources: list[SourceDescriptor] = []
        for key, raw_value in sites.items():
            if not isinstance(key, str) or not key.strip():
                continue
            if not isinstance(raw_value, dict):
                continue

            api_value = raw_value.get("api")
            if not isinstance(api_value, str) or not api_value.strip():
                logger.warning(f"Skip source {key}: missing api")
                continue

            name_value = raw_value.get("name")
            name = name_value.strip() if isinstance(name_value, str) else key

            detail_value = raw_value.get("detail")
            detail = detail_value if isinstance(detail_value, str) else None

            search_path_value = raw_value.get("search_path")
            search_path = (
                search_path_value
                if isinstance(search_path_value, str)
                else self.default_search_path
            )

            headers = dict(self.default_search_headers)
            headers_value = raw_value.get("search_headers")
            if isinstance(headers_value, dict):
                headers.update(
                    {str(k): str(v) for k, v in headers_value.items() if v is not None}
                )

            parsed_sources.append(
                SourceDescriptor(
                    key=key.strip(),
                    name=name,
                    api=api_value.strip(),
                    search_path=search_path,
                    search_headers=headers,
                    detail=detail,
                    is_adult=raw_value.get("is_adult") is True,
                    disabled=raw_value.get("disabled") is True,
                )
            )
        return parsed_sources

    @staticmethod
    def _is_allowed_public_http_url(url: str) -> bool:
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https"):
            return False

        host = parsed.hostname
        if not host:
            return False
        if host == "localhost" or host.endswith((".local", ".internal")):
            return False

        try:
            host_ip = ip_address(host)
        except ValueError:
            return True

        if (
            host_ip.is_private
            or host_ip.is_loopback
            or host_ip.is_link_local
            or host_ip.is_reserved
            or host_ip.is_multicast
        ):
            return False
        return True
