"""Application configuration."""

from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import AnyUrl, BeforeValidator, HttpUrl, computed_field
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list | str):
        return v
    raise ValueError(v)


def parse_keywords(v: Any) -> tuple[str, ...]:
    if isinstance(v, str):
        return tuple(i.strip() for i in v.split(",") if i.strip())
    if isinstance(v, list | tuple):
        return tuple(str(i) for i in v)
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "vodHub"
    SERVER_PORT: int = 8000
    ROOTPATH: str = ""
    API_PREFIX: str = "/api"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    BACKEND_CORS_ORIGINS: Annotated[
        list[AnyUrl] | str, BeforeValidator(parse_cors)
    ] = []
    CORS_ALLOW_METHODS: list[str] = ["GET", "OPTIONS"]
    CORS_ALLOW_HEADERS: list[str] = ["*"]

    @computed_field
    @property
    def all_cors_origins(self) -> list[str]:
        return [str(origin).rstrip("/") for origin in self.BACKEND_CORS_ORIGINS]

    # Sentry
    SENTRY_DSN: HttpUrl | None = None

    # Outbound fetch
    FETCHER_TIMEOUT_SEC: float = 8.0
    FETCHER_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
    )
    SOURCE_SEARCH_PATH: str = "?ac=videolist&wd="

    # Source catalog（视频源配置）
    SOURCES_CONFIG_URL: str | None = None
    SOURCES_CONFIG_PATH: Path = (
        Path(__file__).resolve().parents[2] / "resources" / "sources" / "api_sites.json"
    )
    SOURCES_CONFIG_FETCH_TIMEOUT_SEC: float = 5.0
    FILTER_ADULT_SOURCES: bool = True

    # Aggregation
    DEFAULT_CATEGORY: str = "全部"
    ALL_CATEGORY_KEYWORDS: Annotated[
        tuple[str, ...], NoDecode, BeforeValidator(parse_keywords)
    ] = ("热门", "最新", "推荐")
    CATEGORY_PAGE_LIMIT: int = 25
    HOT_PAGE_LIMIT: int = 20
    HOT_SOURCE_LIMIT: int = 3


settings = Settings()
