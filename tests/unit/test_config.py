"""配置解析单元测试。"""

from src.core.config import Settings


def test_defaults(test_settings):
    assert test_settings.FETCHER_TIMEOUT_SEC == 0.5
    assert test_settings.SOURCES_CONFIG_URL is None
    assert test_settings.ALL_CATEGORY_KEYWORDS == ("热门", "最新", "推荐")
    assert test_settings.CATEGORY_PAGE_LIMIT == 25
    assert test_settings.HOT_PAGE_LIMIT == 20
    assert test_settings.HOT_SOURCE_LIMIT == 3
    assert test_settings.SOURCES_CONFIG_PATH.name == "api_sites.json"


def test_keywords_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv("ALL_CATEGORY_KEYWORDS", "热门, 最新,,动作")
    assert Settings().ALL_CATEGORY_KEYWORDS == ("热门", "最新", "动作")


def test_cors_origins_from_comma_separated_env(monkeypatch):
    monkeypatch.setenv(
        "BACKEND_CORS_ORIGINS", "https://a.example.com/, https://b.example.com"
    )
    assert Settings().all_cors_origins == [
        "https://a.example.com",
        "https://b.example.com",
    ]
