"""
pytest 配置和共享 fixtures。

测试分层：
- unit/: 单元测试（不依赖外部服务，HTTP 通过 httpx.MockTransport 模拟）

使用方法：
    # 运行所有测试
    uv run pytest

    # 只运行单元测试
    uv run pytest tests/unit/
"""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from src.core.config import Settings
from src.modules.sources.domain.entities import SourceDescriptor
from src.modules.videos.domain.entities import VideoRecord

# ============================================
# 配置 Fixtures
# ============================================


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def test_settings() -> Settings:
    """测试环境配置。"""
    return Settings(
        ENVIRONMENT="local",
        FETCHER_TIMEOUT_SEC=0.5,
        SOURCES_CONFIG_URL=None,
    )


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """创建测试 HTTP 客户端。

    测试内可直接修改 app.dependency_overrides，结束后恢复应用自身的覆盖。
    """
    from main import app

    original_overrides = dict(app.dependency_overrides)

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
    app.dependency_overrides.update(original_overrides)


# ============================================
# 领域对象 Fixtures
# ============================================


def make_source(key: str = "src_a", **overrides: Any) -> SourceDescriptor:
    """生成测试用视频源。"""
    data: dict[str, Any] = {
        "key": key,
        "name": f"Source {key}",
        "api": f"https://{key}.example.com/api.php/provide/vod",
        "search_path": "?ac=videolist&wd=",
        "search_headers": {"Accept": "application/json"},
    }
    data.update(overrides)
    return SourceDescriptor(**data)


def make_record(
    title: str = "流浪地球",
    source_key: str = "src_a",
    **overrides: Any,
) -> VideoRecord:
    """生成测试用视频条目。"""
    data: dict[str, Any] = {
        "id": f"{source_key}-{title}",
        "title": title,
        "poster": "https://img.example.com/p.jpg",
        "episodes": ["https://cdn.example.com/1.m3u8"],
        "source_key": source_key,
        "source_name": f"Source {source_key}",
        "class_": "科幻,电影",
        "year": "2019",
        "description": "",
        "type_name": "科幻片",
    }
    data.update(overrides)
    return VideoRecord(**data)


@pytest.fixture
def source_factory() -> Callable[..., SourceDescriptor]:
    return make_source


@pytest.fixture
def record_factory() -> Callable[..., VideoRecord]:
    return make_record


@pytest.fixture
def sample_raw_item() -> dict[str, Any]:
    """示例后端原始条目（Apple CMS videolist 格式）。"""
    return {
        "vod_id": 42,
        "vod_name": "  流浪地球   2 ",
        "vod_pic": "https://img.example.com/wandering.jpg",
        "vod_play_url": (
            "正片$https://cdn-a.example.com/wd2/index.m3u8"
            "$$$"
            "第1集$https://cdn-b.example.com/1.m3u8#第2集$https://cdn-b.example.com/2.m3u8"
        ),
        "vod_class": "科幻,电影",
        "vod_year": "2023年",
        "vod_content": "<p>太阳即将毁灭，</p><p>人类&nbsp;开启&quot;流浪地球&quot;计划。</p>",
        "type_name": "科幻片",
    }
