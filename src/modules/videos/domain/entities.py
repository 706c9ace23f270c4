"""Video domain entities."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

UNKNOWN_YEAR = "unknown"


class AggregationMode(str, Enum):
    """聚合模式。"""

    CATEGORY = "category"
    HOT = "hot"


class VideoRecord(BaseModel):
    """归一化后的视频条目，仅在单次请求内存活。"""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="视频ID")
    title: str = Field(..., min_length=1, description="标题")
    poster: str = Field(..., min_length=1, description="封面地址")
    episodes: list[str] = Field(default_factory=list, description="剧集播放地址")
    source_key: str = Field(..., description="来源源标识")
    source_name: str = Field(..., description="来源源名称")
    class_: str = Field(default="", description="分类标签")
    year: str = Field(default=UNKNOWN_YEAR, description="年份")
    description: str = Field(default="", description="简介（已去除 HTML）")
    type_name: str = Field(default="", description="类型名称")

    def dedup_key(self, mode: AggregationMode) -> str:
        """合并阶段的去重键。

        分类模式保留不同源的同名条目；热门模式跨源合并。
        """
        if mode is AggregationMode.HOT:
            return f"{self.title.lower()}-{self.year}-{self.class_}"
        return f"{self.title.lower()}-{self.year}-{self.source_key}"


class AggregatedPage(BaseModel):
    """一次聚合请求的分页结果。"""

    items: list[VideoRecord] = Field(default_factory=list)
    requested_start: int = 0
    requested_limit: int = 0
    total: int = 0
    message: str = "获取成功"
