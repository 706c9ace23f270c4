"""Category planning.

后端只提供自由文本搜索，没有分类体系：分类被近似为“关键词搜索 + 本地子串过滤”。
元数据中没有字面包含分类名的相关条目会被漏掉。
"""

import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from src.modules.videos.domain.entities import VideoRecord

ALL_CATEGORY = "全部"
ALL_CATEGORY_ALIASES = frozenset({ALL_CATEGORY, "all"})


def is_all_category(label: str | None) -> bool:
    if label is None:
        return True
    normalized = label.strip()
    return not normalized or normalized.lower() in ALL_CATEGORY_ALIASES


def _accept_all(_record: VideoRecord) -> bool:
    return True


def category_matcher(label: str) -> Callable[[VideoRecord], bool]:
    """按分类名对 class / type_name / title 做不区分大小写的子串匹配。"""
    needle = label.lower()

    def _matches(record: VideoRecord) -> bool:
        return (
            needle in record.class_.lower()
            or needle in record.type_name.lower()
            or needle in record.title.lower()
        )

    return _matches


@dataclass(frozen=True)
class CategoryPlan:
    """一次请求的搜索计划。"""

    keyword: str
    post_filter: Callable[[VideoRecord], bool]
    is_all: bool


class CategoryPlanner:
    """把分类名映射为搜索关键词和后置过滤条件。"""

    def __init__(
        self,
        all_keywords: Sequence[str] = ("热门", "最新", "推荐"),
        rng: random.Random | None = None,
    ):
        if not all_keywords:
            raise ValueError("all_keywords must not be empty")
        self.all_keywords = tuple(all_keywords)
        self._rng = rng or random.Random()

    def plan(self, category_label: str | None) -> CategoryPlan:
        label = category_label or ""
        if is_all_category(label):
            return CategoryPlan(
                keyword=self._rng.choice(self.all_keywords),
                post_filter=_accept_all,
                is_all=True,
            )
        return CategoryPlan(
            keyword=label,
            post_filter=category_matcher(label),
            is_all=False,
        )
