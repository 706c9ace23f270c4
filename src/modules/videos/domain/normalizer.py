"""Raw backend record normalization.

后端返回的条目是松散的键值结构（Apple CMS ``vod_*`` 字段），
在这里一次性投影成 VideoRecord，未归一化的结构不向外泄漏。
"""

import re
import uuid
from collections.abc import Callable, Mapping
from typing import Any

from src.core.domain.text import clean_html_tags, collapse_whitespace
from src.modules.sources.domain.entities import SourceDescriptor
from src.modules.videos.domain.entities import UNKNOWN_YEAR, VideoRecord
from src.modules.videos.domain.episodes import extract_episodes

_YEAR_RE = re.compile(r"\d{4}")


def _random_token() -> str:
    return uuid.uuid4().hex[:9]


def _text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, int | float):
        return str(value)
    return ""


def _extract_year(value: Any) -> str:
    match = _YEAR_RE.search(_text(value))
    return match.group(0) if match else UNKNOWN_YEAR


def normalize_record(
    raw: Mapping[str, Any],
    source: SourceDescriptor,
    token_factory: Callable[[], str] = _random_token,
) -> VideoRecord | None:
    """Project one raw backend record onto VideoRecord.

    Returns None when the record has no usable title or poster.
    """
    title = collapse_whitespace(_text(raw.get("vod_name")))
    poster = _text(raw.get("vod_pic")).strip()
    if not title or not poster:
        return None

    backend_id = _text(raw.get("vod_id")).strip()
    record_id = backend_id or f"{source.key}-{token_factory()}"

    return VideoRecord(
        id=record_id,
        title=title,
        poster=poster,
        episodes=extract_episodes(raw.get("vod_play_url")),
        source_key=source.key,
        source_name=source.name,
        class_=_text(raw.get("vod_class")),
        year=_extract_year(raw.get("vod_year")),
        description=clean_html_tags(_text(raw.get("vod_content"))),
        type_name=_text(raw.get("type_name")),
    )
