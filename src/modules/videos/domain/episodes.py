"""Playback URL parsing.

``vod_play_url`` 字段形如::

    第1集$https://a.com/1.m3u8#第2集$https://a.com/2.m3u8$$$第1集$https://b.com/1.m3u8

``$$$`` 分隔不同播放线路，每条线路内以 ``$`` 前缀标记 m3u8 地址。
"""

import re

PLAY_GROUP_DELIMITER = "$$$"

_M3U8_RE = re.compile(r"\$https?://[^\"'\s]+?\.m3u8")


def extract_episodes(play_url: str | None) -> list[str]:
    """从播放字段中提取规范剧集列表。

    选择匹配数最多的一条线路（并列取先出现者），其余线路整体丢弃；
    线路内按首次出现顺序去重，去掉 ``$`` 前缀并截断括号注释。
    """
    if not play_url or not isinstance(play_url, str):
        return []

    selected: list[str] = []
    for group in play_url.split(PLAY_GROUP_DELIMITER):
        matches = _M3U8_RE.findall(group)
        if len(matches) > len(selected):
            selected = matches

    return [_canonicalize(link) for link in dict.fromkeys(selected)]


def _canonicalize(link: str) -> str:
    link = link[1:]
    paren_index = link.find("(")
    return link[:paren_index] if paren_index > 0 else link
