"""Plain-text helpers shared across modules."""

import html
import re

_TAG_RE = re.compile(r"<[^>]+>")
_BLANK_LINES_RE = re.compile(r"\n\s*\n+")
_SPACES_RE = re.compile(r"[ \t\u00a0]+")


def clean_html_tags(text: str | None) -> str:
    """移除 HTML 标签并规整空白。

    标签替换为换行，连续空行合并，实体（如 ``&nbsp;``、``&amp;``）解码。
    """
    if not text:
        return ""
    stripped = _TAG_RE.sub("\n", text)
    stripped = html.unescape(stripped)
    stripped = _SPACES_RE.sub(" ", stripped)
    lines = [line.strip() for line in stripped.split("\n")]
    stripped = "\n".join(lines)
    stripped = _BLANK_LINES_RE.sub("\n", stripped)
    return stripped.strip()


def collapse_whitespace(text: str | None) -> str:
    """去除首尾空白并将连续空白压缩为单个空格。"""
    if not text:
        return ""
    return " ".join(text.split())
