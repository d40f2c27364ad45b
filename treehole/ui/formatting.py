"""Timestamp and untrusted-content helpers used by the UI components."""
from __future__ import annotations

import re
from datetime import datetime, timezone

from markupsafe import Markup, escape

UNKNOWN_TIME = "未知时间"

_BR_TAG = re.compile(r"<br\s*/?>", re.IGNORECASE)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def format_relative(value: datetime | None, *, now: datetime | None = None) -> str:
    """Render a timestamp the way the feed shows it: relative up to 30 days."""

    if value is None:
        return UNKNOWN_TIME
    moment = _as_utc(value)
    current = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    diff = int((current - moment).total_seconds())

    if diff < 60:
        return "刚刚"
    if diff < 3600:
        return f"{diff // 60} 分钟前"
    if diff < 86400:
        return f"{diff // 3600} 小时前"
    if diff < 2592000:
        return f"{diff // 86400} 天前"
    return moment.strftime("%Y-%m-%d %H:%M")


def format_exact(value: datetime | None) -> str:
    if value is None:
        return ""
    return _as_utc(value).strftime("%Y-%m-%d %H:%M:%S")


def format_cache_age(age_seconds: float) -> str:
    minutes = int(age_seconds // 60)
    if minutes < 1:
        return "刚刚更新"
    if minutes < 60:
        return f"{minutes}分钟前更新"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}小时前更新"
    return f"{hours // 24}天前更新"


def render_content(text: str | None) -> Markup:
    """Escape untrusted post/comment text, keeping only its line breaks."""

    if not text:
        return Markup("")
    normalized = _BR_TAG.sub("\n", text).replace("\r\n", "\n")
    return Markup("<br>").join(escape(line) for line in normalized.split("\n"))


__all__ = [
    "UNKNOWN_TIME",
    "format_relative",
    "format_exact",
    "format_cache_age",
    "render_content",
]
