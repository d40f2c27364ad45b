"""Fragment endpoints the rendered markup points at."""
from __future__ import annotations

from urllib.parse import quote


def _segment(value: object) -> str:
    return quote(str(value), safe="")


def posts_fragment(page: int) -> str:
    return f"/fragments/posts?page={int(page)}"


def comments_fragment(post_id: str, *, refresh: bool = False) -> str:
    suffix = "?refresh=1" if refresh else ""
    return f"/fragments/posts/{_segment(post_id)}/comments{suffix}"


def submit_post() -> str:
    return "/fragments/posts"


def submit_comment(post_id: str) -> str:
    return f"/fragments/posts/{_segment(post_id)}/comments"


def like_comment(comment_id: str) -> str:
    return f"/fragments/comments/{_segment(comment_id)}/like"


def dom_id(prefix: str, value: object) -> str:
    """Build an element id from an opaque identifier."""

    safe = "".join(ch if ch.isalnum() or ch in "-_" else "-" for ch in str(value))
    return f"{prefix}-{safe}"


__all__ = [
    "posts_fragment",
    "comments_fragment",
    "submit_post",
    "submit_comment",
    "like_comment",
    "dom_id",
]
