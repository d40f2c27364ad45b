"""Pydantic schemas for the board's post and comment payloads."""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..constants import PAGE_SIZE
from ..errors import MalformedDataError

logger = logging.getLogger(__name__)


def _coerce_identifier(value: Any) -> str:
    if value is None or isinstance(value, bool):
        raise ValueError("identifier is required")
    text = str(value).strip()
    if not text:
        raise ValueError("identifier is required")
    return text


def _coerce_timestamp(value: Any) -> Any:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


class PostSummary(BaseModel):
    """A post as listed in the paginated feed."""

    model_config = ConfigDict(extra="ignore")

    id: str
    content: str = ""
    created_at: datetime | None = None
    comments_count: int = Field(default=0, ge=0)

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> str:
        return _coerce_identifier(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _lenient_timestamp(cls, value: Any) -> Any:
        return _coerce_timestamp(value)

    @field_validator("content", mode="before")
    @classmethod
    def _content_or_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("comments_count", mode="before")
    @classmethod
    def _count_or_zero(cls, value: Any) -> int:
        try:
            return max(0, int(value or 0))
        except (TypeError, ValueError):
            return 0


class Comment(BaseModel):
    """A reply attached to exactly one post."""

    model_config = ConfigDict(extra="ignore")

    id: str
    post_id: str | None = None
    content: str = ""
    created_at: datetime | None = None
    # seed value only; local likes live in the like store
    likes: int | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _normalize_id(cls, value: Any) -> str:
        return _coerce_identifier(value)

    @field_validator("likes", mode="before")
    @classmethod
    def _lenient_likes(cls, value: Any) -> int | None:
        try:
            return None if value is None else max(0, int(value))
        except (TypeError, ValueError):
            return None

    @field_validator("post_id", mode="before")
    @classmethod
    def _normalize_post_id(cls, value: Any) -> str | None:
        return None if value is None else str(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _lenient_timestamp(cls, value: Any) -> Any:
        return _coerce_timestamp(value)

    @field_validator("content", mode="before")
    @classmethod
    def _content_or_empty(cls, value: Any) -> str:
        return "" if value is None else str(value)


class PostListResponse(BaseModel):
    """Envelope returned by ``GET /posts``."""

    posts: list[PostSummary] = Field(default_factory=list)
    page: int = 1
    total: int = 0
    page_size: int = PAGE_SIZE
    skipped: int = 0

    @classmethod
    def from_payload(cls, data: Any) -> "PostListResponse":
        if not isinstance(data, dict):
            raise MalformedDataError("帖子列表格式错误")
        posts = _parse_items(data.get("posts"), PostSummary, "post")
        try:
            page = int(data.get("page") or 1)
            total = int(data.get("total") or 0)
            page_size = int(data.get("page_size") or PAGE_SIZE)
        except (TypeError, ValueError) as exc:
            raise MalformedDataError("帖子列表分页信息错误") from exc
        return cls(
            posts=posts,
            page=max(1, page),
            total=max(0, total),
            page_size=max(1, page_size),
            skipped=_count_raw(data.get("posts")) - len(posts),
        )


class CommentThread(BaseModel):
    """Ordered comments for one post plus the server's total."""

    comments: list[Comment] = Field(default_factory=list)
    total: int = 0

    @classmethod
    def from_payload(cls, data: Any, *, post_id: str | None = None) -> "CommentThread":
        if not isinstance(data, dict):
            raise MalformedDataError("评论列表格式错误")
        comments = _parse_items(data.get("comments"), Comment, "comment")
        if post_id is not None:
            comments = [
                comment if comment.post_id else comment.model_copy(update={"post_id": post_id})
                for comment in comments
            ]
        try:
            total = int(data.get("total") or len(comments))
        except (TypeError, ValueError):
            total = len(comments)
        return cls(comments=comments, total=max(0, total))


class ContentCreate(BaseModel):
    """Body sent when creating a post or a comment."""

    content: str = Field(..., min_length=1)


def _count_raw(items: Any) -> int:
    return len(items) if isinstance(items, list) else 0


def _parse_items(items: Any, model: type[BaseModel], label: str) -> list[Any]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise MalformedDataError(f"{label} list is not an array")
    parsed: list[Any] = []
    for raw in items:
        if not isinstance(raw, dict):
            logger.warning("Skipping non-object %s entry", label)
            continue
        try:
            parsed.append(model.model_validate(raw))
        except ValidationError:
            logger.warning("Skipping malformed %s entry (id=%r)", label, raw.get("id"))
    return parsed


__all__ = [
    "PostSummary",
    "Comment",
    "PostListResponse",
    "CommentThread",
    "ContentCreate",
]
