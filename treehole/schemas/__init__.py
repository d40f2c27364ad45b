"""Pydantic schemas for board payloads."""
from .feed import Comment, CommentThread, ContentCreate, PostListResponse, PostSummary

__all__ = [
    "Comment",
    "CommentThread",
    "ContentCreate",
    "PostListResponse",
    "PostSummary",
]
