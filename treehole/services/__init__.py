"""Convenience exports for the service layer."""
from .comment_cache import CacheEntry, CommentCache
from .likes import LikeStore
from .pagination import PageWindow, PaginationController, compute_window, total_pages_for

__all__ = [
    "CacheEntry",
    "CommentCache",
    "LikeStore",
    "PageWindow",
    "PaginationController",
    "compute_window",
    "total_pages_for",
]
