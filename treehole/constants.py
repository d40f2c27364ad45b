"""Project-wide constant values."""
from __future__ import annotations

PAGE_SIZE = 10
PAGE_WINDOW_WIDTH = 5

COMMENT_CACHE_MAX_AGE_MINUTES = 3
FETCH_TIMEOUT_SECONDS = 5.0

COLLAPSE_THRESHOLD_CHARS = 200  # longer post bodies start collapsed

__all__ = [
    "PAGE_SIZE",
    "PAGE_WINDOW_WIDTH",
    "COMMENT_CACHE_MAX_AGE_MINUTES",
    "FETCH_TIMEOUT_SECONDS",
    "COLLAPSE_THRESHOLD_CHARS",
]
