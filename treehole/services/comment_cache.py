"""Time-windowed in-memory cache of comment threads keyed by post id."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from ..constants import COMMENT_CACHE_MAX_AGE_MINUTES
from ..schemas import CommentThread


@dataclass(frozen=True)
class CacheEntry:
    thread: CommentThread
    fetched_at: float


class CommentCache:
    """Holds at most one snapshot per post; a put replaces, never merges."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, post_id: str) -> CacheEntry | None:
        return self._entries.get(str(post_id))

    def put(self, post_id: str, thread: CommentThread) -> CacheEntry:
        entry = CacheEntry(thread=thread, fetched_at=self._clock())
        self._entries[str(post_id)] = entry
        return entry

    def invalidate(self, post_id: str) -> None:
        self._entries.pop(str(post_id), None)

    def is_fresh(self, entry: CacheEntry | None, max_age_minutes: float = COMMENT_CACHE_MAX_AGE_MINUTES) -> bool:
        if entry is None:
            return False
        return self.age_seconds(entry) <= max_age_minutes * 60

    def age_seconds(self, entry: CacheEntry) -> float:
        return max(0.0, self._clock() - entry.fetched_at)

    def __contains__(self, post_id: object) -> bool:
        return str(post_id) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["CacheEntry", "CommentCache"]
