"""Single authority deciding between cached and fresh comment threads.

For every post id there is at most one outstanding comment fetch. Callers that
arrive while a fetch is running join it, unless the key was invalidated (or a
forced refresh was requested) after that fetch started. Those callers wait for
the older fetch to settle and then issue their own, so the at-most-one rule
holds and the older result can never repopulate the cache.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..errors import FeedError
from ..schemas import CommentThread
from .comment_cache import CommentCache

if TYPE_CHECKING:
    from ..clients import BoardClient
    from ..ui.reconciler import CommentSection, Reconciler

logger = logging.getLogger(__name__)


@dataclass
class _InFlight:
    task: asyncio.Future[CommentThread]
    generation: int


class RequestCoordinator:
    def __init__(
        self,
        client: "BoardClient",
        reconciler: "Reconciler",
        *,
        cache: CommentCache | None = None,
    ) -> None:
        self._client = client
        self._reconciler = reconciler
        self._cache = cache if cache is not None else CommentCache()
        self._in_flight: dict[str, _InFlight] = {}
        self._generations: dict[str, int] = {}
        self.network_calls = 0

    @property
    def cache(self) -> CommentCache:
        return self._cache

    def in_flight(self, post_id: str) -> bool:
        return str(post_id) in self._in_flight

    def invalidate(self, post_id: str) -> None:
        """Drop the cached thread; loads issued from now on go to the network."""

        key = str(post_id)
        self._cache.invalidate(key)
        self._bump(key)

    def _bump(self, key: str) -> int:
        self._generations[key] = self._generations.get(key, 0) + 1
        return self._generations[key]

    async def load_comments(
        self,
        post_id: str,
        force_refresh: bool = False,
        section: "CommentSection | None" = None,
    ) -> CommentThread | None:
        key = str(post_id)

        if force_refresh:
            self._bump(key)
        else:
            entry = self._cache.get(key)
            if entry is not None and self._cache.is_fresh(entry):
                logger.debug("Comments for %s served from cache", key)
                if section is not None:
                    view = self._reconciler.render_comment_list(entry.thread)
                    section.show_thread(view, self._reconciler.comment_status(entry.thread.total, self._cache.age_seconds(entry)))
                return entry.thread

        if section is not None:
            section.show_loading()

        try:
            thread = await self._fetch_coalesced(key)
        except FeedError as exc:
            logger.warning("Loading comments for %s failed (%s): %s", key, exc.kind, exc.message)
            if section is not None:
                section.show_error(exc)
            return None

        self._reconciler.patch_comment_count(key, thread.total)
        if section is not None:
            view = self._reconciler.render_comment_list(thread)
            section.show_thread(view, self._reconciler.comment_status(thread.total))
        return thread

    async def _fetch_coalesced(self, key: str) -> CommentThread:
        while True:
            generation = self._generations.get(key, 0)
            current = self._in_flight.get(key)
            if current is None:
                break
            if current.generation == generation:
                logger.debug("Joining in-flight comment fetch for %s", key)
                return await asyncio.shield(current.task)
            # an older fetch is still out; let it settle before issuing ours
            await asyncio.wait({current.task})

        task = asyncio.ensure_future(self._fetch(key, generation))
        record = _InFlight(task=task, generation=generation)
        self._in_flight[key] = record
        task.add_done_callback(lambda _task: self._release(key, record))
        return await asyncio.shield(task)

    def _release(self, key: str, record: _InFlight) -> None:
        if self._in_flight.get(key) is record:
            del self._in_flight[key]
        if not record.task.cancelled():
            # joined callers re-raise; this only marks the exception retrieved
            record.task.exception()

    async def _fetch(self, key: str, generation: int) -> CommentThread:
        self.network_calls += 1
        thread = await self._client.fetch_comments(key)
        if self._generations.get(key, 0) == generation:
            self._cache.put(key, thread)
        else:
            logger.debug("Discarding stale comment fetch for %s", key)
        return thread


__all__ = ["RequestCoordinator"]
