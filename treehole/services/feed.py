"""One feed document: the post list, its pagination and the post form.

The session owns the client, the comment cache (through the coordinator), the
pagination state and the regions the page is assembled from.
"""
from __future__ import annotations

import logging
import time
from typing import Callable

from markupsafe import Markup

from ..clients import BoardClient
from ..constants import PAGE_SIZE
from ..errors import FeedError
from ..schemas import Comment, CommentThread, PostListResponse, PostSummary
from ..ui import urls
from ..ui.components import feedback
from ..ui.reconciler import CommentRow, CommentSection, PostCard, PostListView, Reconciler
from ..ui.regions import Control, NotificationTray, Region, TextInput
from .comment_cache import CommentCache
from .coordinator import RequestCoordinator
from .likes import LikeStore
from .pagination import PaginationController
from .submission import SubmissionFlow

logger = logging.getLogger(__name__)


class FeedSession:
    def __init__(
        self,
        client: BoardClient,
        *,
        likes: LikeStore | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.client = client
        self.notifications = NotificationTray()
        self.posts_region = Region("posts", feedback.loading_spinner())
        self.pagination_region = Region("pagination")
        self.post_input = TextInput()
        self.post_control = Control("发表", busy_label="发表中…")
        self.post_list: PostListView | None = None

        self.reconciler = Reconciler(self, likes=likes, notifications=self.notifications)
        self.coordinator = RequestCoordinator(client, self.reconciler, cache=CommentCache(clock))
        self.pagination = PaginationController(self._load_page, region=self.pagination_region)
        self.submission = SubmissionFlow(client, self.coordinator, self.pagination, self.notifications)

    async def aclose(self) -> None:
        await self.client.aclose()

    async def load_posts(self, page: int = 1) -> PostListResponse | None:
        return await self.pagination.go_to(page)

    async def _load_page(self, page: int) -> PostListResponse | None:
        self.posts_region.replace(feedback.loading_spinner())
        try:
            payload = await self.client.list_posts(page, PAGE_SIZE)
        except FeedError as exc:
            logger.warning("Loading page %s failed (%s): %s", page, exc.kind, exc.message)
            message = "加载超时" if exc.kind == "timeout" else f"加载失败: {exc.message}"
            self.posts_region.replace(
                feedback.error_panel(message, kind=exc.kind, retry_url=urls.posts_fragment(page), retry_target="#feed")
            )
            return None

        self.post_list = self.reconciler.render_post_list(payload)
        self.posts_region.replace(self.post_list.render())
        return payload

    def card(self, post_id: str) -> PostCard | None:
        return self.reconciler.card(post_id)

    async def load_comments(
        self,
        post_id: str,
        force_refresh: bool = False,
        section: CommentSection | None = None,
    ) -> CommentThread | None:
        return await self.coordinator.load_comments(post_id, force_refresh, section)

    async def submit_comment(self, card: PostCard) -> Comment | None:
        return await self.submission.submit_comment(
            card.post_id, card.section.input, card.section.submit, card=card
        )

    async def submit_post(self, content: str | None = None) -> PostSummary | None:
        if content is not None and not self.post_control.disabled:
            self.post_input.value = content
        return await self.submission.submit_post(self.post_input, self.post_control)

    def like_comment(self, comment_id: str) -> CommentRow | None:
        return self.reconciler.like_comment(comment_id)

    def render_feed(self) -> Markup:
        return Markup(
            f"<div id=\"feed\" class=\"flex flex-col gap-6\">{self.posts_region.html}"
            f"<nav id=\"pagination\">{self.pagination_region.html}</nav></div>"
        )


__all__ = ["FeedSession"]
