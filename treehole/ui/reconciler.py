"""Turn post-list and comment-list payloads into live UI fragments.

Every fragment gets its interaction handlers bound once, when it is built here.
Handlers delegate to ``CardActions`` (the feed session); nothing in this module
talks to the network or mutates the comment cache.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from markupsafe import Markup

from ..constants import COLLAPSE_THRESHOLD_CHARS
from ..errors import FeedError
from ..schemas import Comment, CommentThread, PostListResponse, PostSummary
from ..services.likes import LikeStore
from . import urls
from .components import cards, feedback
from .formatting import format_cache_age, render_content
from .regions import Control, NotificationTray, Region, TextInput

logger = logging.getLogger(__name__)

EMPTY_POSTS_MESSAGE = "还没有帖子，来发布第一个吧！"
EMPTY_COMMENTS_MESSAGE = "暂无评论"


class CardActions(Protocol):
    async def load_comments(
        self, post_id: str, force_refresh: bool = False, section: "CommentSection | None" = None
    ) -> CommentThread | None: ...

    async def submit_comment(self, card: "PostCard") -> Comment | None: ...


class CommentSection:
    """The per-card region holding status line, comment list and reply form."""

    def __init__(self, post_id: str, actions: CardActions) -> None:
        self.post_id = post_id
        self.status = Region(f"comments-status:{post_id}", "评论")
        self.comments = Region(f"comments-list:{post_id}")
        self.input = TextInput()
        self.submit = Control("回复", busy_label="提交中...")
        self.visible = False
        self._actions = actions

    @property
    def attached(self) -> bool:
        return self.comments.attached

    def show_loading(self) -> None:
        self.comments.replace(feedback.loading_spinner(label="加载评论中"))

    def show_thread(self, view: "CommentListView", status: str) -> None:
        self.comments.replace(view.render())
        self.status.replace(status)

    def show_error(self, exc: FeedError) -> None:
        message = "加载评论超时" if exc.kind == "timeout" else f"加载评论失败: {exc.message}"
        self.comments.replace(
            feedback.error_panel(
                message,
                kind=exc.kind,
                retry_url=urls.comments_fragment(self.post_id, refresh=True),
                retry_target=f"#{urls.dom_id('comments', self.post_id)}",
            )
        )
        self.status.replace("加载失败")

    async def retry(self) -> CommentThread | None:
        return await self._actions.load_comments(self.post_id, True, self)

    refresh = retry

    def detach(self) -> None:
        self.status.detach()
        self.comments.detach()

    def render_inner(self) -> Markup:
        return cards.comment_section(
            post_id=self.post_id,
            status=str(self.status.html),
            comments=self.comments.html,
            draft=self.input.value,
            submit_label=self.submit.label,
            submit_disabled=self.submit.disabled,
        )

    def render(self) -> Markup:
        return cards.comment_section_frame(self.post_id, self.render_inner(), visible=self.visible)

    __html__ = render


class PostCard:
    def __init__(
        self,
        post: PostSummary,
        section: CommentSection,
        actions: CardActions,
        *,
        collapse_threshold: int = COLLAPSE_THRESHOLD_CHARS,
    ) -> None:
        self.post = post
        self.section = section
        self.comment_count = post.comments_count
        self.collapsible = len(post.content) > collapse_threshold
        self.attached = True
        self._actions = actions

    @property
    def post_id(self) -> str:
        return self.post.id

    @property
    def toggle_label(self) -> str:
        return f"评论 {self.comment_count}" if self.comment_count > 0 else "评论"

    async def toggle_comments(self) -> CommentThread | None:
        self.section.visible = not self.section.visible
        if not self.section.visible:
            return None
        return await self._actions.load_comments(self.post_id, False, self.section)

    async def refresh_comments(self) -> CommentThread | None:
        self.section.visible = True
        return await self._actions.load_comments(self.post_id, True, self.section)

    async def submit_comment(self, content: str | None = None) -> Comment | None:
        if self.section.submit.disabled:
            return None
        if content is not None:
            self.section.input.value = content
        return await self._actions.submit_comment(self)

    def set_comment_count(self, count: int) -> None:
        if self.attached:
            self.comment_count = max(0, int(count))

    def bump_comment_count(self) -> None:
        self.set_comment_count(self.comment_count + 1)

    def detach(self) -> None:
        self.attached = False
        self.section.detach()

    def render(self) -> Markup:
        return cards.post_card(
            post_id=self.post_id,
            content=render_content(self.post.content),
            created_at=self.post.created_at,
            comment_count=self.comment_count,
            collapsible=self.collapsible,
            section=self.section.render_inner(),
            section_visible=self.section.visible,
        )

    __html__ = render


class CommentRow:
    def __init__(self, comment: Comment, likes: LikeStore) -> None:
        self.comment = comment
        self.likes = likes.effective_count(comment.id, comment.likes)
        self.liked = likes.is_liked(comment.id)
        self._store = likes

    @property
    def comment_id(self) -> str:
        return self.comment.id

    def like(self) -> int:
        """Local-only like; the count is never sent to the board."""

        self.likes = self._store.like(self.comment_id, self.likes)
        self.liked = True
        return self.likes

    def render_like(self) -> Markup:
        return cards.like_button(
            comment_id=self.comment_id,
            likes=self.likes,
            liked=self.liked,
        )

    def render(self) -> Markup:
        return cards.comment_row(
            comment_id=self.comment_id,
            content=render_content(self.comment.content),
            created_at=self.comment.created_at,
            like=self.render_like(),
        )

    __html__ = render


@dataclass
class PostListView:
    cards: list[PostCard] = field(default_factory=list)
    skipped: int = 0

    @property
    def empty(self) -> bool:
        return not self.cards

    def render(self) -> Markup:
        if self.empty:
            body = feedback.empty_state(EMPTY_POSTS_MESSAGE)
        else:
            body = Markup("").join(card.render() for card in self.cards)
        return Markup(f"<div id=\"posts-container\" class=\"flex flex-col gap-6\">{body}</div>")

    __html__ = render


@dataclass
class CommentListView:
    rows: list[CommentRow] = field(default_factory=list)
    total: int = 0

    @property
    def empty(self) -> bool:
        return not self.rows

    def render(self) -> Markup:
        if self.empty:
            return feedback.empty_state(EMPTY_COMMENTS_MESSAGE)
        body = Markup("").join(row.render() for row in self.rows)
        return Markup(f"<div class=\"comments-wrapper\">{body}</div>")

    __html__ = render


class Reconciler:
    def __init__(
        self,
        actions: CardActions,
        *,
        likes: LikeStore | None = None,
        notifications: NotificationTray | None = None,
        collapse_threshold: int = COLLAPSE_THRESHOLD_CHARS,
    ) -> None:
        self._actions = actions
        self._likes = likes or LikeStore()
        self._notifications = notifications
        self._collapse_threshold = collapse_threshold
        self._cards: dict[str, PostCard] = {}
        self._rows: dict[str, CommentRow] = {}

    def render_post_list(self, payload: PostListResponse | dict[str, Any]) -> PostListView:
        if not isinstance(payload, PostListResponse):
            payload = PostListResponse.from_payload(payload)

        for previous in self._cards.values():
            previous.detach()
        self._cards = {}
        self._rows = {}

        view = PostListView(skipped=payload.skipped)
        for post in payload.posts:
            if post.id in self._cards:
                logger.warning("Skipping duplicate post %s", post.id)
                view.skipped += 1
                continue
            card = PostCard(
                post,
                CommentSection(post.id, self._actions),
                self._actions,
                collapse_threshold=self._collapse_threshold,
            )
            self._cards[post.id] = card
            view.cards.append(card)
        if view.skipped:
            logger.info("Rendered %d posts, skipped %d malformed", len(view.cards), view.skipped)
        return view

    def render_comment_list(self, payload: CommentThread | dict[str, Any]) -> CommentListView:
        if not isinstance(payload, CommentThread):
            payload = CommentThread.from_payload(payload)
        rows = [CommentRow(comment, self._likes) for comment in payload.comments]
        for row in rows:
            self._rows[row.comment_id] = row
        return CommentListView(rows=rows, total=payload.total)

    def card(self, post_id: str) -> PostCard | None:
        return self._cards.get(str(post_id))

    def comment_row(self, comment_id: str) -> CommentRow | None:
        return self._rows.get(str(comment_id))

    def patch_comment_count(self, post_id: str, count: int) -> bool:
        card = self._cards.get(str(post_id))
        if card is None:
            return False
        card.set_comment_count(count)
        return True

    def comment_status(self, total: int, age_seconds: float = 0.0) -> str:
        return f"{total} 条评论 · {format_cache_age(age_seconds)}"

    def like_comment(self, comment_id: str) -> CommentRow | None:
        row = self._rows.get(str(comment_id))
        if row is None:
            return None
        count = row.like()
        if count == 1 and self._notifications is not None:
            self._notifications.info("点赞仅保存在本地")
        return row


__all__ = [
    "CardActions",
    "CommentSection",
    "PostCard",
    "CommentRow",
    "PostListView",
    "CommentListView",
    "Reconciler",
    "EMPTY_POSTS_MESSAGE",
    "EMPTY_COMMENTS_MESSAGE",
]
