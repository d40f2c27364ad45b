"""Post and comment creation with per-control locking and guaranteed cleanup."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import EmptyContentError, FeedError
from ..schemas import Comment, PostSummary
from ..ui.regions import Control, NotificationTray, TextInput
from .coordinator import RequestCoordinator
from .pagination import PaginationController

if TYPE_CHECKING:
    from ..clients import BoardClient
    from ..ui.reconciler import CommentSection, PostCard

logger = logging.getLogger(__name__)


def _require_content(content_input: TextInput, message: str) -> str:
    content = (content_input.value or "").strip()
    if not content:
        raise EmptyContentError(message)
    return content


class SubmissionFlow:
    def __init__(
        self,
        client: "BoardClient",
        coordinator: RequestCoordinator,
        pagination: PaginationController,
        notifications: NotificationTray,
    ) -> None:
        self._client = client
        self._coordinator = coordinator
        self._pagination = pagination
        self._notifications = notifications

    async def submit_post(self, content_input: TextInput, control: Control) -> PostSummary | None:
        if control.disabled:
            logger.debug("Post submit ignored while a submission is outstanding")
            return None
        try:
            content = _require_content(content_input, "请输入内容")
        except EmptyContentError as exc:
            self._notifications.warning(exc.message)
            return None

        control.acquire()
        try:
            post = await self._client.create_post(content)
        except FeedError as exc:
            logger.warning("Creating post failed: %s", exc.message)
            self._notifications.error(f"发布失败: {exc.message}")
            return None
        else:
            content_input.clear()
            self._pagination.reset()
            await self._pagination.go_to(1)
            self._notifications.success("发布成功")
            return post
        finally:
            control.release()

    async def submit_comment(
        self,
        post_id: str,
        content_input: TextInput,
        control: Control,
        *,
        card: "PostCard | None" = None,
        section: "CommentSection | None" = None,
    ) -> Comment | None:
        if control.disabled:
            logger.debug("Comment submit for %s ignored while a submission is outstanding", post_id)
            return None
        try:
            content = _require_content(content_input, "请输入评论内容")
        except EmptyContentError as exc:
            self._notifications.warning(exc.message)
            return None

        if section is None and card is not None:
            section = card.section

        control.acquire()
        try:
            comment = await self._client.create_comment(post_id, content)
        except FeedError as exc:
            logger.warning("Creating comment on %s failed: %s", post_id, exc.message)
            self._notifications.error(f"发布评论失败: {exc.message}")
            return None
        else:
            content_input.clear()
            self._coordinator.invalidate(post_id)
            if card is not None:
                card.bump_comment_count()
            await self._coordinator.load_comments(post_id, True, section)
            return comment
        finally:
            control.release()


__all__ = ["SubmissionFlow"]
