"""Feed page and the fragment endpoints its controls call."""
from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from markupsafe import Markup

from ...config import get_settings
from ...services.feed import FeedSession
from .. import urls
from ..components import buttons, cards, feedback, forms, layout
from ..reconciler import PostCard

router = APIRouter()


def get_feed(request: Request) -> FeedSession:
    return request.app.state.feed


def _html(*parts: Markup, status_code: int = 200) -> HTMLResponse:
    return HTMLResponse(str(Markup("").join(parts)), status_code=status_code)


def _toasts(feed: FeedSession) -> Markup:
    return feedback.toast_container(feed.notifications.drain())


def _post_form(feed: FeedSession, *, oob: bool = False) -> Markup:
    submit = buttons.primary(
        feed.post_control.label,
        id_="submit-post",
        post_url=urls.submit_post(),
        target="#feed",
        include="#new-post-content",
        disabled=feed.post_control.disabled,
        shortcut_from="#new-post-content",
    )
    return forms.post_form(draft=feed.post_input.value, submit=submit, oob=oob)


def _toggle(card: PostCard) -> Markup:
    return cards.comment_toggle(card.post_id, card.comment_count, oob=True)


def _missing(message: str) -> HTMLResponse:
    return _html(feedback.error_panel(message, kind="missing"), status_code=404)


@router.get("/", response_class=HTMLResponse)
async def feed_page(feed: FeedSession = Depends(get_feed)) -> HTMLResponse:
    """Render the full feed page, loading the first page on first visit."""

    if feed.post_list is None:
        await feed.load_posts(1)
    content = Markup("").join([_post_form(feed), feed.render_feed(), _toasts(feed)])
    page = layout.shell(content, app_name=get_settings().app_name, page_title="树洞")
    return HTMLResponse(str(page))


@router.get("/fragments/posts", response_class=HTMLResponse)
async def posts_fragment(page: int = 1, feed: FeedSession = Depends(get_feed)) -> HTMLResponse:
    await feed.load_posts(page)
    return _html(feed.render_feed(), _toasts(feed))


@router.post("/fragments/posts", response_class=HTMLResponse)
async def create_post(content: str = Form(""), feed: FeedSession = Depends(get_feed)) -> HTMLResponse:
    await feed.submit_post(content)
    return _html(feed.render_feed(), _post_form(feed, oob=True), _toasts(feed))


@router.get("/fragments/posts/{post_id}/comments", response_class=HTMLResponse)
async def comments_fragment(post_id: str, refresh: bool = False, feed: FeedSession = Depends(get_feed)) -> HTMLResponse:
    card = feed.card(post_id)
    if card is None:
        return _missing("帖子不在当前页")
    if refresh:
        await card.refresh_comments()
    else:
        await card.toggle_comments()
    return _html(card.section.render(), _toggle(card), _toasts(feed))


@router.post("/fragments/posts/{post_id}/comments", response_class=HTMLResponse)
async def create_comment(post_id: str, content: str = Form(""), feed: FeedSession = Depends(get_feed)) -> HTMLResponse:
    card = feed.card(post_id)
    if card is None:
        return _missing("帖子不在当前页")
    card.section.visible = True
    await card.submit_comment(content)
    return _html(card.section.render(), _toggle(card), _toasts(feed))


@router.post("/fragments/comments/{comment_id}/like", response_class=HTMLResponse)
async def like_comment(comment_id: str, feed: FeedSession = Depends(get_feed)) -> HTMLResponse:
    row = feed.like_comment(comment_id)
    if row is None:
        return _missing("评论不存在")
    return _html(row.render_like(), _toasts(feed))


__all__ = ["router", "get_feed"]
