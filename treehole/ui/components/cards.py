"""Card-style components for the post feed and comment threads."""
from __future__ import annotations

from datetime import datetime

from markupsafe import Markup, escape

from .. import urls
from ..formatting import format_exact, format_relative
from . import buttons, forms


def comment_toggle_label(count: int) -> Markup:
    """Comment toggle text; the count badge only appears once there are comments."""

    if count > 0:
        return Markup(f"评论 <span class=\"comments-count\">{int(count)}</span>")
    return Markup("评论")


def comment_toggle(post_id: str, count: int, *, oob: bool = False) -> Markup:
    return buttons.ghost(
        comment_toggle_label(count),
        id_=urls.dom_id("toggle", post_id),
        get_url=urls.comments_fragment(post_id),
        target=f"#{urls.dom_id('comments', post_id)}",
        css="comment-toggle",
        oob=oob,
    )


def _timestamp(value: datetime | None, *, css: str) -> Markup:
    exact = format_exact(value)
    title = f" title=\"{escape(exact)}\"" if exact else ""
    return Markup(f"<time class=\"{css} text-xs text-slate-400\"{title}>{escape(format_relative(value))}</time>")


def post_card(
    *,
    post_id: str,
    content: Markup,
    created_at: datetime | None,
    comment_count: int,
    collapsible: bool,
    section: Markup,
    section_visible: bool,
) -> Markup:
    """Return a post card ready for inline rendering."""

    card_id = urls.dom_id("post", post_id)
    body = content if content else Markup("(无内容)")

    collapse_classes = ""
    expand_block = ""
    if collapsible:
        collapse_classes = " collapsible-content max-h-48 overflow-hidden"
        expand_block = (
            f"<div class=\"content-overlay pointer-events-none absolute inset-x-0 bottom-0 h-12 bg-gradient-to-b from-transparent to-slate-900\"></div>"
            f"<button type=\"button\" class=\"expand-btn mt-2 w-full text-center text-xs text-indigo-300\" hx-on:click=\"treeholeToggleExpand(this, '{card_id}')\">展开</button>"
        )

    toggle = comment_toggle(post_id, comment_count)
    posted = _timestamp(created_at, css="post-time")
    frame = comment_section_frame(post_id, section, visible=section_visible)
    return Markup(
        f"""
        <article id=\"{card_id}\" class=\"post-card rounded-3xl bg-slate-900/70 p-6 shadow-lg shadow-black/20\" data-post-id=\"{escape(post_id)}\">
            <div class=\"post-body relative\">
                <div class=\"post-content whitespace-pre-line text-sm text-slate-200{collapse_classes}\">{body}</div>
                {expand_block}
            </div>
            <footer class=\"post-footer mt-4 flex items-center justify-between\">
                {posted}
                {toggle}
            </footer>
            {frame}
        </article>
        """
    )


def comment_section_frame(post_id: str, inner: Markup, *, visible: bool) -> Markup:
    hidden = "" if visible else " hidden"
    return Markup(
        f"<section id=\"{urls.dom_id('comments', post_id)}\" class=\"comment-section mt-4{hidden}\">{inner}</section>"
    )


def comment_section(
    *,
    post_id: str,
    status: str,
    comments: Markup,
    draft: str,
    submit_label: str,
    submit_disabled: bool,
) -> Markup:
    section_id = urls.dom_id("comments", post_id)
    input_id = urls.dom_id("new-comment", post_id)
    refresh = buttons.ghost(
        "刷新",
        get_url=urls.comments_fragment(post_id, refresh=True),
        target=f"#{section_id}",
        css="refresh-comments text-xs",
        title="刷新评论",
    )
    submit = buttons.primary(
        submit_label,
        post_url=urls.submit_comment(post_id),
        target=f"#{section_id}",
        include=f"#{input_id}",
        disabled=submit_disabled,
        shortcut_from=f"#{input_id}",
    )
    textbox = forms.textarea("content", id_=input_id, placeholder="添加评论...", value=draft)
    return Markup(
        f"""
        <div class=\"comments-header mb-2 flex items-center justify-between\">
            <small class=\"comments-status text-xs text-slate-400\">{escape(status)}</small>
            {refresh}
        </div>
        <div class=\"comments-list\">{comments}</div>
        <div class=\"comment-form mt-3 flex flex-col gap-2\">
            {textbox}
            <div class=\"text-right\">{submit}</div>
        </div>
        """
    )


def like_button(*, comment_id: str, likes: int, liked: bool) -> Markup:
    tone = "text-indigo-300" if liked else "text-slate-400"
    return Markup(
        f"<button type=\"button\" class=\"like-btn text-xs {tone}\" title=\"点赞\""
        f" hx-post=\"{escape(urls.like_comment(comment_id))}\" hx-swap=\"outerHTML\">"
        f"<small>👍 {int(likes)}</small></button>"
    )


def comment_row(*, comment_id: str, content: Markup, created_at: datetime | None, like: Markup) -> Markup:
    posted = _timestamp(created_at, css="comment-time")
    return Markup(
        f"""
        <div class=\"comment border-t border-slate-800/70 py-3\" data-comment-id=\"{escape(comment_id)}\">
            <div class=\"comment-content whitespace-pre-line text-sm text-slate-200\">{content}</div>
            <div class=\"comment-footer mt-1 flex items-center justify-between\">
                {posted}
                <div class=\"comment-actions\">{like}</div>
            </div>
        </div>
        """
    )


__all__ = [
    "comment_toggle_label",
    "comment_toggle",
    "post_card",
    "comment_section_frame",
    "comment_section",
    "like_button",
    "comment_row",
]
