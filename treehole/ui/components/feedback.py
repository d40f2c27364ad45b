"""Feedback elements: loaders, empty states, error panels and toasts."""
from __future__ import annotations

from markupsafe import Markup, escape

from ..regions import Notice

_TOAST_TONES = {
    "info": "bg-slate-800 text-slate-100",
    "success": "bg-emerald-600 text-white",
    "warning": "bg-amber-500 text-slate-950",
    "error": "bg-rose-600 text-white",
}


def loading_spinner(*, label: str = "正在加载内容") -> Markup:
    return Markup(
        f"""
        <div class=\"loading flex items-center justify-center gap-3 p-3 text-sm text-slate-200\">
            <span class=\"inline-block h-3 w-3 animate-spin rounded-full border-2 border-indigo-500 border-t-transparent\"></span>
            <span>{escape(label)}…</span>
        </div>
        """
    )


def empty_state(message: str) -> Markup:
    return Markup(f"<div class=\"empty-state p-3 text-center text-sm text-slate-400\">{escape(message)}</div>")


def error_panel(message: str, *, kind: str = "unknown", retry_url: str | None = None, retry_target: str | None = None) -> Markup:
    """Inline error with an optional retry button; there is no dismiss action."""

    text = message or "加载失败"
    retry = ""
    if retry_url:
        target_attr = f" hx-target=\"{escape(retry_target)}\" hx-swap=\"outerHTML\"" if retry_target else ""
        retry = (
            f"<button type=\"button\" class=\"retry-btn mt-2 rounded-full border border-slate-600/60 px-3 py-1 text-xs text-slate-200 hover:border-indigo-500\""
            f" hx-get=\"{escape(retry_url)}\"{target_attr}>重试</button>"
        )
    return Markup(
        f"""
        <div class=\"error-message p-3 text-center\" data-error-kind=\"{escape(kind)}\">
            <p class=\"text-sm text-rose-300\">{escape(text)}</p>
            {retry}
        </div>
        """
    )


def toast(notice: Notice) -> Markup:
    tone = _TOAST_TONES.get(notice.level, _TOAST_TONES["info"])
    role = "alert" if notice.blocking else "status"
    return Markup(
        f"<div class=\"toast pointer-events-auto rounded-xl px-4 py-2 text-sm shadow-lg {tone}\" role=\"{role}\" data-level=\"{escape(notice.level)}\">{escape(notice.message)}</div>"
    )


def toast_container(notices: list[Notice] | None = None) -> Markup:
    body = Markup("").join(toast(notice) for notice in notices or [])
    return Markup(
        f"""
        <div id=\"toast-root\" class=\"pointer-events-none fixed inset-x-0 top-5 z-50 flex flex-col items-center gap-3\" hx-swap-oob=\"true\">{body}</div>
        """
    )


__all__ = ["loading_spinner", "empty_state", "error_panel", "toast", "toast_container"]
