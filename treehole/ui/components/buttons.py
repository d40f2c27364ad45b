"""Reusable button components for the UI."""
from __future__ import annotations

from markupsafe import Markup, escape


def _attrs(pairs: dict[str, str | None]) -> str:
    return " ".join(f'{name}="{escape(value)}"' for name, value in pairs.items() if value is not None)


def _shortcut_trigger(source: str | None) -> str | None:
    if not source:
        return None
    return f"click, keydown[(ctrlKey||metaKey)&&key=='Enter'] from:{source}"


def primary(
    label: str,
    *,
    id_: str | None = None,
    post_url: str | None = None,
    target: str | None = None,
    include: str | None = None,
    disabled: bool = False,
    shortcut_from: str | None = None,
) -> Markup:
    """Return a stylised submit button; disabled buttons ignore clicks.

    ``shortcut_from`` names the field whose Ctrl+Enter (Cmd+Enter) also submits.
    """

    base = "inline-flex items-center justify-center gap-2 rounded-full bg-indigo-600 px-5 py-2 text-sm font-semibold text-white shadow-lg shadow-indigo-500/30 transition hover:bg-indigo-500 disabled:cursor-not-allowed disabled:opacity-60"
    attrs = _attrs(
        {
            "id": id_,
            "hx-post": post_url,
            "hx-target": target,
            "hx-include": include,
            "hx-trigger": _shortcut_trigger(shortcut_from),
            "hx-swap": "outerHTML" if target else None,
            "hx-disabled-elt": "this" if post_url else None,
        }
    )
    disabled_attr = " disabled" if disabled else ""
    return Markup(f"<button type=\"button\" class=\"{base}\" {attrs}{disabled_attr}>{escape(label)}</button>")


def ghost(
    label: str | Markup,
    *,
    id_: str | None = None,
    get_url: str | None = None,
    target: str | None = None,
    css: str = "",
    title: str | None = None,
    oob: bool = False,
) -> Markup:
    """Return a subtle button suitable for secondary actions."""

    base = f"inline-flex items-center gap-2 rounded-full border border-slate-600/40 px-4 py-2 text-sm font-medium text-slate-100 transition hover:border-indigo-500 hover:text-indigo-300 {css}".strip()
    attrs = _attrs(
        {
            "id": id_,
            "hx-get": get_url,
            "hx-target": target,
            "hx-swap": "outerHTML" if target else None,
            "title": title,
            "hx-swap-oob": "true" if oob else None,
        }
    )
    return Markup(f"<button type=\"button\" class=\"{base}\" {attrs}>{escape(label)}</button>")


__all__ = ["primary", "ghost"]
