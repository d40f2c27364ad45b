"""Page-window navigation widget."""
from __future__ import annotations

from typing import TYPE_CHECKING

from markupsafe import Markup, escape

from .. import urls

if TYPE_CHECKING:
    from ...services.pagination import PageWindow

_LINK = "rounded-full px-3 py-1 text-sm transition"


def _item(label: str, page: int | None, *, active: bool = False) -> Markup:
    if page is None:
        return Markup(f"<li class=\"disabled\"><span class=\"{_LINK} text-slate-600\" aria-disabled=\"true\">{escape(label)}</span></li>")
    if active:
        return Markup(f"<li class=\"active\"><span class=\"{_LINK} bg-indigo-600 text-white\" aria-current=\"page\">{escape(label)}</span></li>")
    return Markup(
        f"<li><a href=\"#\" class=\"{_LINK} text-slate-300 hover:text-white\" data-page=\"{page}\""
        f" hx-get=\"{escape(urls.posts_fragment(page))}\" hx-target=\"#feed\" hx-swap=\"outerHTML\">{escape(label)}</a></li>"
    )


def pagination_bar(window: "PageWindow") -> Markup:
    """Previous / numbered window / next; empty when there is a single page."""

    if window.total_pages <= 1:
        return Markup("")
    items = [_item("上一页", window.current - 1 if window.has_previous else None)]
    items.extend(_item(str(page), page, active=page == window.current) for page in window.pages)
    items.append(_item("下一页", window.current + 1 if window.has_next else None))
    return Markup(f"<ul class=\"pagination flex items-center justify-center gap-2\">{Markup('').join(items)}</ul>")


__all__ = ["pagination_bar"]
