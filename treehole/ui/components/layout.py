"""Layout building blocks for the feed page."""
from __future__ import annotations

import os

from markupsafe import Markup, escape

HTMX_SRC = os.getenv("TREEHOLE_HTMX_SRC", "https://unpkg.com/htmx.org@1.9.12")

# collapse/expand is local state only, so it never reaches the server;
# each expand button calls this from its own hx-on:click handler
_EXPAND_SCRIPT = Markup(
    """
    <script>
    function treeholeToggleExpand(button, cardId) {
        var card = document.getElementById(cardId);
        var content = card && card.querySelector(".collapsible-content");
        if (!content) return;
        var expanded = content.classList.toggle("expanded");
        content.classList.toggle("max-h-48", !expanded);
        content.classList.toggle("overflow-hidden", !expanded);
        var overlay = card.querySelector(".content-overlay");
        if (overlay) overlay.classList.toggle("hidden", expanded);
        button.textContent = expanded ? "收起" : "展开";
    }
    </script>
    """
)


def navbar(*, app_name: str) -> Markup:
    return Markup(
        f"""
        <header class=\"sticky top-0 z-40 border-b border-slate-800/60 bg-slate-950/90 backdrop-blur\">
            <div class=\"mx-auto flex max-w-3xl items-center gap-3 px-4 py-4\">
                <a href=\"/\" class=\"text-lg font-semibold text-white\">{escape(app_name)}</a>
            </div>
        </header>
        """
    )


def shell(content: Markup, *, app_name: str, page_title: str = "") -> Markup:
    nav = navbar(app_name=app_name)
    title = f"{page_title} · {app_name}" if page_title else app_name
    return Markup(
        f"""<!DOCTYPE html>
<html lang=\"zh-CN\">
<head>
    <meta charset=\"utf-8\">
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\">
    <title>{escape(title)}</title>
    <script src=\"https://cdn.tailwindcss.com\"></script>
    <script src=\"{escape(HTMX_SRC)}\"></script>
</head>
<body class=\"min-h-screen bg-slate-950 text-slate-100\">
    {nav}
    <main class=\"mx-auto flex w-full max-w-3xl flex-col gap-8 px-4 py-8\">
        {content}
    </main>
    {_EXPAND_SCRIPT}
</body>
</html>
"""
    )


__all__ = ["shell", "navbar"]
