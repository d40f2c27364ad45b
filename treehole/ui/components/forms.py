"""Form field components styled with Tailwind."""
from __future__ import annotations

from markupsafe import Markup, escape


_INPUT_BASE = (
    "block w-full rounded-xl border border-slate-700/60 bg-slate-900/70 px-4 py-2.5 text-sm text-slate-100 "
    "placeholder:text-slate-500 focus:border-indigo-500 focus:ring-2 focus:ring-indigo-600 focus:ring-offset-0"
)


def textarea(name: str, *, id_: str, placeholder: str = "", rows: int = 3, value: str = "") -> Markup:
    return Markup(
        f"""
        <textarea id=\"{escape(id_)}\" name=\"{escape(name)}\" rows=\"{rows}\" placeholder=\"{escape(placeholder)}\" class=\"{_INPUT_BASE} resize-none\">{escape(value)}</textarea>
        """
    )


def post_form(*, draft: str, submit: Markup, oob: bool = False) -> Markup:
    """The new-post composer; swapped out-of-band after a submission."""

    oob_attr = " hx-swap-oob=\"true\"" if oob else ""
    box = textarea("content", id_="new-post-content", placeholder="说点什么吧...", rows=4, value=draft)
    return Markup(
        f"""
        <section id=\"post-form\" class=\"post-form flex flex-col gap-3 rounded-3xl bg-slate-900/70 p-6\"{oob_attr}>
            {box}
            <div class=\"text-right\">{submit}</div>
        </section>
        """
    )


__all__ = ["textarea", "post_form"]
