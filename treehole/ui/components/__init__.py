"""Expose reusable UI components."""
from __future__ import annotations

from . import buttons, cards, feedback, forms, layout, pagination

__all__ = [
    "buttons",
    "cards",
    "feedback",
    "forms",
    "layout",
    "pagination",
]
