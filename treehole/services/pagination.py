"""Page state for the post list and the visible page-number window."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Awaitable, Callable

from markupsafe import Markup

from ..constants import PAGE_SIZE, PAGE_WINDOW_WIDTH
from ..schemas import PostListResponse
from ..ui.components.pagination import pagination_bar
from ..ui.regions import Region

logger = logging.getLogger(__name__)

PageLoader = Callable[[int], Awaitable[PostListResponse | None]]


@dataclass(frozen=True)
class PageWindow:
    current: int
    total_pages: int
    pages: tuple[int, ...]

    @property
    def has_previous(self) -> bool:
        return self.current > 1

    @property
    def has_next(self) -> bool:
        return self.current < self.total_pages


def total_pages_for(total_items: int, page_size: int = PAGE_SIZE) -> int:
    return max(1, math.ceil(max(0, total_items) / max(1, page_size)))


def compute_window(current: int, total_pages: int) -> PageWindow:
    """Contiguous window of up to five pages starting two before ``current``."""

    total_pages = max(1, total_pages)
    current = min(max(1, current), total_pages)
    start = max(1, current - 2)
    end = min(total_pages, start + PAGE_WINDOW_WIDTH - 1)
    return PageWindow(current=current, total_pages=total_pages, pages=tuple(range(start, end + 1)))


class PaginationController:
    """Owns ``current_page``/``total_pages`` and drives post-list reloads."""

    def __init__(self, loader: PageLoader, *, region: Region | None = None) -> None:
        self._loader = loader
        self.region = region
        self.current_page = 1
        self.total_pages = 1

    @property
    def window(self) -> PageWindow:
        return compute_window(self.current_page, self.total_pages)

    def clamp(self, page: int) -> int:
        return min(max(1, int(page)), self.total_pages)

    async def go_to(self, page: int) -> PostListResponse | None:
        target = self.clamp(page)
        if target != page:
            logger.debug("Clamped page %s to %s", page, target)
        self.current_page = target
        payload = await self._loader(target)
        if payload is not None:
            self.update(payload.page, payload.total, payload.page_size)
        self.render()
        return payload

    def update(self, current: int, total_items: int, page_size: int = PAGE_SIZE) -> PageWindow:
        self.total_pages = total_pages_for(total_items, page_size)
        self.current_page = min(max(1, current), self.total_pages)
        return self.window

    def reset(self) -> None:
        self.current_page = 1

    def render(self) -> Markup:
        html = pagination_bar(self.window)
        if self.region is not None:
            self.region.replace(html)
        return html


__all__ = ["PageWindow", "PageLoader", "PaginationController", "compute_window", "total_pages_for"]
