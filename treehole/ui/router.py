"""Aggregate UI page routes into a single router."""
from __future__ import annotations

from fastapi import APIRouter

from .pages import feed

router = APIRouter(include_in_schema=False)

router.include_router(feed.router)

__all__ = ["router"]
