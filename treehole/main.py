"""Application entry point serving the feed viewer."""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from .clients import BoardClient
from .config import get_settings
from .logging_config import configure_logging
from .services.feed import FeedSession
from .services.likes import LikeStore
from .ui.router import router as ui_router

logger = logging.getLogger(__name__)


def create_app(session: FeedSession | None = None) -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        feed = session or FeedSession(
            BoardClient(settings.api_base_url),
            likes=LikeStore(settings.likes_path),
        )
        app.state.feed = feed
        logger.info("Feed viewer ready against %s", feed.client.base_url)
        try:
            yield
        finally:
            await feed.aclose()

    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)
    app.include_router(ui_router)

    @app.get("/healthz", include_in_schema=False)
    async def healthz() -> dict[str, str]:
        return {"status": "ok"}

    return app


app = create_app()

__all__ = ["app", "create_app"]
