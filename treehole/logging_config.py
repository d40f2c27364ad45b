"""One-time logging setup for the viewer process."""
from __future__ import annotations

import logging

from .config import get_settings

_CONFIGURED = False


def configure_logging(level: str | None = None) -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return
    resolved = (level or get_settings().log_level or "INFO").upper()
    logging.basicConfig(level=resolved, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    _CONFIGURED = True


__all__ = ["configure_logging"]
