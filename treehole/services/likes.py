"""Client-local like counters.

The board has no like endpoint, so counts live only in this store (a JSON object
keyed by comment id) and are never sent to the server.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class LikeStore:
    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path) if path else None
        self._likes: dict[str, int] = self._load()

    def _load(self) -> dict[str, int]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable like store at %s", self.path)
            return {}
        if not isinstance(raw, dict):
            return {}
        likes: dict[str, int] = {}
        for key, value in raw.items():
            try:
                likes[str(key)] = max(0, int(value))
            except (TypeError, ValueError):
                continue
        return likes

    def _save(self) -> None:
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._likes, ensure_ascii=False), encoding="utf-8")

    def get(self, comment_id: str) -> int | None:
        return self._likes.get(str(comment_id))

    def is_liked(self, comment_id: str) -> bool:
        return bool(self._likes.get(str(comment_id)))

    def effective_count(self, comment_id: str, seed: int | None) -> int:
        """Local count when present, otherwise the server's seed value."""

        return self._likes.get(str(comment_id)) or seed or 0

    def like(self, comment_id: str, current: int) -> int:
        count = max(0, int(current)) + 1
        self._likes[str(comment_id)] = count
        self._save()
        return count


__all__ = ["LikeStore"]
