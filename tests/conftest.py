"""Shared fakes: an in-memory board behind httpx.MockTransport and a manual clock."""
from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest

from treehole.clients import BoardClient
from treehole.services.feed import FeedSession

BASE_URL = "http://board.test/api"


class FakeClock:
    def __init__(self, start: float = 1_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeBoard:
    """Enough of the board's REST API to drive the viewer."""

    def __init__(self) -> None:
        self.posts: list[dict[str, Any]] = []
        self.comments: dict[str, list[dict[str, Any]]] = {}
        self.requests: list[tuple[str, str]] = []
        self.failures: dict[tuple[str, str], int] = {}
        self.holds: dict[tuple[str, str], asyncio.Event] = {}
        self.delay = 0.0
        self.total_override: int | None = None
        self._next_id = 100

    def add_post(self, content: str, *, post_id: Any = None, comments_count: int = 0) -> dict[str, Any]:
        post = {
            "id": post_id if post_id is not None else self._new_id(),
            "content": content,
            "created_at": "2026-10-19T08:00:00Z",
            "comments_count": comments_count,
        }
        self.posts.append(post)
        return post

    def add_comment(self, post_id: str, content: str, *, likes: int | None = None) -> dict[str, Any]:
        comment = {
            "id": self._new_id(),
            "post_id": str(post_id),
            "content": content,
            "created_at": "2026-10-19T08:05:00Z",
        }
        if likes is not None:
            comment["likes"] = likes
        self.comments.setdefault(str(post_id), []).append(comment)
        return comment

    def hold(self, method: str, path: str) -> asyncio.Event:
        """Park matching requests until the returned event is set."""

        event = asyncio.Event()
        self.holds[(method, path)] = event
        return event

    def count(self, method: str, path: str) -> int:
        return sum(1 for entry in self.requests if entry == (method, path))

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        method, path = request.method, request.url.path
        self.requests.append((method, path))
        parts = path.removeprefix("/api/").split("/")
        # snapshot before parking so a held request answers with what it saw
        snapshot = list(self.comments.get(parts[1], [])) if len(parts) == 3 else []

        if self.delay:
            await asyncio.sleep(self.delay)
        gate = self.holds.get((method, path))
        if gate is not None:
            await gate.wait()

        status = self.failures.get((method, path))
        if status is not None:
            return httpx.Response(status, json={"error": "boom"})

        if parts == ["posts"] and method == "GET":
            page = int(request.url.params.get("page", "1"))
            per_page = int(request.url.params.get("per_page", "10"))
            start = (page - 1) * per_page
            total = self.total_override if self.total_override is not None else len(self.posts)
            return httpx.Response(
                200,
                json={"posts": self.posts[start:start + per_page], "page": page, "total": total, "page_size": per_page},
            )
        if parts == ["posts"] and method == "POST":
            body = json.loads(request.content)
            post = {"id": self._new_id(), "content": body["content"], "created_at": "2026-10-19T09:00:00Z", "comments_count": 0}
            self.posts.insert(0, post)
            return httpx.Response(201, json=post)
        if len(parts) == 3 and parts[0] == "posts" and parts[2] == "comments":
            if method == "GET":
                return httpx.Response(200, json={"comments": snapshot, "total": len(snapshot)})
            body = json.loads(request.content)
            comment = self.add_comment(parts[1], body["content"])
            return httpx.Response(201, json=comment)
        return httpx.Response(404, json={"error": "not found"})


def comments_path(post_id: Any) -> str:
    return f"/api/posts/{post_id}/comments"


def make_session(board: FakeBoard, *, clock: FakeClock | None = None, timeout: float = 1.0, likes=None) -> FeedSession:
    client = BoardClient(BASE_URL, timeout=timeout, transport=httpx.MockTransport(board))
    return FeedSession(client, likes=likes, clock=clock or FakeClock())


@pytest.fixture
def board() -> FakeBoard:
    return FakeBoard()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
