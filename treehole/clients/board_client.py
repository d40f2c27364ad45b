from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx

from ..config import get_settings
from ..constants import FETCH_TIMEOUT_SECONDS, PAGE_SIZE
from ..errors import FeedTimeoutError, MalformedDataError, NetworkError, ServerError
from ..schemas import Comment, CommentThread, ContentCreate, PostListResponse, PostSummary

logger = logging.getLogger(__name__)


def _error_detail(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        for key in ("error", "message", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


class BoardClient:
    """Async client for the board's REST API.

    Every call is cancelled once it exceeds ``timeout`` seconds and surfaces as
    FeedTimeoutError. Transport failures become NetworkError and non-2xx
    answers become ServerError.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float = FETCH_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or get_settings().api_base_url).rstrip("/")
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}/",
            transport=transport,
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/json"},
        )

    async def __aenter__(self) -> "BoardClient":
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        try:
            response = await asyncio.wait_for(
                self._client.request(method, path, params=params, json=json),
                timeout=self.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            logger.warning("%s %s timed out after %ss", method, path, self.timeout)
            raise FeedTimeoutError(self.timeout) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, type(exc).__name__)
            raise NetworkError("网络请求失败") from exc

        if not response.is_success:
            logger.debug("%s %s returned %s", method, path, response.status_code)
            raise ServerError(response.status_code, _error_detail(response))

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedDataError("响应不是有效的 JSON") from exc

    async def list_posts(self, page: int = 1, per_page: int = PAGE_SIZE) -> PostListResponse:
        data = await self._request("GET", "posts", params={"page": page, "per_page": per_page})
        return PostListResponse.from_payload(data)

    async def fetch_comments(self, post_id: str) -> CommentThread:
        data = await self._request("GET", f"posts/{quote(str(post_id), safe='')}/comments")
        return CommentThread.from_payload(data, post_id=str(post_id))

    async def create_post(self, content: str) -> PostSummary | None:
        body = ContentCreate(content=content)
        data = await self._request("POST", "posts", json=body.model_dump())
        return _parse_created(PostSummary, data)

    async def create_comment(self, post_id: str, content: str) -> Comment | None:
        body = ContentCreate(content=content)
        data = await self._request(
            "POST",
            f"posts/{quote(str(post_id), safe='')}/comments",
            json=body.model_dump(),
        )
        return _parse_created(Comment, data)


def _parse_created(model: Any, data: Any) -> Any:
    # the write already happened; an odd echo is logged rather than failing it
    if not isinstance(data, dict):
        return None
    try:
        return model.model_validate(data)
    except ValueError:
        logger.warning("Created %s echoed without usable fields", model.__name__)
        return None


__all__ = ["BoardClient"]
