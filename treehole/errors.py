"""Error taxonomy shared by the client, the coordinator and the submission flow."""
from __future__ import annotations


class FeedError(RuntimeError):
    """Base class for every failure the viewer knows how to present."""

    kind = "unknown"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NetworkError(FeedError):
    """The call failed before any response arrived."""

    kind = "network"


class FeedTimeoutError(NetworkError):
    """The call was cancelled after exceeding the fetch timeout."""

    kind = "timeout"

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"请求超时 ({timeout:g} 秒)")


class ServerError(FeedError):
    """The backend answered with a non-2xx status."""

    kind = "server"

    def __init__(self, status_code: int, detail: str | None = None) -> None:
        self.status_code = status_code
        self.detail = detail
        message = f"服务器错误: {status_code}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class EmptyContentError(FeedError):
    """Submitted content was empty after trimming."""

    kind = "validation"


class MalformedDataError(FeedError):
    """A response was missing fields the viewer depends on."""

    kind = "malformed"


__all__ = [
    "FeedError",
    "NetworkError",
    "FeedTimeoutError",
    "ServerError",
    "EmptyContentError",
    "MalformedDataError",
]
