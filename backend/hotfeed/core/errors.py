"""
Centralized error types and handling for the feed pipeline.
Exception taxonomy plus a rule table that maps failures to user-facing messages,
so routes stay thin and new error types are easy to add.
"""
from __future__ import annotations

from typing import Callable

from fastapi import HTTPException

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class HotfeedError(Exception):
    """Base for all pipeline errors."""


class UpstreamError(HotfeedError):
    """Upstream aggregation API failed: timeout, network, non-2xx or malformed body. Never retried."""

    TIMEOUT = "timeout"
    NETWORK = "network"
    HTTP_STATUS = "http_status"
    INVALID_DATA = "invalid_data"

    def __init__(self, message: str, *, kind: str = NETWORK, status_code: int | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.status_code = status_code


class CacheUnavailableError(HotfeedError):
    """Cache backend unreachable or failed. Readers treat this as a cold cache."""


# ---------------------------------------------------------------------------
# Constants: status codes and user-facing messages
# ---------------------------------------------------------------------------

STATUS_INTERNAL_ERROR = 500

MSG_UPSTREAM_TIMEOUT = "请求超时，请检查网络连接"
MSG_UPSTREAM_NETWORK = "网络错误，无法连接到数据源"
MSG_UPSTREAM_INVALID = "内容解析失败"
MSG_UPSTREAM_DEFAULT = "获取失败，请稍后重试"
MSG_CACHE_UNAVAILABLE = "缓存服务不可用"


# ---------------------------------------------------------------------------
# Error rules: (predicate, message). First match wins.
# ---------------------------------------------------------------------------


def _upstream_kind(kind: str) -> Callable[[Exception], bool]:
    def predicate(exc: Exception) -> bool:
        return isinstance(exc, UpstreamError) and exc.kind == kind

    return predicate


ERROR_RULES: list[tuple[Callable[[Exception], bool], str]] = [
    (_upstream_kind(UpstreamError.TIMEOUT), MSG_UPSTREAM_TIMEOUT),
    (_upstream_kind(UpstreamError.NETWORK), MSG_UPSTREAM_NETWORK),
    (_upstream_kind(UpstreamError.HTTP_STATUS), MSG_UPSTREAM_NETWORK),
    (_upstream_kind(UpstreamError.INVALID_DATA), MSG_UPSTREAM_INVALID),
    (lambda exc: isinstance(exc, CacheUnavailableError), MSG_CACHE_UNAVAILABLE),
]


def user_message(exc: Exception) -> str:
    """Human-readable message for the `error` field of a failed response."""
    for predicate, message in ERROR_RULES:
        if predicate(exc):
            return message
    return MSG_UPSTREAM_DEFAULT


def error_to_http(exc: Exception) -> HTTPException:
    """
    Map an unexpected exception into a 500 HTTPException.
    Known pipeline errors are handled in routes (200 + success=false); anything reaching
    here is a bug or an unknown failure.
    """
    return HTTPException(status_code=STATUS_INTERNAL_ERROR, detail=str(exc) or exc.__class__.__name__)
