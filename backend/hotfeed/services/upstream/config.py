"""Upstream API config. Endpoint, timeout and User-Agent from settings (UPSTREAM_* in .env) or args."""
from hotfeed.config import settings


class UpstreamConfig:
    """Endpoint and request options for the hot-list aggregation API."""

    __slots__ = ("url", "timeout", "user_agent")

    def __init__(
        self,
        *,
        url: str | None = None,
        timeout: float | None = None,
        user_agent: str | None = None,
    ) -> None:
        self.url = (url or settings.upstream_url).strip()
        self.timeout = timeout if timeout is not None else settings.upstream_timeout_seconds
        self.user_agent = (user_agent or settings.upstream_user_agent).strip()

    def is_configured(self) -> bool:
        return bool(self.url)

    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": self.user_agent,
        }
