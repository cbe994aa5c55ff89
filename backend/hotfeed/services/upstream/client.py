"""Upstream hot-list client: lowest level, one POST per call. No retries, no business logic."""
import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from hotfeed.core.errors import UpstreamError
from hotfeed.services.upstream.config import UpstreamConfig
from hotfeed.services.upstream.types import SourceBatch

logger = logging.getLogger(__name__)

# Epoch values above this are milliseconds (year 2001 in ms vs year 33658 in seconds)
_EPOCH_MILLIS_THRESHOLD = 10**11


def parse_update_time(value: Any) -> datetime | None:
    """Source updateTime -> aware UTC datetime. Accepts epoch millis/seconds or ISO strings."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        if s.isdigit():
            value = int(s)
        else:
            try:
                dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
            except ValueError:
                return None
            return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        seconds = value / 1000 if value > _EPOCH_MILLIS_THRESHOLD else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    return None


def parse_sources(data: list[Any]) -> list[SourceBatch]:
    """Map upstream data[] to SourceBatch. Non-dict sources and non-list item lists are skipped."""
    batches: list[SourceBatch] = []
    for source in data:
        if not isinstance(source, dict):
            logger.debug("Upstream skip malformed source: %r", source)
            continue
        items = source.get("data")
        if not isinstance(items, list):
            items = []
        name = source.get("name")
        type_name = source.get("typeName")
        batches.append(
            SourceBatch(
                source_name=name.strip() if isinstance(name, str) else "",
                source_type=type_name.strip() if isinstance(type_name, str) else "",
                update_time=parse_update_time(source.get("updateTime")),
                items=items,
            )
        )
    return batches


class UpstreamClient:
    """Hot-list aggregation API client."""

    def __init__(
        self,
        config: UpstreamConfig | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or UpstreamConfig()
        self._transport = transport

    @property
    def config(self) -> UpstreamConfig:
        return self._config

    def _post(self) -> dict[str, Any]:
        if not self._config.is_configured():
            raise UpstreamError("Upstream URL not configured. Set UPSTREAM_URL in .env.", kind=UpstreamError.NETWORK)
        try:
            with httpx.Client(timeout=self._config.timeout, transport=self._transport) as c:
                r = c.post(self._config.url, json={}, headers=self._config.headers())
        except httpx.TimeoutException as e:
            raise UpstreamError(f"Upstream timed out after {self._config.timeout}s", kind=UpstreamError.TIMEOUT) from e
        except httpx.HTTPError as e:
            raise UpstreamError(f"Upstream request failed: {e}", kind=UpstreamError.NETWORK) from e
        if not r.is_success:
            raise UpstreamError(
                f"Upstream API error: {r.status_code}",
                kind=UpstreamError.HTTP_STATUS,
                status_code=r.status_code,
            )
        try:
            body = r.json()
        except ValueError as e:
            raise UpstreamError("Upstream returned a non-JSON body", kind=UpstreamError.INVALID_DATA) from e
        if not isinstance(body, dict):
            raise UpstreamError("Upstream body is not an object", kind=UpstreamError.INVALID_DATA)
        return body

    def fetch_raw(self) -> list[SourceBatch]:
        """POST the aggregation endpoint once; return one SourceBatch per upstream source."""
        body = self._post()
        if body.get("code") != 0 or not isinstance(body.get("data"), list):
            raise UpstreamError(
                f"Upstream returned code={body.get('code')!r} without a data list",
                kind=UpstreamError.INVALID_DATA,
            )
        batches = parse_sources(body["data"])
        logger.info(
            "Upstream fetched %s sources (%s raw items)",
            len(batches),
            sum(len(b.items) for b in batches),
        )
        return batches
