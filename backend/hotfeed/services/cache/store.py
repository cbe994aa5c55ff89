"""
Cache store: last fetched full item set plus metadata (last update, update count,
force-refresh flag), all TTL-bound in a key-value backend.

The snapshot is one JSON value, so a reader sees either the old or the new set, never
a mix. Metadata keys are rewritten with the same TTL on every put. Reads degrade to
absent/False/0 when the backend is down; writes raise CacheUnavailableError.
"""
import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Sequence

from hotfeed.core.constants import (
    ALL_CACHE_KEYS,
    CACHE_KEY_DATA,
    CACHE_KEY_FORCE_REFRESH,
    CACHE_KEY_LAST_UPDATE,
    CACHE_KEY_UPDATE_COUNT,
    CACHE_TTL_SECONDS,
    FORCE_REFRESH_FLAG_TTL_SECONDS,
)
from hotfeed.core.errors import CacheUnavailableError
from hotfeed.schemas import CacheSnapshot, CacheStats, RankedItem
from hotfeed.services.cache.backends import CacheBackend

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str | None) -> datetime | None:
    if not value or not isinstance(value, str):
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


class CacheStore:
    """Owns the CacheSnapshot lifetime. The coordinator only reads and replaces it."""

    def __init__(
        self,
        backend: CacheBackend,
        *,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._backend = backend
        self._ttl = ttl_seconds
        self._clock = clock or _utcnow

    @property
    def backend(self) -> CacheBackend:
        return self._backend

    @property
    def ttl_seconds(self) -> int:
        return self._ttl

    def _read(self, key: str) -> str | None:
        try:
            return self._backend.get(key)
        except CacheUnavailableError as e:
            logger.warning("Cache read %s failed, treating as cold cache: %s", key, e)
            return None

    def _read_json(self, key: str):
        raw = self._read(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            logger.warning("Cache value for %s is not valid JSON; ignoring", key)
            return None

    # --- Snapshot ---

    def get(self) -> CacheSnapshot | None:
        """Cached snapshot, or None if missing, expired, unreadable or the backend is down."""
        raw = self._read(CACHE_KEY_DATA)
        if raw is None:
            return None
        try:
            return CacheSnapshot.model_validate_json(raw)
        except ValueError as e:
            logger.warning("Cache snapshot unreadable; ignoring: %s", e)
            return None

    def put(self, items: Sequence[RankedItem], is_forced_refresh: bool) -> CacheSnapshot:
        """
        Replace the snapshot. update_count goes up only for forced refreshes; a forced
        write also clears the force-refresh flag. Raises CacheUnavailableError.
        """
        now = self._clock().isoformat()
        update_count = self.get_update_count() + (1 if is_forced_refresh else 0)
        snapshot = CacheSnapshot(items=list(items), last_update=now, update_count=update_count)
        self._backend.set(CACHE_KEY_DATA, snapshot.model_dump_json(by_alias=True), self._ttl)
        self._backend.set(CACHE_KEY_LAST_UPDATE, json.dumps(now), self._ttl)
        self._backend.set(CACHE_KEY_UPDATE_COUNT, json.dumps(update_count), self._ttl)
        if is_forced_refresh:
            self._backend.delete(CACHE_KEY_FORCE_REFRESH)
        action = "Forced refresh" if is_forced_refresh else "Auto refresh"
        logger.info("%s stored %s items (update_count=%s)", action, len(snapshot.items), update_count)
        return snapshot

    # --- Metadata ---

    def get_last_update(self) -> datetime | None:
        value = self._read_json(CACHE_KEY_LAST_UPDATE)
        return parse_timestamp(value) if isinstance(value, str) else None

    def get_update_count(self) -> int:
        value = self._read_json(CACHE_KEY_UPDATE_COUNT)
        if isinstance(value, bool) or not isinstance(value, int):
            return 0
        return value

    def is_valid(self) -> bool:
        """True iff the last write is younger than the TTL."""
        last = self.get_last_update()
        if last is None:
            return False
        return self._clock() - last < timedelta(seconds=self._ttl)

    # --- Force-refresh flag ---

    def set_force_refresh(self) -> None:
        """Next plain read does a forced refresh (flag expires after a minute)."""
        self._backend.set(CACHE_KEY_FORCE_REFRESH, json.dumps(True), FORCE_REFRESH_FLAG_TTL_SECONDS)
        logger.info("Force-refresh flag set")

    def should_force_refresh(self) -> bool:
        return self._read_json(CACHE_KEY_FORCE_REFRESH) is True

    # --- Admin ---

    def clear(self) -> None:
        self._backend.delete(*ALL_CACHE_KEYS)
        logger.info("Cache cleared")

    def stats(self) -> CacheStats:
        snapshot = self.get()
        last = self.get_last_update()
        return CacheStats(
            has_data=snapshot is not None,
            last_update=last.isoformat() if last else None,
            update_count=self.get_update_count(),
            is_force_refresh=self.should_force_refresh(),
            is_valid=self.is_valid(),
        )

    def categories(self) -> list[str]:
        """Sorted unique categories of the cached items; [] when nothing is cached."""
        snapshot = self.get()
        if not snapshot:
            return []
        return sorted({it.category for it in snapshot.items if it.category})
