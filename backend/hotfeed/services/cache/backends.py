"""
Key-value backends for the cache store: get/set-with-TTL/delete over string keys.

Values are JSON strings; the backend enforces expiry (a read after the TTL returns
None). Backend failures raise CacheUnavailableError.
"""
import logging
import threading
import time
from datetime import datetime, timezone
from typing import Callable, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from hotfeed.core.errors import CacheUnavailableError
from hotfeed.models.cache_entry import CacheEntry

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class CacheBackend(Protocol):
    """Interface for memory, sql, etc. Same contract; only storage differs."""

    @property
    def backend_id(self) -> str:
        """Registry name (e.g. 'memory', 'sql')."""
        ...

    def get(self, key: str) -> str | None:
        """Value for key, or None if missing or expired."""
        ...

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store value; it expires ttl_seconds from now. Overwrites and resets TTL."""
        ...

    def delete(self, *keys: str) -> None:
        ...


class MemoryBackend:
    """Process-local dict of key -> (value, deadline). Expired keys are dropped on read."""

    backend_id = "memory"

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or time.time
        self._data: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            value, deadline = entry
            if self._clock() >= deadline:
                del self._data[key]
                return None
            return value

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        with self._lock:
            self._data[key] = (value, self._clock() + ttl_seconds)

    def delete(self, *keys: str) -> None:
        with self._lock:
            for key in keys:
                self._data.pop(key, None)


class SqlCacheBackend:
    """cache_entries table; expires_at is checked on read and expired rows deleted lazily."""

    backend_id = "sql"

    def __init__(self, session_factory: sessionmaker | None = None, clock: Clock | None = None) -> None:
        if session_factory is None:
            from hotfeed.db.session import SessionLocal

            session_factory = SessionLocal
        self._session_factory = session_factory
        self._clock = clock or time.time

    def _now(self) -> datetime:
        return datetime.fromtimestamp(self._clock(), tz=timezone.utc)

    def _session(self) -> Session:
        return self._session_factory()

    def get(self, key: str) -> str | None:
        db = self._session()
        try:
            row = db.query(CacheEntry).filter(CacheEntry.cache_key == key).first()
            if not row:
                return None
            expires = row.expires_at
            if expires is not None and expires.tzinfo is None:
                expires = expires.replace(tzinfo=timezone.utc)
            if expires is None or expires <= self._now():
                db.delete(row)
                db.commit()
                return None
            return row.value_json
        except SQLAlchemyError as e:
            db.rollback()
            raise CacheUnavailableError(f"Cache read failed for {key}: {e}") from e
        finally:
            db.close()

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        db = self._session()
        try:
            now = self._now()
            expires_at = datetime.fromtimestamp(self._clock() + ttl_seconds, tz=timezone.utc)
            row = db.query(CacheEntry).filter(CacheEntry.cache_key == key).first()
            if row:
                row.value_json = value
                row.expires_at = expires_at
                row.updated_at = now
            else:
                db.add(CacheEntry(cache_key=key, value_json=value, expires_at=expires_at, updated_at=now))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise CacheUnavailableError(f"Cache write failed for {key}: {e}") from e
        finally:
            db.close()

    def delete(self, *keys: str) -> None:
        if not keys:
            return
        db = self._session()
        try:
            deleted = (
                db.query(CacheEntry)
                .filter(CacheEntry.cache_key.in_(keys))
                .delete(synchronize_session=False)
            )
            db.commit()
            logger.debug("Cache deleted %s rows", deleted)
        except SQLAlchemyError as e:
            db.rollback()
            raise CacheUnavailableError(f"Cache delete failed: {e}") from e
        finally:
            db.close()
