"""
Shared test helpers: fake clock, fake upstream client, counting/failing cache backends.
"""
from datetime import datetime, timedelta, timezone

import pytest

from hotfeed.core.errors import CacheUnavailableError
from hotfeed.services.cache import CacheStore, MemoryBackend
from hotfeed.services.feed import RefreshCoordinator
from hotfeed.services.upstream import SourceBatch


class FakeClock:
    """Controllable time: now() for datetimes, time() for epoch seconds."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self.current

    def time(self) -> float:
        return self.current.timestamp()

    def advance(self, seconds: float) -> None:
        self.current += timedelta(seconds=seconds)


class FakeClient:
    """Stands in for UpstreamClient: returns fixed batches or raises, counting calls."""

    def __init__(self, batches=None, error: Exception | None = None):
        self.batches = batches or []
        self.error = error
        self.calls = 0

    def fetch_raw(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.batches


class CountingBackend(MemoryBackend):
    def __init__(self, clock=None):
        super().__init__(clock=clock)
        self.gets = 0
        self.sets = 0

    def get(self, key):
        self.gets += 1
        return super().get(key)

    def set(self, key, value, ttl_seconds):
        self.sets += 1
        super().set(key, value, ttl_seconds)


class FailingBackend:
    """Backend whose every call fails, like an unreachable remote store."""

    backend_id = "failing"

    def get(self, key):
        raise CacheUnavailableError("backend down")

    def set(self, key, value, ttl_seconds):
        raise CacheUnavailableError("backend down")

    def delete(self, *keys):
        raise CacheUnavailableError("backend down")


class WriteFailingBackend(MemoryBackend):
    def set(self, key, value, ttl_seconds):
        raise CacheUnavailableError("read-only")


def make_batch(source_type="A", items=None, source_name=None, update_time=None) -> SourceBatch:
    return SourceBatch(
        source_name=source_name if source_name is not None else source_type,
        source_type=source_type,
        update_time=update_time,
        items=items or [],
    )


def sample_batches() -> list[SourceBatch]:
    return [
        make_batch(
            "知乎热榜",
            [
                {"title": "知乎问题一", "url": "https://zhihu.com/q/1", "followerCount": 2_000_000},
                {"title": "知乎问题二", "url": "https://zhihu.com/q/2", "followerCount": 30_000},
                {"title": "知乎问题三", "url": "https://zhihu.com/q/3", "followerCount": 600_000},
            ],
        ),
        make_batch(
            "掘金热榜",
            [
                {"title": "前端文章", "url": "https://juejin.cn/post/1", "followerCount": 8_000},
                {"title": "后端文章", "url": "https://juejin.cn/post/2"},
            ],
        ),
    ]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def backend(clock) -> CountingBackend:
    return CountingBackend(clock=clock.time)


@pytest.fixture
def store(backend, clock) -> CacheStore:
    return CacheStore(backend, ttl_seconds=900, clock=clock.now)


@pytest.fixture
def client() -> FakeClient:
    return FakeClient(sample_batches())


@pytest.fixture
def coordinator(client, store, clock) -> RefreshCoordinator:
    return RefreshCoordinator(client, store, auto_refresh_seconds=60, clock=clock.now)
