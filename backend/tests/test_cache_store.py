"""
Tests for the cache store and its backends (TTL, counters, flags, degradation)
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from conftest import FailingBackend, FakeClock, make_batch, sample_batches

from hotfeed.core.constants import CACHE_KEY_DATA
from hotfeed.core.errors import CacheUnavailableError
from hotfeed.db.base import Base
from hotfeed.services.cache import CacheStore, SqlCacheBackend, create_backend, list_backends
from hotfeed.services.ranking import normalize


def ranked_items(clock):
    return normalize(sample_batches(), now=clock.now())


def test_put_then_get_returns_snapshot(store, clock):
    items = ranked_items(clock)
    store.put(items, is_forced_refresh=False)

    snapshot = store.get()
    assert snapshot is not None
    assert [it.id for it in snapshot.items] == [it.id for it in items]
    assert snapshot.last_update == clock.now().isoformat()
    assert store.get_last_update() == clock.now()


def test_update_count_only_on_forced_refresh(store, clock):
    items = ranked_items(clock)

    store.put(items, is_forced_refresh=False)
    assert store.get_update_count() == 0
    store.put(items, is_forced_refresh=True)
    store.put(items, is_forced_refresh=True)
    assert store.get_update_count() == 2
    store.put(items, is_forced_refresh=False)
    assert store.get_update_count() == 2
    assert store.get().update_count == 2


def test_ttl_boundary(store, clock):
    store.put(ranked_items(clock), is_forced_refresh=False)

    clock.advance(14 * 60)
    assert store.get() is not None
    assert store.is_valid() is True

    clock.advance(2 * 60)
    assert store.get() is None
    assert store.get_last_update() is None
    assert store.is_valid() is False


def test_every_put_resets_ttl(store, clock):
    store.put(ranked_items(clock), is_forced_refresh=False)
    clock.advance(10 * 60)
    store.put(ranked_items(clock), is_forced_refresh=False)
    clock.advance(10 * 60)

    assert store.get() is not None
    assert store.get_last_update() is not None


def test_force_refresh_flag(store, clock):
    assert store.should_force_refresh() is False
    store.set_force_refresh()
    assert store.should_force_refresh() is True

    store.put(ranked_items(clock), is_forced_refresh=False)
    assert store.should_force_refresh() is True
    store.put(ranked_items(clock), is_forced_refresh=True)
    assert store.should_force_refresh() is False


def test_force_refresh_flag_expires(store, clock):
    store.set_force_refresh()
    clock.advance(61)
    assert store.should_force_refresh() is False


def test_stats_and_clear(store, clock):
    empty = store.stats()
    assert empty.has_data is False
    assert empty.is_valid is False

    store.put(ranked_items(clock), is_forced_refresh=True)
    stats = store.stats().dump()
    assert stats == {
        "hasData": True,
        "lastUpdate": clock.now().isoformat(),
        "updateCount": 1,
        "isForceRefresh": False,
        "isValid": True,
    }

    store.clear()
    assert store.get() is None
    assert store.get_update_count() == 0


def test_categories_sorted_unique(store, clock):
    assert store.categories() == []
    store.put(ranked_items(clock), is_forced_refresh=False)
    assert store.categories() == ["掘金热榜", "知乎热榜"]


def test_corrupt_snapshot_reads_as_absent(store, backend):
    backend.set(CACHE_KEY_DATA, "{not json", 900)
    assert store.get() is None


def test_unavailable_backend_degrades_reads():
    clock = FakeClock()
    store = CacheStore(FailingBackend(), clock=clock.now)

    assert store.get() is None
    assert store.get_last_update() is None
    assert store.get_update_count() == 0
    assert store.is_valid() is False
    assert store.should_force_refresh() is False
    assert store.stats().has_data is False


def test_unavailable_backend_raises_on_write():
    clock = FakeClock()
    store = CacheStore(FailingBackend(), clock=clock.now)
    items = normalize([make_batch("A", [{"title": "a", "url": "u"}])], now=clock.now())

    with pytest.raises(CacheUnavailableError):
        store.put(items, is_forced_refresh=True)


def test_registry():
    assert set(list_backends()) >= {"memory", "sql"}
    assert create_backend("memory").backend_id == "memory"
    with pytest.raises(KeyError):
        create_backend("redis")


# --- SQL backend ---


@pytest.fixture
def sql_session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


def test_sql_backend_set_get_delete(sql_session_factory, clock):
    backend = SqlCacheBackend(sql_session_factory, clock=clock.time)

    assert backend.get("k") is None
    backend.set("k", '"v1"', 60)
    assert backend.get("k") == '"v1"'
    backend.set("k", '"v2"', 60)
    assert backend.get("k") == '"v2"'
    backend.delete("k")
    assert backend.get("k") is None


def test_sql_backend_expiry(sql_session_factory, clock):
    backend = SqlCacheBackend(sql_session_factory, clock=clock.time)
    backend.set("k", "1", 60)

    clock.advance(59)
    assert backend.get("k") == "1"
    clock.advance(2)
    assert backend.get("k") is None


def test_sql_backend_store_ttl_boundary(sql_session_factory, clock):
    store = CacheStore(SqlCacheBackend(sql_session_factory, clock=clock.time), clock=clock.now)
    store.put(ranked_items(clock), is_forced_refresh=True)

    clock.advance(14 * 60)
    assert store.get() is not None
    assert store.get_update_count() == 1
    clock.advance(2 * 60)
    assert store.get() is None


def test_sql_backend_failure_is_cache_unavailable(sql_session_factory, clock):
    backend = SqlCacheBackend(sql_session_factory, clock=clock.time)
    Base.metadata.drop_all(bind=sql_session_factory.kw["bind"])

    with pytest.raises(CacheUnavailableError):
        backend.get("k")
    with pytest.raises(CacheUnavailableError):
        backend.set("k", "1", 60)
    assert CacheStore(backend, clock=clock.now).get() is None
