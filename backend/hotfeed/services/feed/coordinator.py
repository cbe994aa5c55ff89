"""
Refresh coordinator: per read request, decide between serving the cache, refreshing it,
or bypassing it for a category view.

  category given          -> CATEGORY_BYPASS: fetch fresh, filter, sort by hotness; cache untouched
  force_refresh / flag     -> FORCE_REFRESH: fetch, put(forced=True), serve fresh
  last update > threshold  -> AUTO_REFRESH: fetch, put(forced=False), serve fresh
  otherwise                -> SERVE_CACHE (an empty/missing snapshot falls through to AUTO_REFRESH)

The auto-refresh threshold (1 min) is much shorter than the cache TTL (15 min).
Refreshes for the cache key go through a single-flight so concurrent requests make one
upstream call. Upstream errors propagate; stale cache is never served in their place.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable

from hotfeed.core.constants import AUTO_REFRESH_SECONDS, CACHE_KEY_DATA
from hotfeed.core.errors import CacheUnavailableError
from hotfeed.core.sources import DEFAULT_CATEGORIES
from hotfeed.schemas import RankedItem
from hotfeed.services.cache.store import CacheStore
from hotfeed.services.feed.pagination import paginate
from hotfeed.services.feed.singleflight import SingleFlight
from hotfeed.services.ranking.normalize import normalize
from hotfeed.services.upstream.client import UpstreamClient

logger = logging.getLogger(__name__)


class RefreshDecision(str, Enum):
    SERVE_CACHE = "serve_cache"
    AUTO_REFRESH = "auto_refresh"
    FORCE_REFRESH = "force_refresh"
    CATEGORY_BYPASS = "category_bypass"


class ContentPage:
    """One page of the feed plus what the coordinator did to produce it."""

    __slots__ = ("items", "total", "page", "page_size", "has_more", "last_update", "decision", "shared")

    def __init__(
        self,
        *,
        items: list[RankedItem],
        total: int,
        page: int,
        page_size: int,
        has_more: bool,
        last_update: str | None,
        decision: RefreshDecision,
        shared: bool = False,
    ):
        self.items = items
        self.total = total
        self.page = page
        self.page_size = page_size
        self.has_more = has_more
        self.last_update = last_update
        self.decision = decision
        self.shared = shared  # True when this request joined another request's refresh

    @property
    def force_refresh(self) -> bool:
        return self.decision == RefreshDecision.FORCE_REFRESH

    @property
    def should_update(self) -> bool:
        return self.decision == RefreshDecision.AUTO_REFRESH


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RefreshCoordinator:
    def __init__(
        self,
        client: UpstreamClient,
        store: CacheStore,
        *,
        auto_refresh_seconds: int = AUTO_REFRESH_SECONDS,
        clock: Callable[[], datetime] | None = None,
        flight: SingleFlight | None = None,
    ) -> None:
        self._client = client
        self._store = store
        self._auto_refresh = timedelta(seconds=auto_refresh_seconds)
        self._clock = clock or _utcnow
        self._flight = flight or SingleFlight()

    @property
    def store(self) -> CacheStore:
        return self._store

    def decide(self, *, force_refresh: bool = False, category: str | None = None) -> RefreshDecision:
        """Pick the path for a request from flags and cache metadata only (no snapshot read)."""
        if category:
            return RefreshDecision.CATEGORY_BYPASS
        if force_refresh or self._store.should_force_refresh():
            return RefreshDecision.FORCE_REFRESH
        last_update = self._store.get_last_update()
        if last_update is None or self._clock() - last_update > self._auto_refresh:
            return RefreshDecision.AUTO_REFRESH
        return RefreshDecision.SERVE_CACHE

    def fetch_fresh(self) -> list[RankedItem]:
        """Upstream fetch + normalize. Raises UpstreamError."""
        return normalize(self._client.fetch_raw(), now=self._clock())

    def _store_items(self, items: list[RankedItem], forced: bool) -> str:
        """put() the items; returns the snapshot's last_update (now, if the write failed)."""
        try:
            return self._store.put(items, forced).last_update
        except CacheUnavailableError as e:
            logger.warning("Cache write failed; serving fresh items uncached: %s", e)
            return self._clock().isoformat()

    def _refresh(self, forced: bool) -> tuple[list[RankedItem], str, bool]:
        def run() -> tuple[list[RankedItem], str, bool]:
            items = self.fetch_fresh()
            return items, self._store_items(items, forced), forced

        (items, last_update, leader_forced), shared = self._flight.do(CACHE_KEY_DATA, run)
        if forced and not leader_forced:
            # Joined an auto refresh: the leader wrote unforced, so record the forced write here
            logger.info("Forced request joined an auto refresh; writing as forced")
            last_update = self._store_items(items, True)
        return items, last_update, shared

    def get_content(
        self,
        page: int = 1,
        page_size: int = 20,
        *,
        force_refresh: bool = False,
        category: str | None = None,
    ) -> ContentPage:
        decision = self.decide(force_refresh=force_refresh, category=category)
        logger.info("Content request page=%s size=%s category=%s -> %s", page, page_size, category, decision.value)

        if decision == RefreshDecision.CATEGORY_BYPASS:
            items = [it for it in self.fetch_fresh() if it.category == category]
            items.sort(key=lambda it: it.hotness or 0, reverse=True)
            return self._page(items, page, page_size, self._clock().isoformat(), decision)

        if decision == RefreshDecision.SERVE_CACHE:
            snapshot = self._store.get()
            if snapshot and snapshot.items:
                return self._page(snapshot.items, page, page_size, snapshot.last_update, decision)
            logger.info("Cache metadata fresh but snapshot empty; fetching now")
            decision = RefreshDecision.AUTO_REFRESH

        items, last_update, shared = self._refresh(forced=decision == RefreshDecision.FORCE_REFRESH)
        return self._page(items, page, page_size, last_update, decision, shared=shared)

    def run_scheduled_refresh(self) -> ContentPage:
        """Periodic trigger: same path as a plain read with no flags."""
        return self.get_content()

    def categories(self) -> tuple[list[str], bool]:
        """(categories, is_fallback). Falls back to the default source list when nothing is cached."""
        cached = self._store.categories()
        if cached:
            return cached, False
        return list(DEFAULT_CATEGORIES), True

    @staticmethod
    def _page(
        items: list[RankedItem],
        page: int,
        page_size: int,
        last_update: str | None,
        decision: RefreshDecision,
        *,
        shared: bool = False,
    ) -> ContentPage:
        sliced = paginate(items, page, page_size)
        return ContentPage(
            items=sliced.items,
            total=sliced.total,
            page=page,
            page_size=page_size,
            has_more=sliced.has_more,
            last_update=last_update,
            decision=decision,
            shared=shared,
        )
