"""
Wiring for the feed pipeline: one coordinator per app, held on app.state.

Tests build their own coordinator (fake transport, fake clock) and assign it to
app.state.coordinator before making requests.
"""
import logging

from fastapi import Request

from hotfeed.config import Settings, settings as default_settings
from hotfeed.services.cache import CacheStore, create_backend
from hotfeed.services.feed import RefreshCoordinator
from hotfeed.services.upstream import UpstreamClient, UpstreamConfig

logger = logging.getLogger(__name__)


def build_coordinator(cfg: Settings | None = None) -> RefreshCoordinator:
    cfg = cfg or default_settings
    backend = create_backend(cfg.cache_backend)
    if cfg.cache_backend == "sql":
        from hotfeed.db.base import Base
        from hotfeed.db.session import engine

        # Ephemeral table; create if migrations were not run
        Base.metadata.create_all(bind=engine)
    store = CacheStore(backend, ttl_seconds=cfg.cache_ttl_seconds)
    client = UpstreamClient(
        UpstreamConfig(
            url=cfg.upstream_url,
            timeout=cfg.upstream_timeout_seconds,
            user_agent=cfg.upstream_user_agent,
        )
    )
    logger.info("Feed pipeline: upstream=%s cache_backend=%s", cfg.upstream_url, cfg.cache_backend)
    return RefreshCoordinator(client, store, auto_refresh_seconds=cfg.auto_refresh_seconds)


def get_coordinator(request: Request) -> RefreshCoordinator:
    coordinator = getattr(request.app.state, "coordinator", None)
    if coordinator is None:
        coordinator = build_coordinator()
        request.app.state.coordinator = coordinator
    return coordinator
