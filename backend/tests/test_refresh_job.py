"""
Tests for the periodic refresh job and settings normalization
"""

import logging

from conftest import FakeClient

from hotfeed.config import Settings
from hotfeed.core.errors import UpstreamError
from hotfeed.scheduler.refresh_job import run_refresh_job
from hotfeed.services.feed import RefreshCoordinator


def test_job_refreshes_cold_cache_then_idles(coordinator, client, store, clock):
    run_refresh_job(coordinator)
    assert client.calls == 1
    assert store.get() is not None

    clock.advance(30)
    run_refresh_job(coordinator)
    assert client.calls == 1

    clock.advance(40)
    run_refresh_job(coordinator)
    assert client.calls == 2


def test_job_logs_and_survives_upstream_failure(store, clock, caplog):
    coordinator = RefreshCoordinator(FakeClient(error=UpstreamError("down")), store, clock=clock.now)

    with caplog.at_level(logging.ERROR, logger="hotfeed.scheduler.refresh_job"):
        run_refresh_job(coordinator)

    assert "Refresh job failed" in caplog.text
    assert store.get() is None


def test_settings_normalization():
    cfg = Settings(
        cache_backend="  SQL ",
        upstream_timeout_seconds=0,
        cache_ttl_seconds=0,
        cors_origins=" https://a.example , ,https://b.example",
    )

    assert cfg.cache_backend == "sql"
    assert cfg.upstream_timeout_seconds == 10.0
    assert cfg.cache_ttl_seconds == 1
    assert cfg.cors_origin_list() == ["https://a.example", "https://b.example"]
