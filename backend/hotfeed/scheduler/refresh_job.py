"""
Periodic feed refresh: every REFRESH_JOB_INTERVAL_SECONDS, run the same check a plain
GET /content does. If the cache is older than the auto-refresh threshold it is
re-fetched; otherwise this is a cheap metadata read. Keeps the feed warm when traffic
is sparse.
"""
import logging

from hotfeed.services.feed import RefreshCoordinator, RefreshDecision

logger = logging.getLogger(__name__)


def run_refresh_job(coordinator: RefreshCoordinator) -> None:
    try:
        result = coordinator.run_scheduled_refresh()
        if result.decision == RefreshDecision.SERVE_CACHE:
            logger.debug("Refresh job: cache fresh (%s items), nothing to do", result.total)
        else:
            logger.info("Refresh job: %s, %s items cached", result.decision.value, result.total)
    except Exception as e:
        logger.exception("Refresh job failed: %s", e)
