"""
Centralized constants for the feed pipeline and scheduler.

Change cache keys, windows or job IDs here instead of scattering literals across
services and routes. Tunable values (TTL, thresholds, intervals) default from settings.
"""
from hotfeed.config import settings

# Cache keys (string keys, JSON values)
CACHE_KEY_DATA = "hotfeed:data"
CACHE_KEY_LAST_UPDATE = "hotfeed:last_update"
CACHE_KEY_UPDATE_COUNT = "hotfeed:update_count"
CACHE_KEY_FORCE_REFRESH = "hotfeed:force_refresh"
ALL_CACHE_KEYS = (
    CACHE_KEY_DATA,
    CACHE_KEY_LAST_UPDATE,
    CACHE_KEY_UPDATE_COUNT,
    CACHE_KEY_FORCE_REFRESH,
)

# Snapshot + metadata expire together after this many seconds (15 minutes)
CACHE_TTL_SECONDS = settings.cache_ttl_seconds
# Force-refresh flag lives for one minute; the next plain read consumes it
FORCE_REFRESH_FLAG_TTL_SECONDS = 60
# A read older than this (since last write) re-fetches upstream. Much shorter than the TTL.
AUTO_REFRESH_SECONDS = settings.auto_refresh_seconds

# Pagination defaults (bad query params fall back to these)
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Scheduler job ID (must match id used in main.py add_job)
REFRESH_JOB_ID = "hotfeed_refresh"
REFRESH_JOB_INTERVAL_SECONDS = settings.refresh_job_interval_seconds

# HTTP caching for GET /content
CACHE_CONTROL_FORCE = "no-cache, no-store, must-revalidate"
CACHE_CONTROL_DEFAULT = "s-maxage=60, stale-while-revalidate"
