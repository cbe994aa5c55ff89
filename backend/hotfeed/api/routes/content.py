"""
Content API: ranked feed, categories, cache status and refresh triggers.

GET /content always answers 200 for upstream/cache failures (success=false, demo data,
error message) so the UI can show a fallback; only unexpected errors become 500.
"""
import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from hotfeed.api.deps import get_coordinator
from hotfeed.core.constants import CACHE_CONTROL_DEFAULT, CACHE_CONTROL_FORCE
from hotfeed.core.errors import CacheUnavailableError, UpstreamError, error_to_http, user_message
from hotfeed.data.demo_items import get_demo_items
from hotfeed.services.feed import RefreshCoordinator, paginate, parse_page_params

router = APIRouter()
logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _is_true(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes")


@router.get("/content")
def get_content(
    response: Response,
    page: str | None = Query(None),
    page_size: str | None = Query(None, alias="pageSize"),
    refresh: str | None = Query(None),
    category: str | None = Query(None),
    coordinator: RefreshCoordinator = Depends(get_coordinator),
) -> Any:
    """
    Paginated ranked feed. refresh=true forces an upstream fetch; category=<source name>
    bypasses the cache and sorts that source by hotness. Bad page params use defaults.
    """
    page_num, size = parse_page_params(page, page_size)
    force = _is_true(refresh)
    category = (category or "").strip() or None
    cache_control = CACHE_CONTROL_FORCE if force else CACHE_CONTROL_DEFAULT
    try:
        result = coordinator.get_content(page_num, size, force_refresh=force, category=category)
    except UpstreamError as e:
        logger.warning("Upstream fetch failed, serving demo data: %s", e)
        demo = get_demo_items()
        if category:
            demo = [it for it in demo if it.category == category]
        sliced = paginate(demo, page_num, size)
        return JSONResponse(
            {
                "success": False,
                "error": user_message(e),
                "data": [it.dump() for it in sliced.items],
                "timestamp": _now_iso(),
                "metadata": {
                    "forceRefresh": force,
                    "itemCount": len(sliced.items),
                    "total": sliced.total,
                    "page": page_num,
                    "pageSize": size,
                    "hasMore": sliced.has_more,
                    "lastUpdate": None,
                    "shouldUpdate": False,
                    "fallback": True,
                },
            },
            headers={"Cache-Control": CACHE_CONTROL_FORCE},
        )
    except Exception as e:
        logger.exception("Content request failed: %s", e)
        raise error_to_http(e)

    response.headers["Cache-Control"] = cache_control
    return {
        "success": True,
        "data": [it.dump() for it in result.items],
        "timestamp": _now_iso(),
        "metadata": {
            "forceRefresh": result.force_refresh,
            "itemCount": len(result.items),
            "total": result.total,
            "page": result.page,
            "pageSize": result.page_size,
            "hasMore": result.has_more,
            "lastUpdate": result.last_update,
            "shouldUpdate": result.should_update,
            "decision": result.decision.value,
        },
    }


@router.get("/categories")
def list_categories(coordinator: RefreshCoordinator = Depends(get_coordinator)) -> dict[str, Any]:
    """Source names present in the cached feed; default source list when the cache is empty."""
    categories, fallback = coordinator.categories()
    out: dict[str, Any] = {
        "success": True,
        "data": categories,
        "count": len(categories),
        "timestamp": _now_iso(),
    }
    if fallback:
        out["fallback"] = True
    return out


@router.get("/cache-status")
def cache_status(coordinator: RefreshCoordinator = Depends(get_coordinator)) -> dict[str, Any]:
    """hasData, lastUpdate, updateCount, isForceRefresh, isValid. Never fails (reads degrade)."""
    return {"success": True, "data": coordinator.store.stats().dump(), "timestamp": _now_iso()}


@router.api_route("/cron", methods=["GET", "POST"])
def run_cron(coordinator: RefreshCoordinator = Depends(get_coordinator)) -> Any:
    """External periodic trigger: same refresh check as a plain GET /content."""
    try:
        result = coordinator.run_scheduled_refresh()
    except UpstreamError as e:
        logger.warning("Cron refresh failed: %s", e)
        return JSONResponse(
            {"success": False, "error": user_message(e), "timestamp": _now_iso()},
            status_code=502,
        )
    return {
        "success": True,
        "decision": result.decision.value,
        "itemCount": result.total,
        "cacheStats": coordinator.store.stats().dump(),
        "timestamp": _now_iso(),
    }


@router.post("/cache/force-refresh")
def request_force_refresh(coordinator: RefreshCoordinator = Depends(get_coordinator)) -> Any:
    """Flag the cache so the next plain read re-fetches and bumps updateCount."""
    try:
        coordinator.store.set_force_refresh()
    except CacheUnavailableError as e:
        return JSONResponse({"success": False, "error": user_message(e), "timestamp": _now_iso()}, status_code=503)
    return {"success": True, "timestamp": _now_iso()}


@router.delete("/cache")
def clear_cache(coordinator: RefreshCoordinator = Depends(get_coordinator)) -> Any:
    """Drop snapshot and metadata; next read cold-starts."""
    try:
        coordinator.store.clear()
    except CacheUnavailableError as e:
        return JSONResponse({"success": False, "error": user_message(e), "timestamp": _now_iso()}, status_code=503)
    return {"success": True, "timestamp": _now_iso()}
