"""
FastAPI app entrypoint.

Hot-list feed: GET /content (ranked, cached, paginated), categories, cache status and
refresh triggers. A background job keeps the cache warm between requests.
"""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from apscheduler.schedulers.background import BackgroundScheduler
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load .env from backend/ before any app code
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

from hotfeed.api.deps import build_coordinator
from hotfeed.api.routes import content
from hotfeed.config import settings
from hotfeed.core.constants import REFRESH_JOB_ID, REFRESH_JOB_INTERVAL_SECONDS
from hotfeed.scheduler.refresh_job import run_refresh_job

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    coordinator = getattr(app.state, "coordinator", None)
    if coordinator is None:
        coordinator = build_coordinator(settings)
        app.state.coordinator = coordinator
    scheduler = None
    if settings.refresh_job_enabled:
        scheduler = BackgroundScheduler()
        scheduler.add_job(
            run_refresh_job,
            "interval",
            seconds=REFRESH_JOB_INTERVAL_SECONDS,
            id=REFRESH_JOB_ID,
            args=[coordinator],
            max_instances=1,
            coalesce=True,
        )
        scheduler.start()
        app.state.scheduler = scheduler
        logger.info("Refresh job scheduled every %ss", REFRESH_JOB_INTERVAL_SECONDS)
    logger.info("Backend ready (upstream=%s, cache=%s)", settings.upstream_url, settings.cache_backend)
    yield
    if scheduler is not None:
        scheduler.shutdown(wait=False)


app = FastAPI(title="Hotfeed", version="0.1.0", lifespan=lifespan)

# CORS: dev origins + optional CORS_ORIGINS env (comma-separated) for production frontend
_cors_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_cors_origins.extend(settings.cors_origin_list())
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(content.router, tags=["content"])


@app.get("/", include_in_schema=False)
def root():
    """Root: point to API docs and health."""
    return {"message": "Hotfeed API", "docs": "/docs", "health": "/health"}


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
