"""
Database session and engine (used only by the "sql" cache backend).
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from hotfeed.config import settings


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # Sync handlers run in the threadpool; SQLite connections must be shareable across threads
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 8,
        "max_overflow": 10,
        "pool_pre_ping": True,
        "pool_recycle": 300,
        "pool_timeout": 30,
    }


engine = create_engine(settings.database_url, **_engine_kwargs(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
