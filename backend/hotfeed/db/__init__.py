from hotfeed.db.base import Base
from hotfeed.db.session import engine, SessionLocal
from hotfeed.db.tables import ALL_TABLE_NAMES

__all__ = ["engine", "SessionLocal", "Base", "ALL_TABLE_NAMES"]
