"""TTL-bound cache values (snapshot + metadata keys) for the sql cache backend."""
from sqlalchemy import Column, DateTime, String, Text
from sqlalchemy.sql import func

from hotfeed.db.base import Base


class CacheEntry(Base):
    __tablename__ = "cache_entries"

    cache_key = Column(String(128), primary_key=True)
    value_json = Column(Text, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
