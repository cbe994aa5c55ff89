"""
Typed definitions for the upstream hot-list API response.

POST /api/hot/list returns {"code": 0, "data": [...]}; each element is one source
(a forum's or platform's hot list). We map it to SourceBatch so ranking never sees
upstream field names.
"""
from datetime import datetime
from typing import Any, TypedDict


class UpstreamHotItem(TypedDict, total=False):
    """One entry from data[].data[]."""
    title: str
    url: str
    followerCount: int  # popularity (views/followers); missing or 0 for some sources


class UpstreamSource(TypedDict, total=False):
    """One element of data[]."""
    id: int
    name: str  # display name, used verbatim as category (e.g. "知乎热榜")
    typeName: str  # source type, drives description and scoring
    iconUrl: str
    updateTime: int | str  # epoch millis (usually) or ISO string
    data: list[UpstreamHotItem]


class UpstreamResponse(TypedDict, total=False):
    code: int
    message: str
    data: list[UpstreamSource]


class SourceBatch:
    """One upstream source and its raw items, as handed to ranking."""

    __slots__ = ("source_name", "source_type", "update_time", "items")

    def __init__(
        self,
        *,
        source_name: str,
        source_type: str,
        update_time: datetime | None = None,
        items: list[dict[str, Any]] | None = None,
    ):
        self.source_name = source_name
        self.source_type = source_type
        self.update_time = update_time
        self.items = items or []

    def __repr__(self) -> str:
        return f"SourceBatch(source_name={self.source_name!r}, source_type={self.source_type!r}, items={len(self.items)})"
