"""
Data model shared by ranking, cache and API.

Fields are snake_case in Python and camelCase on the wire (publishDate, scrapedAt,
lastUpdate, ...). Use `dump()` / `model_dump(by_alias=True)` for JSON.
"""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def dump(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class RankedItem(_CamelModel):
    """
    One normalized hot-list entry.

    `id` is a stable foreign key for downstream stores (favorites, tags, history).
    `category` is the raw upstream source name. `importance` is in [1.0, 10.0];
    `hotness` is the source-reported popularity (followerCount).
    """

    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    link: str = Field(min_length=1)
    description: str = ""
    category: str | None = None
    importance: float = Field(ge=1.0, le=10.0)
    hotness: int | None = None
    publish_date: str | None = None
    scraped_at: str


class CacheSnapshot(_CamelModel):
    """Last fetched full item set. Replaced wholesale on every refresh."""

    items: list[RankedItem] = Field(default_factory=list)
    last_update: str
    update_count: int = 0


class CacheStats(_CamelModel):
    has_data: bool
    last_update: str | None = None
    update_count: int = 0
    is_force_refresh: bool = False
    is_valid: bool = False
