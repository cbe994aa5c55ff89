"""
Normalize upstream SourceBatches into RankedItems sorted by importance.

Each raw item needs a title and url; anything else is skipped. ids hash
(source type, url, index, nonce) where the nonce is fresh per call, and are made unique
within the call by suffixing.
"""
from __future__ import annotations

import hashlib
import logging
import uuid
from datetime import datetime, timezone
from typing import Iterable

from hotfeed.core.sources import UNKNOWN_CATEGORY, describe_source
from hotfeed.schemas import RankedItem
from hotfeed.services.ranking.scoring import coerce_count, score_importance
from hotfeed.services.upstream.types import SourceBatch

logger = logging.getLogger(__name__)

ID_LENGTH = 16


def item_id(source_type: str, url: str, index: int, nonce: str) -> str:
    """16-char hex id for one raw item in one normalization call."""
    raw = f"{source_type or ''}|{url or ''}|{index}|{nonce or ''}"
    return hashlib.sha256(raw.encode()).hexdigest()[:ID_LENGTH]


def format_count(count: int) -> str:
    """1234567 -> '1.2M', 45600 -> '45.6K', 999 -> '999'."""
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K"
    return str(count)


def build_description(source_type: str | None, follower_count: int) -> str:
    base = describe_source(source_type)
    if follower_count > 0:
        return f"{base}，热度: {format_count(follower_count)}"
    return base


def _has_text(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def normalize(
    batches: Iterable[SourceBatch],
    *,
    nonce: str | None = None,
    now: datetime | None = None,
) -> list[RankedItem]:
    """
    Convert every valid raw item of every batch to a RankedItem.
    Returns items sorted by importance descending; ties keep upstream order.
    """
    nonce = nonce or uuid.uuid4().hex
    scraped_at = (now or datetime.now(timezone.utc)).isoformat()
    used_ids: set[str] = set()
    items: list[RankedItem] = []
    skipped = 0
    for batch in batches:
        category = batch.source_name or UNKNOWN_CATEGORY
        publish_date = batch.update_time.date().isoformat() if batch.update_time else None
        for index, raw in enumerate(batch.items):
            if not isinstance(raw, dict):
                skipped += 1
                continue
            # Blank values are skipped; kept values are stored as sent
            title = raw.get("title")
            url = raw.get("url")
            if not _has_text(title) or not _has_text(url):
                skipped += 1
                continue
            base_id = item_id(batch.source_type, url, index, nonce)
            uid = base_id
            suffix = 0
            while uid in used_ids:
                uid = f"{base_id}_{suffix}"
                suffix += 1
            used_ids.add(uid)
            count = coerce_count(raw.get("followerCount"))
            items.append(
                RankedItem(
                    id=uid,
                    title=title,
                    link=url,
                    description=build_description(batch.source_type, count),
                    category=category,
                    importance=score_importance(title, count, batch.source_type),
                    hotness=count or None,
                    publish_date=publish_date,
                    scraped_at=scraped_at,
                )
            )
    if skipped:
        logger.debug("Normalize skipped %s malformed items", skipped)
    items.sort(key=lambda it: it.importance, reverse=True)
    return items
