"""
Importance scoring: base + hotness tier + source bonus + title keywords.

Pure functions of (title, follower_count, source_type); no clock, no randomness, so the
same raw item always scores the same. Tables live in hotfeed.core.sources.
"""
from __future__ import annotations

from typing import Any

from hotfeed.core.sources import HOTNESS_TIERS, KEYWORD_BONUSES, SOURCE_BONUSES

BASE_SCORE = 3.0
MIN_IMPORTANCE = 1.0
MAX_IMPORTANCE = 10.0


def coerce_count(value: Any) -> int:
    """followerCount -> non-negative int. Strings/floats accepted; anything else is 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        n = int(float(value))
    except (TypeError, ValueError):
        return 0
    return n if n > 0 else 0


def hotness_bonus(follower_count: int) -> float:
    for threshold, bonus in HOTNESS_TIERS:
        if follower_count > threshold:
            return bonus
    return 0.0


def source_bonus(source_type: str | None) -> float:
    for sources, bonus in SOURCE_BONUSES:
        if source_type in sources:
            return bonus
    return 0.0


def keyword_bonus(title: str | None) -> float:
    if not title:
        return 0.0
    lower = title.lower()
    total = 0.0
    for keywords, bonus in KEYWORD_BONUSES:
        if any(k in lower for k in keywords):
            total += bonus
    return total


def clamp_importance(score: float) -> float:
    return round(min(max(score, MIN_IMPORTANCE), MAX_IMPORTANCE), 1)


def score_importance(title: str | None, follower_count: Any, source_type: str | None) -> float:
    """Importance in [1.0, 10.0], one decimal."""
    score = BASE_SCORE
    score += hotness_bonus(coerce_count(follower_count))
    score += source_bonus(source_type)
    score += keyword_bonus(title)
    return clamp_importance(score)
