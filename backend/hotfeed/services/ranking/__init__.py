"""
Ranking: raw upstream items -> RankedItem with a deterministic importance score.
"""
from hotfeed.services.ranking.normalize import format_count, item_id, normalize
from hotfeed.services.ranking.scoring import score_importance

__all__ = ["format_count", "item_id", "normalize", "score_importance"]
