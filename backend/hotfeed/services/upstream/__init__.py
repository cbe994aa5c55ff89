"""
Upstream hot-list API: one POST returns every source's hot list.
The client only fetches and maps sources to SourceBatch; ranking lives in services.ranking.
"""
from hotfeed.services.upstream.client import UpstreamClient, parse_sources, parse_update_time
from hotfeed.services.upstream.config import UpstreamConfig
from hotfeed.services.upstream.types import SourceBatch

__all__ = [
    "SourceBatch",
    "UpstreamClient",
    "UpstreamConfig",
    "parse_sources",
    "parse_update_time",
]
