"""
Feed: refresh policy (serve cache / auto refresh / forced refresh / category bypass),
request coalescing and pagination over the ranked item set.
"""
from hotfeed.services.feed.coordinator import ContentPage, RefreshCoordinator, RefreshDecision
from hotfeed.services.feed.pagination import PageSlice, paginate, parse_page_params
from hotfeed.services.feed.singleflight import SingleFlight

__all__ = [
    "ContentPage",
    "PageSlice",
    "RefreshCoordinator",
    "RefreshDecision",
    "SingleFlight",
    "paginate",
    "parse_page_params",
]
