"""Page slicing for cached or freshly fetched item lists. Storage-agnostic."""
from typing import Any, Generic, Sequence, TypeVar

from hotfeed.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

T = TypeVar("T")


class PageSlice(Generic[T]):
    __slots__ = ("items", "has_more", "total")

    def __init__(self, *, items: list[T], has_more: bool, total: int):
        self.items = items
        self.has_more = has_more
        self.total = total


def paginate(items: Sequence[T], page: int, page_size: int) -> PageSlice[T]:
    """1-indexed page of items. has_more is exact: page * page_size < total."""
    total = len(items)
    start = (page - 1) * page_size
    end = start + page_size
    return PageSlice(items=list(items[start:end]), has_more=end < total, total=total)


def _int(raw: Any, default: int, min_val: int | None = None, max_val: int | None = None) -> int:
    if raw is None:
        return default
    try:
        v = int(str(raw).strip())
    except ValueError:
        return default
    if min_val is not None and v < min_val:
        return default
    if max_val is not None and v > max_val:
        v = max_val
    return v


def parse_page_params(page: Any, page_size: Any) -> tuple[int, int]:
    """Lenient query parsing: non-numeric or < 1 falls back to defaults; page_size capped."""
    return (
        _int(page, DEFAULT_PAGE, min_val=1),
        _int(page_size, DEFAULT_PAGE_SIZE, min_val=1, max_val=MAX_PAGE_SIZE),
    )
