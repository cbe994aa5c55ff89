"""
Tests for page slicing and lenient page parameter parsing
"""

import pytest

from hotfeed.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from hotfeed.services.feed import paginate, parse_page_params

ITEMS = list(range(45))


def test_first_page():
    sliced = paginate(ITEMS, 1, 20)

    assert sliced.items == ITEMS[0:20]
    assert sliced.has_more is True
    assert sliced.total == 45


def test_last_partial_page():
    sliced = paginate(ITEMS, 3, 20)

    assert sliced.items == ITEMS[40:45]
    assert sliced.has_more is False


def test_exact_boundary_has_no_more():
    sliced = paginate(list(range(40)), 2, 20)

    assert len(sliced.items) == 20
    assert sliced.has_more is False


def test_page_past_end_is_empty():
    sliced = paginate(ITEMS, 10, 20)

    assert sliced.items == []
    assert sliced.has_more is False
    assert sliced.total == 45


def test_empty_list():
    sliced = paginate([], 1, 20)

    assert sliced.items == []
    assert sliced.has_more is False


@pytest.mark.parametrize(
    "page,page_size,expected",
    [
        (None, None, (DEFAULT_PAGE, DEFAULT_PAGE_SIZE)),
        ("2", "50", (2, 50)),
        (" 3 ", "10", (3, 10)),
        ("abc", "x", (DEFAULT_PAGE, DEFAULT_PAGE_SIZE)),
        ("0", "0", (DEFAULT_PAGE, DEFAULT_PAGE_SIZE)),
        ("-1", "-20", (DEFAULT_PAGE, DEFAULT_PAGE_SIZE)),
        ("1", "1000", (1, MAX_PAGE_SIZE)),
        ("1.5", "20", (DEFAULT_PAGE, 20)),
    ],
)
def test_parse_page_params(page, page_size, expected):
    assert parse_page_params(page, page_size) == expected
