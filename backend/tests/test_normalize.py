"""
Tests for item normalization (ids, descriptions, categories, ordering)
"""

from datetime import datetime, timezone

from conftest import make_batch, sample_batches

from hotfeed.services.ranking import format_count, item_id, normalize

NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def test_scenario_single_item():
    batch = make_batch("A", [{"title": "t1", "url": "u1", "followerCount": 2_000_000}])
    items = normalize([batch], now=NOW)

    assert len(items) == 1
    item = items[0]
    assert item.importance == 8.0
    assert item.hotness == 2_000_000
    assert item.title == "t1"
    assert item.link == "u1"
    assert item.category == "A"
    assert item.scraped_at == NOW.isoformat()


def test_skips_items_without_title_or_url():
    batch = make_batch(
        "A",
        [
            {"title": "ok", "url": "u1"},
            {"title": "", "url": "u2"},
            {"title": "no url"},
            {"url": "u3"},
            {"title": "   ", "url": "u4"},
            "not a dict",
            None,
        ],
    )
    items = normalize([batch], now=NOW)

    assert [it.title for it in items] == ["ok"]


def test_title_and_url_stored_as_sent():
    batch = make_batch("A", [{"title": "  padded title ", "url": " https://example.com/a"}])
    item = normalize([batch], now=NOW)[0]

    assert item.title == "  padded title "
    assert item.link == " https://example.com/a"


def test_category_is_source_name_verbatim():
    batches = [
        make_batch("zhihu", [{"title": "a", "url": "u1"}], source_name="知乎热榜"),
        make_batch("weibo", [{"title": "b", "url": "u2"}], source_name=""),
    ]
    items = {it.title: it for it in normalize(batches, now=NOW)}

    assert items["a"].category == "知乎热榜"
    assert items["b"].category == "未知来源"


def test_description_templates():
    batches = [
        make_batch("知乎热榜", [{"title": "a", "url": "u1", "followerCount": 1_234_567}]),
        make_batch("unknown", [{"title": "b", "url": "u2"}]),
        make_batch("掘金热榜", [{"title": "c", "url": "u3", "followerCount": 45_600}]),
    ]
    items = {it.title: it for it in normalize(batches, now=NOW)}

    assert items["a"].description == "知乎热门讨论话题，热度: 1.2M"
    assert items["b"].description == "热门内容"
    assert items["c"].description == "掘金技术社区热门分享，热度: 45.6K"


def test_format_count():
    assert format_count(999) == "999"
    assert format_count(1_000) == "1.0K"
    assert format_count(2_500_000) == "2.5M"


def test_hotness_absent_without_follower_count():
    batch = make_batch("A", [{"title": "a", "url": "u1", "followerCount": 0}, {"title": "b", "url": "u2"}])
    items = normalize([batch], now=NOW)

    assert all(it.hotness is None for it in items)


def test_publish_date_from_update_time():
    update_time = datetime(2026, 2, 27, 23, 30, tzinfo=timezone.utc)
    items = normalize([make_batch("A", [{"title": "a", "url": "u"}], update_time=update_time)], now=NOW)

    assert items[0].publish_date == "2026-02-27"
    assert normalize([make_batch("A", [{"title": "a", "url": "u"}])], now=NOW)[0].publish_date is None


def test_sorted_by_importance_descending():
    items = normalize(sample_batches(), now=NOW)
    scores = [it.importance for it in items]

    assert scores == sorted(scores, reverse=True)
    assert items[0].title == "知乎问题一"


def test_ids_unique_within_call():
    raw = [{"title": f"t{i}", "url": f"https://example.com/{i}"} for i in range(50)]
    batches = [make_batch("A", raw), make_batch("B", raw)]
    items = normalize(batches, now=NOW)

    ids = [it.id for it in items]
    assert len(ids) == 100
    assert len(set(ids)) == 100


def test_collision_gets_suffix():
    """Same (source type, url, index) twice in one call with a fixed nonce -> suffixed id"""
    batches = [
        make_batch("X", [{"title": "first", "url": "u"}], source_name="one"),
        make_batch("X", [{"title": "second", "url": "u"}], source_name="two"),
    ]
    items = {it.title: it for it in normalize(batches, nonce="fixed", now=NOW)}
    base = item_id("X", "u", 0, "fixed")

    assert items["first"].id == base
    assert items["second"].id == f"{base}_0"


def test_nonce_changes_ids_between_calls():
    batch = make_batch("A", [{"title": "a", "url": "u"}])

    assert normalize([batch], nonce="n1", now=NOW)[0].id == normalize([batch], nonce="n1", now=NOW)[0].id
    assert normalize([batch], nonce="n1", now=NOW)[0].id != normalize([batch], nonce="n2", now=NOW)[0].id
    assert len(item_id("A", "u", 0, "n1")) == 16
