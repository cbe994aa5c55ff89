"""
Upstream source tables: per-source descriptions, source-category bonuses and title
keyword groups used by ranking.

Source names are the upstream `typeName` values (e.g. "知乎热榜"). Add or edit entries
here; scoring and normalization read only these tables.
"""

# Description template per source type; anything else gets FALLBACK_DESCRIPTION
SOURCE_DESCRIPTIONS: dict[str, str] = {
    "知乎热榜": "知乎热门讨论话题",
    "微博热搜": "微博热搜话题",
    "虎扑步行街热榜": "虎扑社区热门讨论",
    "百度贴吧热榜": "百度贴吧热门话题",
    "编程热门": "编程导航热门内容",
    "CSDN热榜": "CSDN技术博客热门文章",
    "掘金热榜": "掘金技术社区热门分享",
    "B站热门": "哔哩哔哩热门视频",
    "抖音热搜": "抖音热门短视频",
    "网易云热歌榜": "网易云音乐热门歌曲",
    "QQ音乐热歌榜": "QQ音乐热门歌曲",
    "什么值得买热榜": "什么值得买好物推荐",
    "直播吧体育热榜": "直播吧体育热门资讯",
}
FALLBACK_DESCRIPTION = "热门内容"
UNKNOWN_CATEGORY = "未知来源"

# Source-category bonus groups, checked in order; first match wins
HIGH_VALUE_SOURCES = frozenset(["微博热搜", "知乎热榜", "B站热门", "抖音热搜"])
TECH_SOURCES = frozenset(["CSDN热榜", "掘金热榜", "编程热门"])
DISCUSSION_SOURCES = frozenset(["虎扑步行街热榜", "百度贴吧热榜"])
ENTERTAINMENT_SOURCES = frozenset(["网易云热歌榜", "QQ音乐热歌榜"])

SOURCE_BONUSES: tuple[tuple[frozenset[str], float], ...] = (
    (HIGH_VALUE_SOURCES, 0.5),
    (TECH_SOURCES, 0.3),
    (DISCUSSION_SOURCES, 0.2),
    (ENTERTAINMENT_SOURCES, 0.1),
)

# Hotness tiers: (strictly greater than, bonus), highest first
HOTNESS_TIERS: tuple[tuple[int, float], ...] = (
    (10_000_000, 6.5),
    (5_000_000, 6.0),
    (1_000_000, 5.0),
    (500_000, 4.0),
    (100_000, 3.0),
    (50_000, 2.0),
    (10_000, 1.0),
    (5_000, 0.5),
)

# Title keyword groups, matched as substrings of the lowercased title.
# Groups are additive; each group counts once. The year markers are fixed, not rolling.
TRENDING_KEYWORDS = ("热搜", "爆", "刷屏")
RECENCY_KEYWORDS = ("最新", "2024", "2025")
EDUCATIONAL_KEYWORDS = ("教程", "学习", "指南")
BREAKING_KEYWORDS = ("重大", "突发", "紧急")

KEYWORD_BONUSES: tuple[tuple[tuple[str, ...], float], ...] = (
    (TRENDING_KEYWORDS, 0.3),
    (RECENCY_KEYWORDS, 0.2),
    (EDUCATIONAL_KEYWORDS, 0.1),
    (BREAKING_KEYWORDS, 0.4),
)

# Shown by GET /categories when the cache is empty
DEFAULT_CATEGORIES: list[str] = [
    "知乎热榜",
    "微博热搜",
    "B站热门",
    "抖音热搜",
    "CSDN热榜",
    "掘金热榜",
    "编程热门",
    "虎扑步行街热榜",
    "百度贴吧热榜",
    "网易云热歌榜",
    "QQ音乐热歌榜",
    "什么值得买热榜",
    "直播吧体育热榜",
]


def describe_source(source_type: str | None) -> str:
    return SOURCE_DESCRIPTIONS.get(source_type or "", FALLBACK_DESCRIPTION)
