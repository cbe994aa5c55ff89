"""
Static demo feed, served when the upstream API is unreachable. Never cached.
Add or edit entries; ids are fixed so downstream stores can reference them.
"""
from datetime import datetime, timezone
from typing import TypedDict

from hotfeed.schemas import RankedItem


class DemoItem(TypedDict):
    id: str
    title: str
    link: str
    description: str
    category: str
    importance: float
    publish_date: str


DEMO_ITEMS: list[DemoItem] = [
    {
        "id": "demo1",
        "title": "Vue 3.4 发布：重大性能优化和新特性",
        "link": "https://vuejs.org/blog/2023/12/28/vue-3-4",
        "description": "Vue 3.4 带来了显著的性能提升，包括更快的模板编译和优化的响应式系统。",
        "category": "掘金热榜",
        "importance": 9.5,
        "publish_date": "2023-12-28",
    },
    {
        "id": "demo2",
        "title": "Vite 5.0 发布：下一代构建工具",
        "link": "https://vitejs.dev/blog/announcing-vite5",
        "description": "Vite 5.0 带来了更快的构建速度和更好的开发体验。",
        "category": "掘金热榜",
        "importance": 9.2,
        "publish_date": "2023-12-18",
    },
    {
        "id": "demo3",
        "title": "React Server Components 深度解析",
        "link": "https://react.dev/blog/2023/03/22/react-server-components",
        "description": "深入理解 React Server Components 的工作原理与最佳实践。",
        "category": "CSDN热榜",
        "importance": 9.0,
        "publish_date": "2023-12-25",
    },
    {
        "id": "demo4",
        "title": "Next.js 14 App Router 最佳实践",
        "link": "https://nextjs.org/docs/app",
        "description": "Next.js 14 App Router 的核心概念、布局模式与数据获取策略。",
        "category": "编程热门",
        "importance": 8.8,
        "publish_date": "2023-12-15",
    },
    {
        "id": "demo5",
        "title": "TypeScript 5.3 新特性全面介绍",
        "link": "https://www.typescriptlang.org/docs/handbook/release-notes/typescript-5-3.html",
        "description": "TypeScript 5.3 引入了导入属性、resolution-mode 注释等新特性。",
        "category": "CSDN热榜",
        "importance": 8.5,
        "publish_date": "2023-12-20",
    },
    {
        "id": "demo6",
        "title": "AI 前端开发：ChatGPT 辅助编码指南",
        "link": "https://openai.com/blog/chatgpt",
        "description": "使用 AI 工具提升前端开发效率：代码生成、调试与重构。",
        "category": "知乎热榜",
        "importance": 8.0,
        "publish_date": "2023-12-12",
    },
    {
        "id": "demo7",
        "title": "Python 3.12 性能提升实测",
        "link": "https://docs.python.org/3/whatsnew/3.12.html",
        "description": "Python 3.12 的解释器优化与新语法特性一览。",
        "category": "编程热门",
        "importance": 7.6,
        "publish_date": "2023-12-10",
    },
    {
        "id": "demo8",
        "title": "Rust 在前端工具链中的崛起",
        "link": "https://www.rust-lang.org/",
        "description": "从 SWC 到 Turbopack，Rust 正在重塑前端构建工具。",
        "category": "知乎热榜",
        "importance": 7.2,
        "publish_date": "2023-12-08",
    },
]


def get_demo_items(now: datetime | None = None) -> list[RankedItem]:
    """Demo items as RankedItems, importance descending, scrapedAt = now."""
    scraped_at = (now or datetime.now(timezone.utc)).isoformat()
    items = [
        RankedItem(
            id=d["id"],
            title=d["title"],
            link=d["link"],
            description=d["description"],
            category=d["category"],
            importance=d["importance"],
            publish_date=d["publish_date"],
            scraped_at=scraped_at,
        )
        for d in DEMO_ITEMS
    ]
    items.sort(key=lambda it: it.importance, reverse=True)
    return items
