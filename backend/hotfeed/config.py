"""
Application settings (Pydantic Settings).
"""
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# .env next to backend/ (parent of hotfeed/)
_env_path = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    # Upstream hot-list aggregation API (POST, empty JSON body)
    upstream_url: str = "https://api.yucoder.cn/api/hot/list"
    upstream_timeout_seconds: float = 10.0
    upstream_user_agent: str = "Mozilla/5.0 (compatible; hotfeed/0.1)"

    # Cache: "memory" (process-local) or "sql" (cache_entries table at DATABASE_URL)
    cache_backend: str = "memory"
    cache_ttl_seconds: int = 900
    auto_refresh_seconds: int = 60
    database_url: str = "sqlite:///./hotfeed.db"

    # Periodic refresh job (same path as a plain GET /content)
    refresh_job_enabled: bool = True
    refresh_job_interval_seconds: int = 60

    # Extra CORS origins, comma-separated (e.g. https://your-app.vercel.app)
    cors_origins: str = ""

    class Config:
        env_file = _env_path
        extra = "ignore"

    @field_validator("upstream_url", "upstream_user_agent", "database_url", "cors_origins", mode="after")
    @classmethod
    def strip_str(cls, v: str) -> str:
        return (v or "").strip()

    @field_validator("cache_backend", mode="after")
    @classmethod
    def normalize_backend(cls, v: str) -> str:
        return (v or "memory").strip().lower() or "memory"

    @field_validator("upstream_timeout_seconds", mode="after")
    @classmethod
    def positive_timeout(cls, v: float) -> float:
        return v if v > 0 else 10.0

    @field_validator("cache_ttl_seconds", "auto_refresh_seconds", "refresh_job_interval_seconds", mode="after")
    @classmethod
    def at_least_one(cls, v: int) -> int:
        return max(1, v)

    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
