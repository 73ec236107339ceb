"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded outside dev defaults)
    - get_settings() and get_quota_config() are cached (lru_cache) — single instance per process
    - Quota ceilings are non-negative and immutable after startup

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - QuotaConfig built here, handed to core explicitly: core never reads settings
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from event_categories.core.enforce_quota import (
    DEFAULT_FREE_MAX_EVENT_CATEGORIES,
    DEFAULT_PRO_MAX_EVENT_CATEGORIES,
    PlanQuota,
    QuotaConfig,
)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://events:events@db:5432/events"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Auth (bearer tokens issued by the identity provider)
    auth_jwt_secret: str = "dev-secret-change-me"
    auth_jwt_algorithm: str = "HS256"
    auth_user_claim: str = "sub"

    # Quotas
    free_max_event_categories: int = Field(
        DEFAULT_FREE_MAX_EVENT_CATEGORIES, ge=0,
    )
    pro_max_event_categories: int = Field(
        DEFAULT_PRO_MAX_EVENT_CATEGORIES, ge=0,
    )

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_quota_config() -> QuotaConfig:
    settings = get_settings()
    return QuotaConfig(
        free=PlanQuota(settings.free_max_event_categories),
        pro=PlanQuota(settings.pro_max_event_categories),
    )
