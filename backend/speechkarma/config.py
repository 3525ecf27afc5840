"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - The AI summary feature is off unless USE_AI_SUMMARY=true

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://speechkarma:speechkarma@db:5432/speechkarma"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted platforms hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Hosted auth provider (Supabase-compatible GoTrue REST API)
    auth_provider_url: str = "http://localhost:54321"
    auth_provider_anon_key: str = "anon-key-placeholder"
    auth_provider_timeout_seconds: float = 10.0

    # Business rules
    grace_period_minutes: int = 15

    # AI summary (Anthropic)
    use_ai_summary: bool = False
    anthropic_api_key: str = "sk-ant-placeholder"
    summary_model: str = "claude-3-5-haiku-latest"
    summary_max_tokens: int = 150
    summary_timeout_seconds: int = 30

    # API
    cors_origins: list[str] = ["http://localhost:4321"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
