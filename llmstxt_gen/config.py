"""Application configuration via environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "llms.txt Generator"
    debug: bool = False
    log_level: str = "INFO"

    # Redis (run store + Celery broker)
    redis_url: str = "redis://localhost:6379/0"

    # CORS
    cors_origins: list[str] = ["http://localhost:5173"]

    # Firecrawl API
    firecrawl_api_key: str | None = None
    firecrawl_max_pages: int = 40
    firecrawl_timeout_seconds: int = 120
    firecrawl_poll_interval_seconds: int = 2

    # LLM enrichment
    llm_provider: Literal["openai", "anthropic"] = "openai"
    openai_api_key: str | None = None
    openai_base_url: str | None = None
    anthropic_api_key: str | None = None
    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.3
    llm_max_tokens: int = 2500
    llm_timeout_seconds: float = 25.0
    enrichment_max_pages: int = 12
    max_questions: int = 6

    # Runs
    run_ttl_hours: int = 24
    paid_run_ttl_days: int = 30
    cleanup_token: str | None = None

    # Stripe
    stripe_secret_key: str | None = None
    stripe_price_id: str | None = None
    stripe_webhook_secret: str | None = None
    stripe_webhook_tolerance_seconds: int = 300  # 5 minutes
    price_usd: int = 8

    @property
    def llm_api_key(self) -> str | None:
        """API key for the configured LLM provider."""
        if self.llm_provider == "anthropic":
            return self.anthropic_api_key
        return self.openai_api_key


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
