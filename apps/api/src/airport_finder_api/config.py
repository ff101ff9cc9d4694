"""API configuration via environment variables."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiSettings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    # Aviationstack
    aviationstack_api_key: str = Field(
        default="",
        validation_alias=AliasChoices(
            "API_AVIATIONSTACK_API_KEY", "AVIATIONSTACK_API_KEY"
        ),
    )
    aviationstack_base_url: str = "http://api.aviationstack.com/v1"
    upstream_timeout: int = 30
    upstream_page_size: int = 10_000  # one request covers the whole dataset
    upstream_max_pages: int = 1

    # Bundled sample data, only honoured outside production
    use_sample_data: bool = Field(
        default=False,
        validation_alias=AliasChoices("API_USE_SAMPLE_DATA", "USE_MOCK_DATA"),
    )
    environment: Literal["development", "production", "test"] = "development"

    # Persistent tier; empty URL disables it
    redis_url: str = "redis://localhost:6379/0"
    persistent_cache_ttl: int = 86_400  # 24 h revalidation window
    persistent_cache_stale: int = 0

    # Served by `airport-finder-api`
    host: str = "127.0.0.1"
    port: int = 8000

    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="API_", env_file=".env", extra="ignore", populate_by_name=True
    )

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def allow_sample_fallback(self) -> bool:
        return self.use_sample_data and not self.is_production


settings = ApiSettings()
