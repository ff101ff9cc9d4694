"""Client configuration via environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AIRPORT_FINDER_", env_file=".env", extra="ignore"
    )

    # Internal API
    api_base_url: str = "http://localhost:8000/api"
    request_timeout: int = 30

    # Local snapshot
    cache_dir: Path = Path.home() / ".cache" / "airport-finder"
    cache_ttl_seconds: int = 24 * 60 * 60
    history_limit: int = 10

    log_level: str = "WARNING"


settings = ClientSettings()
