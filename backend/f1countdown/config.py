"""Application configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "F1 Countdown"
    app_version: str = "0.1.0"
    debug: bool = False

    # Database
    database_url: str = "sqlite:///./data/f1countdown.db"

    # Upstream schedule API (Jolpica-F1, Ergast compatible)
    api_base_url: str = "https://api.jolpi.ca/ergast/f1"
    request_timeout: float = 30.0  # seconds
    user_agent: str = "F1Countdown/0.1 (+https://github.com/f1countdown)"

    # Client-side rate budget
    max_requests_per_hour: int = 500
    rate_limit_window_seconds: int = 3600

    # Synchronization
    minimum_refresh_interval_seconds: int = 300  # 5 minutes

    # Entitlements
    pro_user: bool = False

    # Countdown / timeline policy
    live_window_seconds: int = 7200  # race considered live for 2h after start
    minute_snapshot_horizon_seconds: int = 7 * 86400
    snapshot_interval_seconds: int = 60

    # Logging
    log_level: str = "INFO"
    log_dir: Path | None = None

    class Config:
        env_prefix = "F1COUNTDOWN_"
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
