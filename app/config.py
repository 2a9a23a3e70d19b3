"""Application configuration using Pydantic Settings."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # MongoDB
    mongodb_url: str
    mongodb_db_name: str = "tickly"

    # Slack
    slack_bot_token: str
    slack_signing_secret: str
    slack_api_base_url: str = "https://slack.com/api/"
    slack_request_tolerance_seconds: int = 300  # 5 minutes
    slack_timeout_seconds: float = 10.0

    # Time tracking
    enforce_project_ownership: bool = False

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    debug: bool = False
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings()
