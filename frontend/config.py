"""
UI configuration loaded from environment variables.
"""
import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Frontend settings from environment."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Backend REST root
    api_url: str = Field(default="http://localhost:8080/api")
    request_timeout_seconds: float = Field(default=30.0)

    app_name: str = Field(default="TradeAgent")

    # Bearer token persistence
    token_cookie_name: str = Field(default="tradeagent_token")
    token_cookie_max_age_days: int = Field(default=7)

    # Trading screen
    stock_refresh_seconds: int = Field(default=30)

    # Logging
    log_level: str = Field(default="INFO")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once for the Streamlit process."""
    level = level or get_settings().log_level
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


settings = get_settings()

API_URL = settings.api_url
APP_NAME = settings.app_name
STOCK_REFRESH_SECONDS = settings.stock_refresh_seconds
