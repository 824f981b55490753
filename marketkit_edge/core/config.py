"""
Application configuration using Pydantic Settings.

Supports hierarchical environment configuration:
- .env.base: Common non-secret defaults
- .env.{ENVIRONMENT}: Environment-specific overrides (gitignored)
- Environment variables: Highest priority

Only the MarketKit API key is secret. Upstream URLs are fixed constants.
"""

import os
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

# Get environment from env var, default to development
ENV = os.getenv("ENVIRONMENT", "development")

MARKETKIT_BASE_URL = "https://api.horizontalsystems.xyz/v1"
MARKETKIT_API_KEY_HEADER = "api_key"
DEFAULT_CURRENCY = "usd"
CHART_INTERVAL = "1d"


class Settings(BaseSettings):
    """Gateway settings with hierarchical env file support."""

    model_config = SettingsConfigDict(
        env_file=[
            ".env.base",
            f".env.{ENV}",
        ],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "test", "production"] = "development"

    # Logging
    log_level: str = "INFO"

    # External APIs - Market Data
    marketkit_api_key: str = ""  # Sent as the api_key header on every MarketKit call

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
