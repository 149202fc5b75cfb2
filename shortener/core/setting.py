"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Supports multiple environments (production, staging, dev)
- Rate limit options are grouped in a nested model and can be set with
  RATE_LIMIT__MAX_REQUESTS / RATE_LIMIT__WINDOW_MILLIS
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["RateLimitSettings", "Settings", "settings"]


class EnvSettingsOptions(Enum):
    """Environment options for deployment."""
    production = "production"
    staging = "staging"
    development = "dev"


class RateLimitSettings(BaseModel):
    """Global sliding-window rate limit applied to every request."""

    max_requests: int = Field(
        default=100,
        ge=1,
        description="Maximum number of requests accepted within one window"
    )
    window_millis: int = Field(
        default=60_000,
        ge=1,
        description="Length of the sliding window in milliseconds"
    )


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore"
    )

    # Project Configuration
    ENV_SETTING: EnvSettingsOptions = Field(
        default=EnvSettingsOptions.development,
        description="Environment setting (production, staging, dev)"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Log level for the service loggers"
    )
    HOST: str = Field(default="0.0.0.0", description="Bind address for the HTTP server")
    PORT: int = Field(default=8080, description="Bind port for the HTTP server")

    # Application Configuration
    BASE_URL: str = Field(
        default="http://localhost:8080/",
        description="Prefix prepended to a short code to build the short URL"
    )

    # Short Code Configuration
    SHORT_CODE_LENGTH: int = Field(
        default=6,
        ge=1,
        description="Length of generated short codes"
    )
    SHORT_CODE_MAX_ATTEMPTS: int = Field(
        default=3,
        ge=1,
        description="Attempts made with freshly generated codes before a collision is reported"
    )
    DEFAULT_EXPIRATION_HOURS: int = Field(
        default=24,
        ge=1,
        description="Hours after creation during which a short URL can be resolved"
    )
    MAX_URL_LENGTH: int = Field(
        default=2048,
        ge=1,
        description="Maximum accepted length of an original URL"
    )

    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)


settings = Settings()
