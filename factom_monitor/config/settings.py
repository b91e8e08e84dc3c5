"""Monitor Settings using Pydantic.

Environment-based configuration with validation.
Every setting can be overridden via a FACTOMD_MONITOR_ prefixed variable.

Environment Variables:
    FACTOMD_MONITOR_FACTOMD_URL: factomd v2 API endpoint
    FACTOMD_MONITOR_POLL_INTERVAL: Seconds between requests
    FACTOMD_MONITOR_REQUEST_TIMEOUT: Deadline for a single request
    FACTOMD_MONITOR_RETRY_STRATEGY: constant | exponential
    FACTOMD_MONITOR_LOG_FORMAT: json | console

Example .env file:
    FACTOMD_MONITOR_FACTOMD_URL=http://localhost:8088/v2
    FACTOMD_MONITOR_POLL_INTERVAL=0.5
    FACTOMD_MONITOR_LOG_FORMAT=console
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Monitor settings.

    One instance is held per Monitor, so two monitors in the same process
    can poll different nodes at different cadences.
    """

    model_config = SettingsConfigDict(
        env_prefix="FACTOMD_MONITOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==================== Core ====================
    app_name: str = "factomd-monitor"
    environment: Literal["development", "staging", "production"] = "development"

    # ==================== Node ====================
    factomd_url: str = Field(
        default="https://api.factomd.net/v2",
        description="factomd JSON-RPC v2 endpoint",
    )

    # ==================== Polling ====================
    poll_interval: float = Field(
        default=1.0,
        gt=0,
        description="Minimum seconds between two requests",
    )
    request_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Deadline in seconds for a single request",
    )

    # Retry settings
    retry_strategy: Literal["constant", "exponential"] = Field(
        default="constant",
        description="constant = retry at poll_interval, exponential = backoff",
    )
    retry_interval: float = Field(default=0.05, gt=0, description="First retry delay in seconds")
    retry_multiplier: float = Field(default=1.5, ge=1.0)
    retry_max: float = Field(default=15.0, gt=0, description="Retry delay ceiling in seconds")

    # ==================== Subscriptions ====================
    minute_buffer_size: int = Field(default=25, ge=1)
    height_buffer_size: int = Field(default=6, ge=1)
    committed_height_buffer_size: int = Field(default=6, ge=1)
    error_buffer_size: int = Field(default=6, ge=1)

    # ==================== Logging ====================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # ==================== Validators ====================

    @model_validator(mode="after")
    def check_retry_bounds(self) -> "Settings":
        """Retry ceiling must not be below the first retry delay."""
        if self.retry_max < self.retry_interval:
            raise ValueError("retry_max must be >= retry_interval")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload.

    Returns:
        Settings instance.
    """
    return Settings()
