"""Configuration loading for the Roster employee proxy.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Upstream store configuration
    upstream_base_url: str = Field(
        default="http://localhost:8112",
        description="Base URL of the upstream employee store",
    )
    request_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout for a single upstream HTTP request",
    )

    # Retry policy
    retry_max_attempts: int = Field(
        default=5,
        description="Total attempts per upstream operation, including the first",
    )
    retry_unit_ms: int = Field(
        default=2000,
        description="Backoff unit in ms; attempt N waits N units plus jitter",
    )
    retry_jitter_ms: int = Field(
        default=1000,
        description="Upper bound (exclusive) of random jitter added to backoff",
    )

    # Aggregation
    top_earners_limit: int = Field(
        default=10,
        description="Number of names returned by the top earners query",
    )

    # Run mode
    run_mode: Literal["server", "cli"] = Field(
        default="server",
        description="Run mode",
    )

    # REST server configuration
    server_host: str = Field(
        default="0.0.0.0",
        description="Host to listen on for the REST server",
    )
    server_port: int = Field(
        default=8111,
        description="Port to listen on for the REST server",
    )
    request_deadline_seconds: float = Field(
        default=30.0,
        description="Maximum time a REST request may spend, retries included",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    # Development
    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging",
    )

    @field_validator("request_timeout_seconds", "request_deadline_seconds")
    @classmethod
    def validate_positive_seconds(cls, v: float) -> float:
        """Ensure timeouts are positive."""
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v

    @field_validator("retry_max_attempts")
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:
        """Ensure at least one attempt is made."""
        if v < 1:
            raise ValueError("retry_max_attempts must be at least 1")
        return v

    @field_validator("retry_unit_ms", "retry_jitter_ms")
    @classmethod
    def validate_non_negative_delay(cls, v: int) -> int:
        """Ensure backoff delays are non-negative."""
        if v < 0:
            raise ValueError("retry delays must be non-negative")
        return v

    @field_validator("top_earners_limit")
    @classmethod
    def validate_top_earners_limit(cls, v: int) -> int:
        """Ensure the top earners limit is positive."""
        if v <= 0:
            raise ValueError("top_earners_limit must be positive")
        return v

    @field_validator("server_port")
    @classmethod
    def validate_server_port(cls, v: int) -> int:
        """Ensure server port is in valid range."""
        if v <= 0 or v > 65535:
            raise ValueError("server_port must be between 1 and 65535")
        return v


def load_settings(env_file: str | None = None) -> Settings:
    """Load application settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


__all__ = ["Settings", "load_settings"]
