"""Application settings and environment configuration.

Uses pydantic-settings to load and validate configuration from environment
variables with type safety and validation.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.pulse.constants import (
    API_VERSION,
    BASE_URLS,
    CREDENTIAL_STORE_FILENAME,
    MAX_RETRY_ATTEMPTS,
    NOTIFICATION_STORE_FILENAME,
    REQUEST_TIMEOUT_SECONDS,
    RETRY_DELAY_SECONDS,
)


class Settings(BaseSettings):
    """Client settings loaded from environment variables.

    All settings are loaded from .env file or environment variables and
    have defaults suitable for local development.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment environment (selects the backend base URL)",
    )

    # Backend API
    api_base_url: str | None = Field(
        default=None,
        description="Override for the backend base URL",
    )
    api_version: str = Field(
        default=API_VERSION,
        min_length=1,
        description="API version used as path prefix and X-API-Version header",
    )
    request_timeout_seconds: float = Field(
        default=REQUEST_TIMEOUT_SECONDS,
        gt=0,
        le=300,
        description="Per-request timeout in seconds",
    )

    # Retry policy
    max_retry_attempts: int = Field(
        default=MAX_RETRY_ATTEMPTS,
        ge=1,
        le=10,
        description="Maximum attempts for retryable requests",
    )
    retry_delay_seconds: float = Field(
        default=RETRY_DELAY_SECONDS,
        ge=0,
        le=60,
        description="Base delay for exponential backoff",
    )
    retry_jitter: float = Field(
        default=0.0,
        ge=0,
        le=1,
        description="Random extra delay as a fraction of the backoff (0 disables jitter)",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "console"] = Field(
        default="json",
        description="Log output format",
    )

    # Local storage
    notification_store_path: Path = Field(
        default=Path(NOTIFICATION_STORE_FILENAME),
        description="File holding the serialized notification log",
    )
    credential_store_path: Path = Field(
        default=Path(CREDENTIAL_STORE_FILENAME),
        description="File holding cached credentials (session id, device token)",
    )
    notification_history_limit: int | None = Field(
        default=None,
        ge=1,
        description="Maximum stored notifications (None keeps the full history)",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str | None) -> str | None:
        """Ensure the base URL override uses an http(s) scheme."""
        if v is None:
            return v
        if not v.startswith(("http://", "https://")):
            raise ValueError("API base URL must use http:// or https:// scheme")
        return v.rstrip("/")

    @property
    def base_url(self) -> str:
        """Backend base URL, honouring the explicit override."""
        return self.api_base_url or BASE_URLS[self.environment]

    @property
    def versioned_base_url(self) -> str:
        """Base URL including the API version prefix."""
        return f"{self.base_url}/{self.api_version}"


# Global settings instance - lazy loaded
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
