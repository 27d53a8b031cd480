"""
Configuration management using Pydantic Settings.

Type-safe, validated configuration loaded from environment variables
prefixed with ``ROBINHOOD_`` (or passed explicitly to the constructor).

Architecture:
- Flat Settings structure (no nesting)
- Environment variables override defaults
- Type validation via Pydantic

Usage:
    from robinhood_connector.core.config import get_settings

    settings = get_settings()
    provider = RobinhoodProvider(settings=settings)

    # Explicit configuration (tests, embedding applications)
    settings = RobinhoodSettings(timeout=10.0, access_token="...")
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from robinhood_connector.core.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_CLIENT_ID,
    PROVIDER_TIMEOUT_DEFAULT,
)
from robinhood_connector.core.enums import Environment


class RobinhoodSettings(BaseSettings):
    """
    Connector settings (flat structure).

    Configuration precedence:
        1. Constructor arguments
        2. Environment variables (ROBINHOOD_*)
        3. Default values

    Note:
        retry_attempts and retry_delay are accepted for forward compatibility
        but no retry logic consults them; the client retries a call at most
        once, after a token refresh.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Runtime environment (development, testing, ci, production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Upstream API
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Robinhood API base URL",
    )
    timeout: float = Field(
        default=PROVIDER_TIMEOUT_DEFAULT,
        description="Per-request timeout in seconds",
    )
    retry_attempts: int = Field(
        default=3,
        description="Reserved for future backoff (not consulted)",
    )
    retry_delay: float = Field(
        default=1.0,
        description="Reserved for future backoff, in seconds (not consulted)",
    )

    # Authentication
    access_token: str | None = Field(
        default=None,
        description="Pre-seeded access token (skips login, cannot be refreshed)",
    )
    client_id: str = Field(
        default=DEFAULT_CLIENT_ID,
        description="OAuth client identifier used for token refresh",
    )
    device_token: str | None = Field(
        default=None,
        description="Device token sent on login when credentials carry none",
    )

    model_config = SettingsConfigDict(
        env_prefix="ROBINHOOD_",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """
        Remove trailing slashes from the base URL.

        Args:
            v: URL string.

        Returns:
            str: URL without trailing slash.
        """
        return v.rstrip("/")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """
        Validate the request timeout is positive.

        Raises:
            ValueError: If timeout is zero or negative.
        """
        if v <= 0:
            raise ValueError("timeout must be greater than 0")
        return v

    @field_validator("retry_attempts")
    @classmethod
    def validate_retry_attempts(cls, v: int) -> int:
        if v < 0:
            raise ValueError("retry_attempts must not be negative")
        return v

    @field_validator("retry_delay")
    @classmethod
    def validate_retry_delay(cls, v: float) -> float:
        if v < 0:
            raise ValueError("retry_delay must not be negative")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Normalize and validate the logging level name.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log_level: {v}")
        return level

    @property
    def is_development(self) -> bool:
        """
        Check if running in development environment.

        Returns:
            bool: True if environment is DEVELOPMENT, False otherwise.
        """
        return self.environment == Environment.DEVELOPMENT


@lru_cache
def get_settings() -> RobinhoodSettings:
    """
    Get cached settings instance.

    Returns:
        RobinhoodSettings: Settings loaded from the environment (cached).
    """
    return RobinhoodSettings()
