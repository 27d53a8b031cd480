"""Unit tests for robinhood_connector.core.config.

Tests cover:
- Default values
- Environment variable loading (ROBINHOOD_ prefix)
- Field validation (base_url, timeout, retry settings, log_level)
- Cached get_settings()
"""

import pytest
from pydantic import ValidationError

from robinhood_connector.core.config import RobinhoodSettings, get_settings
from robinhood_connector.core.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_CLIENT_ID,
    PROVIDER_TIMEOUT_DEFAULT,
)
from robinhood_connector.core.enums import Environment


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove ROBINHOOD_* variables so defaults are observable."""
    for name in (
        "ROBINHOOD_BASE_URL",
        "ROBINHOOD_TIMEOUT",
        "ROBINHOOD_ACCESS_TOKEN",
        "ROBINHOOD_DEVICE_TOKEN",
        "ROBINHOOD_LOG_LEVEL",
        "ROBINHOOD_ENVIRONMENT",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()


@pytest.mark.unit
class TestSettingsDefaults:
    """Tests for default configuration values."""

    def test_defaults(self):
        """Unset fields fall back to protocol defaults."""
        settings = RobinhoodSettings()

        assert settings.base_url == DEFAULT_BASE_URL
        assert settings.timeout == PROVIDER_TIMEOUT_DEFAULT
        assert settings.client_id == DEFAULT_CLIENT_ID
        assert settings.retry_attempts == 3
        assert settings.retry_delay == 1.0
        assert settings.access_token is None
        assert settings.device_token is None
        assert settings.log_level == "INFO"
        assert settings.environment == Environment.DEVELOPMENT

    def test_is_development(self):
        """is_development reflects the environment."""
        assert RobinhoodSettings().is_development is True
        assert (
            RobinhoodSettings(environment=Environment.PRODUCTION).is_development
            is False
        )


@pytest.mark.unit
class TestSettingsFromEnvironment:
    """Tests for environment variable loading."""

    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch):
        """ROBINHOOD_* variables populate settings."""
        monkeypatch.setenv("ROBINHOOD_BASE_URL", "https://example.test")
        monkeypatch.setenv("ROBINHOOD_TIMEOUT", "12.5")
        monkeypatch.setenv("ROBINHOOD_ACCESS_TOKEN", "stored-token")

        settings = RobinhoodSettings()

        assert settings.base_url == "https://example.test"
        assert settings.timeout == 12.5
        assert settings.access_token == "stored-token"

    def test_constructor_arguments_win(self, monkeypatch: pytest.MonkeyPatch):
        """Explicit arguments override environment variables."""
        monkeypatch.setenv("ROBINHOOD_TIMEOUT", "12.5")

        assert RobinhoodSettings(timeout=3.0).timeout == 3.0

    def test_get_settings_is_cached(self):
        """get_settings returns the same instance until the cache is cleared."""
        assert get_settings() is get_settings()


@pytest.mark.unit
class TestSettingsValidation:
    """Tests for field validators."""

    def test_strips_trailing_slash_from_base_url(self):
        """Trailing slashes are removed from base_url."""
        assert RobinhoodSettings(base_url="https://x.test//").base_url == "https://x.test"

    @pytest.mark.parametrize("timeout", [0, -1.0])
    def test_rejects_non_positive_timeout(self, timeout: float):
        """timeout must be greater than zero."""
        with pytest.raises(ValidationError):
            RobinhoodSettings(timeout=timeout)

    def test_rejects_negative_retry_settings(self):
        """retry_attempts and retry_delay must not be negative."""
        with pytest.raises(ValidationError):
            RobinhoodSettings(retry_attempts=-1)
        with pytest.raises(ValidationError):
            RobinhoodSettings(retry_delay=-0.5)

    def test_normalizes_log_level(self):
        """log_level is upper-cased."""
        assert RobinhoodSettings(log_level="debug").log_level == "DEBUG"

    def test_rejects_unknown_log_level(self):
        """Unknown log levels are rejected."""
        with pytest.raises(ValidationError):
            RobinhoodSettings(log_level="verbose")
