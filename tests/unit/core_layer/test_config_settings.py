"""
Unit Tests for Settings

Tests defaults, environment overrides, validation and grouped views.
"""

import pytest
from pydantic import ValidationError

from hotel_search.core.config.settings import Settings, get_settings, reload_settings


@pytest.mark.unit
class TestSettingsDefaults:
    """Test default configuration values."""

    def test_cache_ttl_defaults(self, monkeypatch):
        for name in (
            "CACHE_TTL_SEARCH",
            "CACHE_TTL_DETAILS",
            "CACHE_TTL_STATIC",
            "CACHE_TTL_REVIEWS",
            "CACHE_TTL_AVAILABILITY",
        ):
            monkeypatch.delenv(name, raising=False)

        cache = Settings().cache

        assert cache.CACHE_TTL_SEARCH == 300
        assert cache.CACHE_TTL_DETAILS == 1800
        assert cache.CACHE_TTL_STATIC == 86400
        assert cache.CACHE_TTL_REVIEWS == 3600
        assert cache.CACHE_TTL_AVAILABILITY == 60

    def test_redis_is_optional(self, monkeypatch):
        """Without REDIS_URL the service runs on tier 1 alone."""
        monkeypatch.delenv("REDIS_URL", raising=False)

        assert Settings().redis.REDIS_URL is None

    def test_rate_limit_defaults(self, monkeypatch):
        for name in ("RATE_LIMIT_SEARCH", "RATE_LIMIT_DETAILS", "RATE_LIMIT_CACHE"):
            monkeypatch.delenv(name, raising=False)

        rate_limit = Settings().rate_limit

        assert rate_limit.RATE_LIMIT_SEARCH == "100/15 minutes"
        assert rate_limit.RATE_LIMIT_DETAILS == "300/15 minutes"
        assert rate_limit.RATE_LIMIT_CACHE == "20/5 minutes"


@pytest.mark.unit
class TestSettingsOverrides:
    """Test environment variable overrides."""

    def test_env_overrides_cache_ttl(self, monkeypatch):
        monkeypatch.setenv("CACHE_TTL_SEARCH", "120")

        settings = reload_settings()

        assert settings.cache.CACHE_TTL_SEARCH == 120

    def test_reload_settings_replaces_singleton(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("ADMIN_API_KEY", "s3cret")

        second = reload_settings()

        assert second is not first
        assert get_settings() is second
        assert second.app.ADMIN_API_KEY == "s3cret"

    def test_log_level_is_uppercased(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")

        assert Settings().logging.LOG_LEVEL == "DEBUG"


@pytest.mark.unit
class TestSettingsValidation:
    """Test rejected configurations."""

    def test_invalid_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "VERBOSE")

        with pytest.raises(ValidationError):
            Settings()

    @pytest.mark.parametrize("name", ["CACHE_TTL_SEARCH", "CACHE_TTL_AVAILABILITY", "CACHE_L1_MAX_SIZE"])
    def test_non_positive_values_rejected(self, monkeypatch, name):
        monkeypatch.setenv(name, "0")

        with pytest.raises(ValidationError):
            Settings()

    def test_unknown_environment_rejected(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "qa")

        with pytest.raises(ValidationError):
            Settings()
