#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

This module provides type-safe, environment-based configuration for the
hotel search service. All configuration is centralized here to ensure
consistency across modules.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- Easy testing with override mechanisms
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RedisSettings(BaseSettings):
    """
    Redis configuration for the distributed (tier 2) cache.

    STAGE-0.1: Redis connection configuration

    Tier 2 is only configured when REDIS_URL is set; without it the
    service runs on the in-process tier alone.
    """

    REDIS_URL: str | None = Field(default=None, description="Redis connection URL")
    REDIS_SOCKET_TIMEOUT: float = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: float = Field(default=5, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")
    REDIS_CONNECT_RETRIES: int = Field(default=3, description="Connection attempts before giving up")
    REDIS_RETRY_MAX_DELAY: float = Field(default=2.0, description="Maximum backoff between attempts")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class BookingApiSettings(BaseSettings):
    """
    Upstream Booking.com (RapidAPI) configuration.

    STAGE-0.2: Upstream provider configuration
    """

    RAPIDAPI_KEY: str | None = Field(default=None, description="RapidAPI key")
    RAPIDAPI_HOST: str = Field(default="booking-com.p.rapidapi.com", description="RapidAPI host header")
    BOOKING_API_BASE_URL: str = Field(
        default="https://booking-com.p.rapidapi.com/v1",
        description="Booking.com API base URL",
    )
    BOOKING_API_TIMEOUT: float = Field(default=10, description="Upstream request timeout")
    BOOKING_API_LOCALE: str = Field(default="en-gb", description="Default upstream locale")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class CacheSettings(BaseSettings):
    """
    Caching configuration for the two-tier cache.

    STAGE-2: Cache TTL configuration

    Different TTLs per data category: live availability changes by the
    minute, reference data barely at all.
    """

    CACHE_KEY_PREFIX: str = Field(default="booking", description="Cache key prefix")
    CACHE_L1_MAX_SIZE: int = Field(default=1000, description="Tier 1 max entries")
    CACHE_DEFAULT_TTL: int = Field(default=1800, description="Default TTL (30 minutes)")
    CACHE_TTL_SEARCH: int = Field(default=300, description="Search results TTL (5 minutes)")
    CACHE_TTL_DETAILS: int = Field(default=1800, description="Detail pages TTL (30 minutes)")
    CACHE_TTL_STATIC: int = Field(default=86400, description="Reference data TTL (24 hours)")
    CACHE_TTL_REVIEWS: int = Field(default=3600, description="Reviews TTL (1 hour)")
    CACHE_TTL_AVAILABILITY: int = Field(default=60, description="Availability TTL (1 minute)")
    CACHE_COMPRESS: bool = Field(default=True, description="Compress tier 2 payloads")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class RateLimitSettings(BaseSettings):
    """
    Rate limiting configuration.

    STAGE-3: Rate limiting thresholds

    Architectural Decision: slowapi, one limit per endpoint family
    """

    RATE_LIMIT_ENABLED: bool = Field(default=True, description="Enable rate limiting")
    RATE_LIMIT_SEARCH: str = Field(default="100/15 minutes", description="Search endpoints limit")
    RATE_LIMIT_DETAILS: str = Field(default="300/15 minutes", description="Detail endpoints limit")
    RATE_LIMIT_CACHE: str = Field(default="20/5 minutes", description="Cache admin endpoints limit")
    RATE_LIMIT_STORAGE_URI: str = Field(default="memory://", description="Limiter storage backend")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    STAGE-L: Logging configuration
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class ApplicationSettings(BaseSettings):
    """
    General application settings.

    STAGE-0: Application initialization
    """

    ENVIRONMENT: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Application environment"
    )
    DEBUG: bool = Field(default=False, description="Debug mode")
    APP_NAME: str = Field(default="Hotel Search Service", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    API_HOST: str = Field(default="0.0.0.0", description="API host")
    API_PORT: int = Field(default=8000, description="API port")
    API_BASE_PATH: str = Field(default="/api/v1", description="Prefix for all API routes")
    CORS_ORIGINS: list[str] = Field(default=["*"], description="Allowed CORS origins")
    ADMIN_API_KEY: str | None = Field(default=None, description="Key required by cache admin routes")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    STAGE-0: Centralized configuration initialization

    Usage:
        from hotel_search.core.config.settings import get_settings

        settings = get_settings()
        ttl = settings.cache.CACHE_TTL_SEARCH
        api_key = settings.booking_api.RAPIDAPI_KEY
    """

    # Redis settings
    REDIS_URL: str | None = Field(default=None, description="Redis connection URL")
    REDIS_SOCKET_TIMEOUT: float = Field(default=5, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: float = Field(default=5, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")
    REDIS_CONNECT_RETRIES: int = Field(default=3, description="Connection attempts before giving up")
    REDIS_RETRY_MAX_DELAY: float = Field(default=2.0, description="Maximum backoff between attempts")

    # Upstream settings
    RAPIDAPI_KEY: str | None = Field(default=None, description="RapidAPI key")
    RAPIDAPI_HOST: str = Field(default="booking-com.p.rapidapi.com", description="RapidAPI host header")
    BOOKING_API_BASE_URL: str = Field(
        default="https://booking-com.p.rapidapi.com/v1",
        description="Booking.com API base URL",
    )
    BOOKING_API_TIMEOUT: float = Field(default=10, description="Upstream request timeout")
    BOOKING_API_LOCALE: str = Field(default="en-gb", description="Default upstream locale")

    # Cache settings
    CACHE_KEY_PREFIX: str = Field(default="booking", description="Cache key prefix")
    CACHE_L1_MAX_SIZE: int = Field(default=1000, description="Tier 1 max entries")
    CACHE_DEFAULT_TTL: int = Field(default=1800, description="Default TTL (30 minutes)")
    CACHE_TTL_SEARCH: int = Field(default=300, description="Search results TTL (5 minutes)")
    CACHE_TTL_DETAILS: int = Field(default=1800, description="Detail pages TTL (30 minutes)")
    CACHE_TTL_STATIC: int = Field(default=86400, description="Reference data TTL (24 hours)")
    CACHE_TTL_REVIEWS: int = Field(default=3600, description="Reviews TTL (1 hour)")
    CACHE_TTL_AVAILABILITY: int = Field(default=60, description="Availability TTL (1 minute)")
    CACHE_COMPRESS: bool = Field(default=True, description="Compress tier 2 payloads")

    # Rate Limiting settings
    RATE_LIMIT_ENABLED: bool = Field(default=True, description="Enable rate limiting")
    RATE_LIMIT_SEARCH: str = Field(default="100/15 minutes", description="Search endpoints limit")
    RATE_LIMIT_DETAILS: str = Field(default="300/15 minutes", description="Detail endpoints limit")
    RATE_LIMIT_CACHE: str = Field(default="20/5 minutes", description="Cache admin endpoints limit")
    RATE_LIMIT_STORAGE_URI: str = Field(default="memory://", description="Limiter storage backend")

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    # Application settings
    ENVIRONMENT: Literal["development", "staging", "production", "test"] = Field(
        default="development",
        description="Application environment"
    )
    DEBUG: bool = Field(default=False, description="Debug mode")
    APP_NAME: str = Field(default="Hotel Search Service", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    API_HOST: str = Field(default="0.0.0.0", description="API host")
    API_PORT: int = Field(default=8000, description="API port")
    API_BASE_PATH: str = Field(default="/api/v1", description="Prefix for all API routes")
    CORS_ORIGINS: list[str] = Field(default=["*"], description="Allowed CORS origins")
    ADMIN_API_KEY: str | None = Field(default=None, description="Key required by cache admin routes")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    @field_validator(
        "CACHE_L1_MAX_SIZE",
        "CACHE_DEFAULT_TTL",
        "CACHE_TTL_SEARCH",
        "CACHE_TTL_DETAILS",
        "CACHE_TTL_STATIC",
        "CACHE_TTL_REVIEWS",
        "CACHE_TTL_AVAILABILITY",
    )
    @classmethod
    def validate_positive(cls, v, info):
        """TTLs and capacities must be positive."""
        if v <= 0:
            raise ValueError(f"{info.field_name} must be positive, got {v}")
        return v

    # Nested configuration objects
    @property
    def redis(self) -> "RedisSettings":
        """Get Redis settings."""
        return RedisSettings(
            REDIS_URL=self.REDIS_URL,
            REDIS_SOCKET_TIMEOUT=self.REDIS_SOCKET_TIMEOUT,
            REDIS_SOCKET_CONNECT_TIMEOUT=self.REDIS_SOCKET_CONNECT_TIMEOUT,
            REDIS_HEALTH_CHECK_INTERVAL=self.REDIS_HEALTH_CHECK_INTERVAL,
            REDIS_CONNECT_RETRIES=self.REDIS_CONNECT_RETRIES,
            REDIS_RETRY_MAX_DELAY=self.REDIS_RETRY_MAX_DELAY,
        )

    @property
    def booking_api(self) -> "BookingApiSettings":
        """Get upstream API settings."""
        return BookingApiSettings(
            RAPIDAPI_KEY=self.RAPIDAPI_KEY,
            RAPIDAPI_HOST=self.RAPIDAPI_HOST,
            BOOKING_API_BASE_URL=self.BOOKING_API_BASE_URL,
            BOOKING_API_TIMEOUT=self.BOOKING_API_TIMEOUT,
            BOOKING_API_LOCALE=self.BOOKING_API_LOCALE,
        )

    @property
    def cache(self) -> "CacheSettings":
        """Get cache settings."""
        return CacheSettings(
            CACHE_KEY_PREFIX=self.CACHE_KEY_PREFIX,
            CACHE_L1_MAX_SIZE=self.CACHE_L1_MAX_SIZE,
            CACHE_DEFAULT_TTL=self.CACHE_DEFAULT_TTL,
            CACHE_TTL_SEARCH=self.CACHE_TTL_SEARCH,
            CACHE_TTL_DETAILS=self.CACHE_TTL_DETAILS,
            CACHE_TTL_STATIC=self.CACHE_TTL_STATIC,
            CACHE_TTL_REVIEWS=self.CACHE_TTL_REVIEWS,
            CACHE_TTL_AVAILABILITY=self.CACHE_TTL_AVAILABILITY,
            CACHE_COMPRESS=self.CACHE_COMPRESS,
        )

    @property
    def rate_limit(self) -> "RateLimitSettings":
        """Get rate limit settings."""
        return RateLimitSettings(
            RATE_LIMIT_ENABLED=self.RATE_LIMIT_ENABLED,
            RATE_LIMIT_SEARCH=self.RATE_LIMIT_SEARCH,
            RATE_LIMIT_DETAILS=self.RATE_LIMIT_DETAILS,
            RATE_LIMIT_CACHE=self.RATE_LIMIT_CACHE,
            RATE_LIMIT_STORAGE_URI=self.RATE_LIMIT_STORAGE_URI,
        )

    @property
    def logging(self) -> "LoggingSettings":
        """Get logging settings."""
        return LoggingSettings(LOG_LEVEL=self.LOG_LEVEL, LOG_FORMAT=self.LOG_FORMAT)

    @property
    def app(self) -> "ApplicationSettings":
        """Get application settings."""
        return ApplicationSettings(
            ENVIRONMENT=self.ENVIRONMENT,
            DEBUG=self.DEBUG,
            APP_NAME=self.APP_NAME,
            APP_VERSION=self.APP_VERSION,
            API_HOST=self.API_HOST,
            API_PORT=self.API_PORT,
            API_BASE_PATH=self.API_BASE_PATH,
            CORS_ORIGINS=self.CORS_ORIGINS,
            ADMIN_API_KEY=self.ADMIN_API_KEY,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Ignore extra environment variables
    )


# Global settings instance (singleton pattern)
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the global settings instance (singleton).

    STAGE-0.3: Settings initialization

    Returns:
        Settings: Global settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
