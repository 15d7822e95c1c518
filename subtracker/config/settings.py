"""
Configuration Management for Subscription Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
There are no external services, so this only covers display and
session behaviour, but it is still validated at startup.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from SUBTRACKER_* environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="SUBTRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    app_title: str = Field(
        default="Subscription Tracker",
        min_length=1,
        description="Title shown on the page"
    )

    # Display
    currency_symbol: str = Field(
        default="$",
        max_length=5,
        description="Symbol prefixed to every displayed amount"
    )
    display_decimal_places: int = Field(
        default=2,
        ge=0,
        le=6,
        description="Decimal places used when formatting amounts"
    )

    # Audit trail
    audit_history_limit: int = Field(
        default=200,
        ge=1,
        le=10000,
        description="How many audit events are kept in memory per session"
    )

    @field_validator('currency_symbol')
    @classmethod
    def strip_currency_symbol(cls, v: str) -> str:
        """Surrounding whitespace would end up inside every amount."""
        return v.strip()


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
