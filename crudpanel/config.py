"""
Package Configuration

Uses pydantic-settings for environment variable loading with validation.
All configuration is centralized here for easy management.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Settings loaded from environment variables.

    Environment variables can be set directly or via .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="CRUDPANEL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Localization
    # ==========================================================================
    locale: str = Field(
        default="en",
        description="Locale used to look up widget and validation strings"
    )

    fallback_locale: str = Field(
        default="en",
        description="Locale consulted when a key is missing from the active locale"
    )

    translations_dir: Path | None = Field(
        default=None,
        description="Directory holding <locale>.yaml catalogs that override the built-in strings"
    )

    # ==========================================================================
    # Security
    # ==========================================================================
    password_bcrypt_rounds: int = Field(
        default=12,
        ge=4,
        le=31,
        description="bcrypt cost factor used by password widgets"
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and cached for the lifetime of the process.
    Call get_settings.cache_clear() after changing the environment.
    """
    return Settings()
