"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field, field_validator

from wathiqa.configs.archive import ArchiveSettings
from wathiqa.configs.base import ArchiveBaseSettings, Environment, LogLevel
from wathiqa.configs.database import DatabaseSettings


class Settings(ArchiveBaseSettings):
    """Unified application settings aggregating all config modules."""

    environment: Environment = Field(
        default="development",
        description="Deployment environment",
    )
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: LogLevel = Field(
        default="INFO",
        description="Root logger level passed to configure_logging",
    )

    # Built per Settings instance, re-read on every fresh get_settings()
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    archive: ArchiveSettings = Field(default_factory=ArchiveSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection. Call
    ``get_settings.cache_clear()`` to pick up environment changes.

    Returns:
        Settings: Application settings instance

    Usage:
        from wathiqa.configs import get_settings
        settings = get_settings()
    """
    return Settings()
