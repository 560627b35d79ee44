"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from wathiqa.configs.archive import ArchiveSettings
from wathiqa.configs.database import DatabaseSettings
from wathiqa.configs.settings import Settings, get_settings

__all__ = ["ArchiveSettings", "DatabaseSettings", "Settings", "get_settings"]
