"""
Settings base shared by every archive config group.

Each group reads the process environment and ``.env`` under its own
prefix: none for the top-level ``Settings``, ``POSTGRES_`` for the
database and ``ARCHIVE_`` for domain behaviour.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

Environment = Literal["development", "test", "staging", "production"]

# Names accepted by logging.Logger.setLevel
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

ENV_FILE = ".env"


def archive_config(env_prefix: str = "") -> SettingsConfigDict:
    """
    Build the model config for a settings group.

    Args:
        env_prefix: Prefix of the group's environment variables

    Returns:
        SettingsConfigDict: ``.env`` aware, case-insensitive, ignores unknown keys
    """
    return SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        env_prefix=env_prefix,
        case_sensitive=False,
        extra="ignore",
    )


class ArchiveBaseSettings(BaseSettings):
    """Base for archive settings groups; subclasses set their own prefix."""

    model_config = archive_config()
