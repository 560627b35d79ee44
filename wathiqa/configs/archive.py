"""
Archive behaviour settings.

Session lifetime, pagination bounds and object-store naming.

Dependencies: pydantic, pydantic_settings
System role: Domain configuration for the archive service
"""

from pydantic import Field

from wathiqa.configs.base import ArchiveBaseSettings, archive_config


class ArchiveSettings(ArchiveBaseSettings):
    """Archive domain configuration."""

    model_config = archive_config("ARCHIVE_")

    session_ttl_hours: int = Field(
        default=24,
        ge=1,
        description="Lifetime of an access session in hours",
    )
    default_page_size: int = Field(default=100, ge=1, description="Default list page size")
    max_page_size: int = Field(default=500, ge=1, description="Upper bound for list page size")
    storage_bucket: str = Field(
        default="archive-documents",
        description="Object-store bucket holding attachment files",
    )
