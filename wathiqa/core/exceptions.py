"""
Exception hierarchy for the Wathiqa archive.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ArchiveException(Exception):
    """Base exception for all archive errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvalidFormatError(ArchiveException):
    """Raised when a block label or numeral label is malformed."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize format error.

        Args:
            message: Error message
            field: Address component that failed validation
            value: Offending value
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        self.field = field
        super().__init__(message, details)


class UnknownBlockError(ArchiveException):
    """Raised when a block is neither fixed nor registered."""

    def __init__(self, label: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["block"] = label
        self.label = label
        super().__init__(f"Block not registered: {label}", details)


class BlockRegistrationError(ArchiveException):
    """Base exception for custom block registration conflicts."""

    def __init__(self, message: str, label: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["block"] = label
        self.label = label
        super().__init__(message, details)


class BlockAlreadyFixedError(BlockRegistrationError):
    """Raised when registering one of the 26 fixed single-letter blocks."""

    def __init__(self, label: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"Block {label} is a fixed block", label, details)


class BlockAlreadyRegisteredError(BlockRegistrationError):
    """Raised when a custom block label is already registered."""

    def __init__(self, label: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(f"Block {label} is already registered", label, details)


class ArchiveStoreError(ArchiveException):
    """Raised when the persisted store fails; the operation may be retried."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize store error.

        Args:
            message: Error message
            operation: Operation that failed (resolve_section, register_block, ...)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class UsernameTakenError(ArchiveException):
    """Raised when creating an account whose username already exists."""

    def __init__(self, username: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["username"] = username
        self.username = username
        super().__init__(f"Username {username} already exists", details)


class ResourceNotFoundError(ArchiveException):
    """Base exception for missing records."""

    resource = "Resource"

    def __init__(self, resource_id: Any, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details[f"{self.resource.lower()}_id"] = str(resource_id)
        self.resource_id = resource_id
        super().__init__(f"{self.resource} not found: {resource_id}", details)


class DocumentNotFoundError(ResourceNotFoundError):
    """Raised when a document cannot be found."""

    resource = "Document"


class UserNotFoundError(ResourceNotFoundError):
    """Raised when a user cannot be found."""

    resource = "User"


class AnnotationNotFoundError(ResourceNotFoundError):
    """Raised when a comment, recommendation or report cannot be found."""

    resource = "Annotation"


class PaperNotFoundError(ResourceNotFoundError):
    """Raised when a paper attachment cannot be found."""

    resource = "Paper"


class AccessDeniedError(ArchiveException):
    """Raised when the caller lacks the capability for an operation."""

    def __init__(self, capability: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["capability"] = capability
        self.capability = capability
        super().__init__(f"Missing capability: {capability}", details)


class SessionExpiredError(ArchiveException):
    """Raised when an access session is past its expiry."""

    pass
