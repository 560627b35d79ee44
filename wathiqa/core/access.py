"""
Role capabilities and access sessions.

Roles are resolved once into a Capabilities value when a session is opened.
Call sites test flags on the session instead of comparing role strings.
Expiry checks take "now" explicitly.

Dependencies: dataclasses, datetime (stdlib)
System role: Authorization model shared by services and API
"""

import enum
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone

from wathiqa.core.exceptions import AccessDeniedError, SessionExpiredError


class Role(str, enum.Enum):
    """Archive user roles."""

    ADMIN = "admin"
    ARCHIVIST = "archivist"
    VIEWER = "viewer"


@dataclass(frozen=True)
class Capabilities:
    """Boolean permissions derived from a role."""

    can_upload: bool = False
    can_manage_blocks: bool = False
    can_annotate: bool = False
    can_review: bool = False
    can_manage_users: bool = False


NO_CAPABILITIES = Capabilities()

ROLE_CAPABILITIES: dict[Role, Capabilities] = {
    Role.ADMIN: Capabilities(
        can_upload=True,
        can_manage_blocks=True,
        can_annotate=True,
        can_review=True,
        can_manage_users=True,
    ),
    Role.ARCHIVIST: Capabilities(
        can_upload=True,
        can_manage_blocks=True,
        can_annotate=True,
        can_review=True,
    ),
    Role.VIEWER: Capabilities(can_annotate=True),
}


def resolve_capabilities(
    role: Role | str,
    is_active: bool = True,
    is_restricted: bool = False,
) -> Capabilities:
    """
    Resolve a role into capability flags.

    Inactive and restricted accounts get no capabilities at all.

    Raises:
        ValueError: If role is not one of the known roles
    """
    if not is_active or is_restricted:
        return NO_CAPABILITIES
    return ROLE_CAPABILITIES[Role(role)]


@dataclass(frozen=True)
class AccessSession:
    """Resolved identity of a caller for the lifetime of a session."""

    user_id: uuid.UUID
    role: Role
    capabilities: Capabilities
    issued_at: datetime
    expires_at: datetime
    is_active: bool = True
    is_restricted: bool = False
    restriction_reason: str | None = field(default=None)

    @property
    def is_locked(self) -> bool:
        """True for restricted or deactivated accounts."""
        return self.is_restricted or not self.is_active

    def require(self, capability: str) -> None:
        """
        Raise unless the session holds ``capability``.

        Raises:
            AccessDeniedError: Flag is missing or false
        """
        if not getattr(self.capabilities, capability, False):
            raise AccessDeniedError(
                capability,
                details={"user_id": str(self.user_id), "role": self.role.value},
            )


def open_session(
    user_id: uuid.UUID,
    role: Role | str,
    now: datetime,
    ttl: timedelta,
    is_active: bool = True,
    is_restricted: bool = False,
    restriction_reason: str | None = None,
) -> AccessSession:
    """Build an AccessSession valid from ``now`` for ``ttl``."""
    return AccessSession(
        user_id=user_id,
        role=Role(role),
        capabilities=resolve_capabilities(role, is_active, is_restricted),
        issued_at=now,
        expires_at=now + ttl,
        is_active=is_active,
        is_restricted=is_restricted,
        restriction_reason=restriction_reason,
    )


def is_session_expired(session: AccessSession, now: datetime) -> bool:
    """True once ``now`` has reached the session expiry."""
    return now >= session.expires_at


def ensure_session_active(session: AccessSession, now: datetime) -> AccessSession:
    """
    Return the session if still valid.

    Raises:
        SessionExpiredError: Session expired at or before ``now``
    """
    if is_session_expired(session, now):
        raise SessionExpiredError(
            "Session expired",
            details={"user_id": str(session.user_id), "expires_at": session.expires_at.isoformat()},
        )
    return session


def bind_presented_expiry(session: AccessSession, presented: datetime) -> AccessSession:
    """
    Adopt the expiry a client presents for a freshly opened session.

    The presented value may shorten the session but never extend it past
    the server-issued ``expires_at``. Naive datetimes are read as UTC.

    Raises:
        SessionExpiredError: Presented expiry is later than the issued one
    """
    if presented.tzinfo is None:
        presented = presented.replace(tzinfo=timezone.utc)
    if presented > session.expires_at:
        raise SessionExpiredError(
            "Session expiry exceeds the issued lifetime",
            details={
                "user_id": str(session.user_id),
                "presented": presented.isoformat(),
                "max_expires_at": session.expires_at.isoformat(),
            },
        )
    return replace(session, expires_at=presented)
