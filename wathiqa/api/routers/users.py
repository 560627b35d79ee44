"""
User administration API endpoints.

Routes:
- POST /users - Create account
- GET /users - List accounts
- GET /users/{id} - Get account
- PUT /users/{id}/role - Change role
- PUT /users/{id}/restrict - Lock or unlock account
- GET /users/{id}/activity - Account activity trail
- POST /sessions - Open an access session

Dependencies: wathiqa.application.services, wathiqa.models
System role: User management HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from wathiqa.api.deps.dependencies import (
    get_activity_service,
    get_now,
    get_user_service,
    require_capability,
)
from wathiqa.api.error_handling import handle_archive_errors
from wathiqa.application.services import ActivityService, UserService, commit_changes
from wathiqa.core.access import AccessSession
from wathiqa.core.constants import ActivityAction
from wathiqa.models.user import (
    AccessSessionResponse,
    ActivityResponse,
    CapabilitiesResponse,
    CreateUserRequest,
    OpenSessionRequest,
    RestrictUserRequest,
    UpdateRoleRequest,
    UserResponse,
)

router = APIRouter(prefix="/users", tags=["users"])
sessions_router = APIRouter(prefix="/sessions", tags=["sessions"])

manage_users = require_capability("can_manage_users")


@router.post("", response_model=UserResponse, status_code=201)
@handle_archive_errors
async def create_user(
    request: CreateUserRequest,
    _session: AccessSession = Depends(manage_users),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Create a staff account.

    Raises:
        HTTPException(409): Username taken
        HTTPException(403): Caller cannot manage users
    """
    user_id = await user_service.create_user(
        username=request.username,
        email=request.email,
        full_name=request.full_name,
        role=request.role,
    )
    await commit_changes(user_service.db, "create_user", username=request.username)
    return UserResponse(**await user_service.get_user(user_id))


@router.get("", response_model=list[UserResponse])
@handle_archive_errors
async def list_users(
    limit: int = Query(100, ge=1),
    offset: int = Query(0, ge=0),
    _session: AccessSession = Depends(manage_users),
    user_service: UserService = Depends(get_user_service),
) -> list[UserResponse]:
    users = await user_service.list_users(limit=limit, offset=offset)
    return [UserResponse(**u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
@handle_archive_errors
async def get_user(
    user_id: UUID,
    _session: AccessSession = Depends(manage_users),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    return UserResponse(**await user_service.get_user(user_id))


@router.put("/{user_id}/role", response_model=UserResponse)
@handle_archive_errors
async def update_role(
    user_id: UUID,
    request: UpdateRoleRequest,
    _session: AccessSession = Depends(manage_users),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    user = await user_service.update_role(user_id, request.role)
    await commit_changes(user_service.db, "update_role", user_id=user_id)
    return UserResponse(**user)


@router.put("/{user_id}/restrict", response_model=UserResponse)
@handle_archive_errors
async def restrict_user(
    user_id: UUID,
    request: RestrictUserRequest,
    session: AccessSession = Depends(manage_users),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Lock (``restrict=true``) or unlock an account."""
    user = await user_service.restrict_user(
        user_id,
        restricted_by=session.user_id,
        reason=request.reason,
        restrict=request.restrict,
    )
    await commit_changes(user_service.db, "restrict_user", user_id=user_id)
    return UserResponse(**user)


@router.get("/{user_id}/activity", response_model=list[ActivityResponse])
@handle_archive_errors
async def get_user_activity(
    user_id: UUID,
    limit: int = Query(50, ge=1, le=500),
    _session: AccessSession = Depends(manage_users),
    user_service: UserService = Depends(get_user_service),
    activity_service: ActivityService = Depends(get_activity_service),
) -> list[ActivityResponse]:
    """
    Latest activity of an account, newest first.

    Raises:
        HTTPException(404): Unknown user
    """
    await user_service.get_user(user_id)
    entries = await activity_service.list_for_user(user_id, limit=limit)
    return [ActivityResponse(**e) for e in entries]


@sessions_router.post("", response_model=AccessSessionResponse, status_code=201)
@handle_archive_errors
async def open_session(
    request: OpenSessionRequest,
    user_service: UserService = Depends(get_user_service),
    activity_service: ActivityService = Depends(get_activity_service),
    now=Depends(get_now),
) -> AccessSessionResponse:
    """
    Open an access session for an authenticated user.

    Clients echo the returned ``expires_at`` in ``X-Session-Expires-At``.

    Raises:
        HTTPException(404): Unknown user
    """
    session = await user_service.open_session(request.user_id, now)
    await activity_service.record(session.user_id, ActivityAction.SESSION_OPENED, "session")
    await commit_changes(user_service.db, "open_session", user_id=session.user_id)
    caps = session.capabilities
    return AccessSessionResponse(
        user_id=session.user_id,
        role=session.role,
        capabilities=CapabilitiesResponse(
            can_upload=caps.can_upload,
            can_manage_blocks=caps.can_manage_blocks,
            can_annotate=caps.can_annotate,
            can_review=caps.can_review,
            can_manage_users=caps.can_manage_users,
        ),
        issued_at=session.issued_at,
        expires_at=session.expires_at,
        is_restricted=session.is_locked,
        restriction_reason=session.restriction_reason,
    )
