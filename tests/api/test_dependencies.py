"""
Test suite for the access session dependency.

Drives get_access_session through a tiny app so header parsing, expiry and
the restriction guard are exercised exactly as routes see them.

System role: Verification of request authentication plumbing
"""

import uuid
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.api.deps.dependencies import (
    get_access_session,
    get_block_service,
    get_now,
    get_user_service,
    require_capability,
)
from wathiqa.application.services import BlockService
from wathiqa.core.access import AccessSession, Role, open_session
from wathiqa.core.exceptions import UserNotFoundError


@pytest.fixture
def user_service():
    return AsyncMock()


@pytest.fixture
def whoami_client(user_service, fixed_now):
    app = FastAPI()

    @app.get("/whoami")
    async def whoami(session: AccessSession = Depends(get_access_session)):
        return {"user_id": str(session.user_id), "role": session.role.value}

    @app.get("/upload")
    async def upload(session: AccessSession = Depends(require_capability("can_upload"))):
        return {"ok": True}

    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_now] = lambda: fixed_now
    return TestClient(app)


def _session_for(user_id, role, now, **kwargs):
    return open_session(user_id, role, now, timedelta(hours=24), **kwargs)


def _headers(user_id, expires_at):
    return {"X-User-ID": str(user_id), "X-Session-Expires-At": expires_at.isoformat()}


def test_missing_header_is_unauthorized(whoami_client):
    assert whoami_client.get("/whoami").status_code == 401


def test_malformed_user_id_is_unauthorized(whoami_client):
    assert whoami_client.get("/whoami", headers={"X-User-ID": "not-a-uuid"}).status_code == 401


def test_unknown_user_is_not_found(whoami_client, user_service, fixed_now):
    user_service.open_session.side_effect = UserNotFoundError("x")

    response = whoami_client.get("/whoami", headers=_headers(uuid.uuid4(), fixed_now + timedelta(hours=1)))

    assert response.status_code == 404


def test_valid_session(whoami_client, user_service, fixed_now):
    user_id = uuid.uuid4()
    user_service.open_session.return_value = _session_for(user_id, Role.ARCHIVIST, fixed_now)

    response = whoami_client.get("/whoami", headers=_headers(user_id, fixed_now + timedelta(hours=24)))

    assert response.status_code == 200
    assert response.json() == {"user_id": str(user_id), "role": "archivist"}
    user_service.open_session.assert_awaited_once_with(user_id, fixed_now)


def test_expired_client_session(whoami_client, user_service, fixed_now):
    user_id = uuid.uuid4()
    user_service.open_session.return_value = _session_for(user_id, Role.ADMIN, fixed_now)

    response = whoami_client.get("/whoami", headers=_headers(user_id, fixed_now - timedelta(minutes=5)))

    assert response.status_code == 401


def test_unexpired_client_session(whoami_client, user_service, fixed_now):
    user_id = uuid.uuid4()
    user_service.open_session.return_value = _session_for(user_id, Role.ADMIN, fixed_now)

    response = whoami_client.get("/whoami", headers=_headers(user_id, fixed_now + timedelta(hours=1)))

    assert response.status_code == 200


def test_missing_expiry_header_is_unauthorized(whoami_client, user_service, fixed_now):
    user_id = uuid.uuid4()
    user_service.open_session.return_value = _session_for(user_id, Role.ADMIN, fixed_now)

    response = whoami_client.get("/whoami", headers={"X-User-ID": str(user_id)})

    assert response.status_code == 401
    assert response.json()["detail"] == "X-Session-Expires-At header required"


@pytest.mark.parametrize(
    "presented",
    [
        "2999-01-01T00:00:00Z",
        "2024-05-02T09:30:01+00:00",
    ],
)
def test_expiry_beyond_ttl_is_rejected(whoami_client, user_service, fixed_now, presented):
    user_id = uuid.uuid4()
    user_service.open_session.return_value = _session_for(user_id, Role.VIEWER, fixed_now)

    response = whoami_client.get(
        "/whoami", headers={"X-User-ID": str(user_id), "X-Session-Expires-At": presented}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Session expiry exceeds the issued lifetime"


def test_capability_granted(whoami_client, user_service, fixed_now):
    user_id = uuid.uuid4()
    user_service.open_session.return_value = _session_for(user_id, Role.ARCHIVIST, fixed_now)

    response = whoami_client.get("/upload", headers=_headers(user_id, fixed_now + timedelta(hours=1)))

    assert response.status_code == 200


def test_restricted_user_is_forbidden(whoami_client, user_service, fixed_now):
    user_id = uuid.uuid4()
    user_service.open_session.return_value = _session_for(
        user_id, Role.ADMIN, fixed_now, is_restricted=True, restriction_reason="audit"
    )

    response = whoami_client.get("/upload", headers=_headers(user_id, fixed_now + timedelta(hours=1)))

    assert response.status_code == 403


def test_get_block_service_binds_session():
    db = AsyncMock(spec=AsyncSession)

    service = get_block_service(db=db)

    assert isinstance(service, BlockService)
    assert service.db is db
