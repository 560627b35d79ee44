"""
Fixtures for router tests: app client and injectable access sessions.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from wathiqa.api.deps.dependencies import get_access_session, get_activity_service
from wathiqa.api.main import create_app
from wathiqa.core.access import Role


@pytest.fixture
def mock_activity_service():
    return AsyncMock()


@pytest.fixture
def client(mock_activity_service):
    app = create_app()
    app.dependency_overrides[get_activity_service] = lambda: mock_activity_service
    return TestClient(app)


@pytest.fixture
def as_role(client, make_access_session):
    """Authenticate every request as a fresh session of ``role``."""

    def _as(role: Role, is_restricted: bool = False):
        session = make_access_session(role, is_restricted=is_restricted)
        client.app.dependency_overrides[get_access_session] = lambda: session
        return session

    return _as
