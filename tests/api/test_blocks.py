import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from wathiqa.api.deps.dependencies import (
    get_allocation_service,
    get_block_service,
    get_document_service,
)
from wathiqa.core.access import Role
from wathiqa.core.addressing import make_address
from wathiqa.core.constants import ActivityAction
from wathiqa.core.exceptions import (
    ArchiveStoreError,
    BlockAlreadyFixedError,
    BlockAlreadyRegisteredError,
    InvalidFormatError,
    UnknownBlockError,
)


@pytest.fixture
def mock_block_service():
    service = AsyncMock()
    service.list_fixed_blocks = MagicMock(return_value=list("ABC"))
    service.list_custom_blocks.return_value = {"XY", "AB"}
    return service


def test_list_blocks(client, mock_block_service):
    client.app.dependency_overrides[get_block_service] = lambda: mock_block_service

    response = client.get("/api/v1/blocks")

    assert response.status_code == 200
    assert response.json() == {"fixed": ["A", "B", "C"], "custom": ["AB", "XY"]}


def test_register_block(client, as_role, mock_block_service, mock_activity_service):
    session = as_role(Role.ARCHIVIST)
    mock_block_service.register_custom_block.return_value = "XY"
    client.app.dependency_overrides[get_block_service] = lambda: mock_block_service

    response = client.post("/api/v1/blocks", json={"label": "XY"})

    assert response.status_code == 201
    mock_block_service.register_custom_block.assert_awaited_once_with("XY", created_by=session.user_id)
    mock_activity_service.record.assert_awaited_once_with(
        session.user_id, ActivityAction.BLOCK_REGISTERED, "block", "XY"
    )
    mock_block_service.db.commit.assert_awaited_once()


@pytest.mark.parametrize(
    "error,status_code",
    [
        (InvalidFormatError("block must be 1-3 uppercase letters A-Z", field="block"), 400),
        (BlockAlreadyFixedError("A"), 409),
        (BlockAlreadyRegisteredError("XY"), 409),
        (ArchiveStoreError("Store failure", operation="register_custom_block"), 503),
    ],
)
def test_register_block_errors(client, as_role, mock_block_service, error, status_code):
    as_role(Role.ADMIN)
    mock_block_service.register_custom_block.side_effect = error
    client.app.dependency_overrides[get_block_service] = lambda: mock_block_service

    response = client.post("/api/v1/blocks", json={"label": "XY"})

    assert response.status_code == status_code
    assert response.json()["detail"] == error.message


def test_viewer_cannot_register_block(client, as_role, mock_block_service):
    as_role(Role.VIEWER)
    client.app.dependency_overrides[get_block_service] = lambda: mock_block_service

    response = client.post("/api/v1/blocks", json={"label": "XY"})

    assert response.status_code == 403
    mock_block_service.register_custom_block.assert_not_called()


def test_restricted_admin_is_denied(client, as_role, mock_block_service):
    as_role(Role.ADMIN, is_restricted=True)
    client.app.dependency_overrides[get_block_service] = lambda: mock_block_service

    response = client.post("/api/v1/blocks", json={"label": "XY"})

    assert response.status_code == 403


def test_list_block_documents(client):
    now = datetime.now(timezone.utc).isoformat()
    document = {
        "id": str(uuid.uuid4()),
        "section_id": str(uuid.uuid4()),
        "reference": "XY.1.2",
        "block": "XY",
        "row": "1",
        "column": "2",
        "title": "t",
        "metadata": {},
        "created_at": now,
        "updated_at": now,
    }
    service = AsyncMock()
    service.get_documents_by_prefix.return_value = [document]
    client.app.dependency_overrides[get_document_service] = lambda: service

    response = client.get("/api/v1/blocks/XY/rows/1/documents?limit=5000")

    assert response.status_code == 200
    assert response.json()[0]["reference"] == "XY.1.2"
    args = service.get_documents_by_prefix.call_args
    assert args.args == ("XY", "1")
    assert args.kwargs["limit"] == 500


def test_allocate_address(client, as_role):
    as_role(Role.ARCHIVIST)
    section_id = uuid.uuid4()
    service = AsyncMock()
    service.allocate.return_value = make_address("Z", "1", "1")
    service.resolve_section.return_value = section_id
    client.app.dependency_overrides[get_allocation_service] = lambda: service

    response = client.post("/api/v1/addresses", json={"block": "Z", "row": "1", "column": "1"})

    assert response.status_code == 200
    assert response.json() == {
        "reference": "Z.1.1",
        "block": "Z",
        "row": "1",
        "column": "1",
        "section_id": str(section_id),
    }


def test_allocate_unknown_block(client, as_role):
    as_role(Role.ARCHIVIST)
    service = AsyncMock()
    service.allocate.side_effect = UnknownBlockError("XX")
    client.app.dependency_overrides[get_allocation_service] = lambda: service

    response = client.post("/api/v1/addresses", json={"block": "XX", "row": "1", "column": "1"})

    assert response.status_code == 404
    service.resolve_section.assert_not_called()


def test_register_block_commit_failure_is_unavailable(client, as_role, mock_block_service):
    as_role(Role.ADMIN)
    mock_block_service.register_custom_block.return_value = "XY"
    mock_block_service.db.commit.side_effect = OperationalError(
        "COMMIT", {}, Exception("database is locked")
    )
    client.app.dependency_overrides[get_block_service] = lambda: mock_block_service

    response = client.post("/api/v1/blocks", json={"label": "XY"})

    assert response.status_code == 503
    mock_block_service.list_custom_blocks.assert_not_called()


def test_list_rows(client):
    service = AsyncMock()
    service.list_rows.return_value = ["2", "10"]
    client.app.dependency_overrides[get_allocation_service] = lambda: service

    response = client.get("/api/v1/blocks/M/rows")

    assert response.status_code == 200
    assert response.json() == {"block": "M", "rows": ["2", "10"]}
    service.list_rows.assert_awaited_once_with("M")


def test_list_rows_unknown_block(client):
    service = AsyncMock()
    service.list_rows.side_effect = UnknownBlockError("QQ")
    client.app.dependency_overrides[get_allocation_service] = lambda: service

    response = client.get("/api/v1/blocks/QQ/rows")

    assert response.status_code == 404


def test_list_sections(client):
    now = datetime.now(timezone.utc).isoformat()
    service = AsyncMock()
    service.list_sections.return_value = [
        {
            "id": str(uuid.uuid4()),
            "reference": f"M.2.{column}",
            "block": "M",
            "row": "2",
            "column": column,
            "created_at": now,
        }
        for column in ("3", "12")
    ]
    client.app.dependency_overrides[get_allocation_service] = lambda: service

    response = client.get("/api/v1/blocks/M/rows/2/sections")

    assert response.status_code == 200
    assert [s["reference"] for s in response.json()] == ["M.2.3", "M.2.12"]
    service.list_sections.assert_awaited_once_with("M", "2")


def test_list_sections_bad_row(client):
    service = AsyncMock()
    service.list_sections.side_effect = InvalidFormatError("row must be 1-3 digits 0-9", field="row")
    client.app.dependency_overrides[get_allocation_service] = lambda: service

    response = client.get("/api/v1/blocks/M/rows/x1/sections")

    assert response.status_code == 400


def test_allocate_address_commits_section(client, as_role):
    as_role(Role.ARCHIVIST)
    service = AsyncMock()
    service.allocate.return_value = make_address("Z", "1", "1")
    service.resolve_section.return_value = uuid.uuid4()
    client.app.dependency_overrides[get_allocation_service] = lambda: service

    response = client.post("/api/v1/addresses", json={"block": "Z", "row": "1", "column": "1"})

    assert response.status_code == 200
    service.db.commit.assert_awaited_once()
