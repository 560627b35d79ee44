import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from wathiqa.api.deps.dependencies import (
    get_allocation_service,
    get_document_service,
    get_favorite_service,
    get_paper_service,
)
from wathiqa.core.access import Role
from wathiqa.core.addressing import make_address
from wathiqa.core.constants import CATEGORIES, DEFAULT_STATUS, STATUSES, ActivityAction
from wathiqa.core.exceptions import DocumentNotFoundError, InvalidFormatError


def _document(**overrides):
    now = datetime.now(timezone.utc).isoformat()
    document = {
        "id": str(uuid.uuid4()),
        "section_id": str(uuid.uuid4()),
        "reference": "A.1.1",
        "block": "A",
        "row": "1",
        "column": "1",
        "title": "عقد بيع",
        "category": "عقود",
        "status": "نشط",
        "description": None,
        "metadata": {},
        "created_by": None,
        "created_at": now,
        "updated_at": now,
        "papers": [],
    }
    document.update(overrides)
    return document


@pytest.fixture
def services(client):
    allocator = AsyncMock()
    allocator.allocate.return_value = make_address("A", "1", "1")
    documents = AsyncMock()
    client.app.dependency_overrides[get_allocation_service] = lambda: allocator
    client.app.dependency_overrides[get_document_service] = lambda: documents
    return allocator, documents


def test_create_document(client, as_role, services, mock_activity_service):
    session = as_role(Role.ARCHIVIST)
    allocator, documents = services
    document = _document()
    documents.create_document.return_value = uuid.UUID(document["id"])
    documents.get_document.return_value = document

    response = client.post(
        "/api/v1/documents",
        json={"block": "A", "row": "1", "column": "1", "title": "عقد بيع", "category": "عقود"},
    )

    assert response.status_code == 201
    assert response.json()["reference"] == "A.1.1"
    allocator.allocate.assert_awaited_once_with("A", "1", "1")
    kwargs = documents.create_document.call_args.kwargs
    assert kwargs["created_by"] == session.user_id
    assert kwargs["status"] == DEFAULT_STATUS
    mock_activity_service.record.assert_awaited_once()
    assert mock_activity_service.record.call_args.args[:4] == (
        session.user_id,
        ActivityAction.DOCUMENT_FILED,
        "document",
        uuid.UUID(document["id"]),
    )
    documents.db.commit.assert_awaited_once()


def test_create_document_bad_row(client, as_role, services):
    as_role(Role.ARCHIVIST)
    allocator, documents = services
    allocator.allocate.side_effect = InvalidFormatError("row must be 1-3 digits 0-9", field="row")

    response = client.post(
        "/api/v1/documents",
        json={"block": "A", "row": "1000", "column": "1", "title": "t"},
    )

    assert response.status_code == 400
    documents.create_document.assert_not_called()


def test_viewer_cannot_upload(client, as_role, services):
    as_role(Role.VIEWER)

    response = client.post(
        "/api/v1/documents",
        json={"block": "A", "row": "1", "column": "1", "title": "t"},
    )

    assert response.status_code == 403


def test_create_document_requires_title(client, as_role, services):
    as_role(Role.ARCHIVIST)

    response = client.post("/api/v1/documents", json={"block": "A", "row": "1", "column": "1"})

    assert response.status_code == 422


def test_get_document_not_found(client, services):
    _, documents = services
    missing = uuid.uuid4()
    documents.get_document.side_effect = DocumentNotFoundError(missing)

    response = client.get(f"/api/v1/documents/{missing}")

    assert response.status_code == 404


def test_search_documents(client, services):
    _, documents = services
    documents.search_documents.return_value = [_document(title="Lease")]

    response = client.get("/api/v1/documents", params={"q": "lease", "status": "نشط"})

    assert response.status_code == 200
    assert [d["title"] for d in response.json()] == ["Lease"]
    kwargs = documents.search_documents.call_args.kwargs
    assert kwargs["query"] == "lease"
    assert kwargs["status"] == "نشط"


def test_add_paper(client, as_role):
    as_role(Role.ARCHIVIST)
    document_id = uuid.uuid4()
    papers = AsyncMock()
    papers.add_paper.return_value = {
        "id": str(uuid.uuid4()),
        "document_id": str(document_id),
        "title": "scan",
        "content": None,
        "attachment_url": "A/A.1.1/scan.pdf",
        "file_type": "pdf",
        "file_size": 10,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    client.app.dependency_overrides[get_paper_service] = lambda: papers

    response = client.post(
        f"/api/v1/documents/{document_id}/papers",
        json={"title": "scan", "filename": "scan.pdf", "file_type": "pdf", "file_size": 10},
    )

    assert response.status_code == 201
    assert response.json()["attachment_url"] == "A/A.1.1/scan.pdf"
    assert papers.add_paper.call_args.args == (document_id,)
    assert papers.add_paper.call_args.kwargs["filename"] == "scan.pdf"


def test_dashboard_stats(client, services):
    _, documents = services
    documents.get_dashboard_stats.return_value = {
        "total_documents": 3,
        "documents_by_status": {"نشط": 2, "مؤرشف": 1},
        "custom_blocks": 1,
        "sections": 2,
        "open_reports": 0,
        "pending_recommendations": 1,
    }

    response = client.get("/api/v1/dashboard/stats")

    assert response.status_code == 200
    assert response.json()["total_documents"] == 3


def test_create_document_commit_failure_is_unavailable(client, as_role, services):
    as_role(Role.ARCHIVIST)
    _, documents = services
    documents.create_document.return_value = uuid.uuid4()
    documents.db.commit.side_effect = OperationalError("COMMIT", {}, Exception("disk I/O error"))

    response = client.post(
        "/api/v1/documents",
        json={"block": "A", "row": "1", "column": "1", "title": "t"},
    )

    assert response.status_code == 503
    documents.get_document.assert_not_called()


def test_vocabulary(client):
    response = client.get("/api/v1/documents/vocabulary")

    assert response.status_code == 200
    assert response.json() == {
        "categories": list(CATEGORIES),
        "statuses": list(STATUSES),
        "default_status": DEFAULT_STATUS,
    }


@pytest.fixture
def favorites(client):
    service = AsyncMock()
    client.app.dependency_overrides[get_favorite_service] = lambda: service
    return service


def test_list_favorites(client, as_role, favorites):
    session = as_role(Role.VIEWER)
    favorites.list_favorites.return_value = [_document(title="Deed")]

    response = client.get("/api/v1/documents/favorites")

    assert response.status_code == 200
    assert [d["title"] for d in response.json()] == ["Deed"]
    favorites.list_favorites.assert_awaited_once_with(session.user_id)


def test_add_favorite(client, as_role, favorites, mock_activity_service):
    session = as_role(Role.VIEWER)
    document_id = uuid.uuid4()
    favorites.add_favorite.return_value = True

    response = client.post(f"/api/v1/documents/{document_id}/favorite")

    assert response.status_code == 200
    assert response.json() == {
        "document_id": str(document_id),
        "is_favorited": True,
        "changed": True,
    }
    mock_activity_service.record.assert_awaited_once_with(
        session.user_id, ActivityAction.FAVORITE_ADDED, "document", document_id
    )
    favorites.db.commit.assert_awaited_once()


def test_repeat_favorite_records_nothing(client, as_role, favorites, mock_activity_service):
    as_role(Role.VIEWER)
    favorites.add_favorite.return_value = False

    response = client.post(f"/api/v1/documents/{uuid.uuid4()}/favorite")

    assert response.status_code == 200
    assert response.json()["changed"] is False
    mock_activity_service.record.assert_not_called()


def test_favorite_missing_document(client, as_role, favorites):
    as_role(Role.VIEWER)
    missing = uuid.uuid4()
    favorites.add_favorite.side_effect = DocumentNotFoundError(missing)

    response = client.post(f"/api/v1/documents/{missing}/favorite")

    assert response.status_code == 404
    favorites.db.commit.assert_not_called()


def test_remove_favorite(client, as_role, favorites, mock_activity_service):
    session = as_role(Role.VIEWER)
    document_id = uuid.uuid4()
    favorites.remove_favorite.return_value = True

    response = client.delete(f"/api/v1/documents/{document_id}/favorite")

    assert response.status_code == 200
    assert response.json()["is_favorited"] is False
    mock_activity_service.record.assert_awaited_once_with(
        session.user_id, ActivityAction.FAVORITE_REMOVED, "document", document_id
    )
    favorites.db.commit.assert_awaited_once()


def test_delete_paper_commits(client, as_role):
    as_role(Role.ARCHIVIST)
    papers = AsyncMock()
    client.app.dependency_overrides[get_paper_service] = lambda: papers

    response = client.delete(f"/api/v1/documents/papers/{uuid.uuid4()}")

    assert response.status_code == 200
    papers.db.commit.assert_awaited_once()


def test_recent_documents(client, services):
    _, documents = services
    documents.get_recent_documents.return_value = [_document(title="new"), _document(title="old")]

    response = client.get("/api/v1/dashboard/recent-documents", params={"limit": 2})

    assert response.status_code == 200
    assert [d["title"] for d in response.json()] == ["new", "old"]
    documents.get_recent_documents.assert_awaited_once_with(limit=2)


def test_recent_documents_limit_bounds(client, services):
    response = client.get("/api/v1/dashboard/recent-documents", params={"limit": 0})

    assert response.status_code == 422


def test_my_activity(client, as_role, mock_activity_service):
    session = as_role(Role.VIEWER)
    mock_activity_service.list_for_user.return_value = [
        {
            "id": str(uuid.uuid4()),
            "user_id": str(session.user_id),
            "action": ActivityAction.FAVORITE_ADDED.value,
            "resource_type": "document",
            "resource_id": str(uuid.uuid4()),
            "details": {},
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
    ]

    response = client.get("/api/v1/dashboard/activity")

    assert response.status_code == 200
    assert response.json()[0]["action"] == "favorite_added"
    mock_activity_service.list_for_user.assert_awaited_once_with(session.user_id, limit=20)
