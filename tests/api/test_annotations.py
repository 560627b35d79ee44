import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

from wathiqa.api.deps.dependencies import (
    get_comment_service,
    get_recommendation_service,
    get_report_service,
)
from wathiqa.core.access import Role
from wathiqa.core.constants import RecommendationStatus, ReportStatus
from wathiqa.core.exceptions import AnnotationNotFoundError, DocumentNotFoundError


def _base(**fields):
    now = datetime.now(timezone.utc).isoformat()
    return {
        "id": str(uuid.uuid4()),
        "document_id": str(uuid.uuid4()),
        "user_id": str(uuid.uuid4()),
        "created_at": now,
        "updated_at": now,
        **fields,
    }


def test_viewer_can_comment(client, as_role):
    session = as_role(Role.VIEWER)
    service = AsyncMock()
    service.create.return_value = _base(content="page 2 missing", type="question", is_resolved=False)
    client.app.dependency_overrides[get_comment_service] = lambda: service
    document_id = uuid.uuid4()

    response = client.post(
        "/api/v1/comments",
        json={"document_id": str(document_id), "content": "page 2 missing", "type": "question"},
    )

    assert response.status_code == 201
    assert response.json()["type"] == "question"
    assert service.create.call_args.args == (document_id, session.user_id)


def test_comment_on_missing_document(client, as_role):
    as_role(Role.VIEWER)
    service = AsyncMock()
    service.create.side_effect = DocumentNotFoundError("x")
    client.app.dependency_overrides[get_comment_service] = lambda: service

    response = client.post(
        "/api/v1/comments", json={"document_id": str(uuid.uuid4()), "content": "x"}
    )

    assert response.status_code == 404


def test_invalid_comment_type_is_unprocessable(client, as_role):
    as_role(Role.VIEWER)
    client.app.dependency_overrides[get_comment_service] = lambda: AsyncMock()

    response = client.post(
        "/api/v1/comments",
        json={"document_id": str(uuid.uuid4()), "content": "x", "type": "rant"},
    )

    assert response.status_code == 422


def test_viewer_cannot_review_recommendation(client, as_role):
    as_role(Role.VIEWER)
    service = AsyncMock()
    client.app.dependency_overrides[get_recommendation_service] = lambda: service

    response = client.put(
        f"/api/v1/recommendations/{uuid.uuid4()}/status", json={"status": "approved"}
    )

    assert response.status_code == 403
    service.update_status.assert_not_called()


def test_archivist_approves_recommendation(client, as_role):
    as_role(Role.ARCHIVIST)
    recommendation_id = uuid.uuid4()
    service = AsyncMock()
    service.update_status.return_value = _base(
        title="t", description="d", priority="high", status="approved"
    )
    client.app.dependency_overrides[get_recommendation_service] = lambda: service

    response = client.put(
        f"/api/v1/recommendations/{recommendation_id}/status", json={"status": "approved"}
    )

    assert response.status_code == 200
    service.update_status.assert_awaited_once_with(recommendation_id, RecommendationStatus.APPROVED)


def test_list_open_reports(client):
    service = AsyncMock()
    service.list_annotations.return_value = [
        _base(title="typo", description="d", type="error", severity="low", status="open")
    ]
    client.app.dependency_overrides[get_report_service] = lambda: service

    response = client.get("/api/v1/reports", params={"status": "open"})

    assert response.status_code == 200
    assert response.json()[0]["severity"] == "low"
    assert service.list_annotations.call_args.kwargs["status"] is ReportStatus.OPEN


def test_delete_missing_report(client, as_role):
    as_role(Role.ADMIN)
    service = AsyncMock()
    service.delete.side_effect = AnnotationNotFoundError("x")
    client.app.dependency_overrides[get_report_service] = lambda: service

    response = client.delete(f"/api/v1/reports/{uuid.uuid4()}")

    assert response.status_code == 404
