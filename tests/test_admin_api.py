"""Integration tests for the admin HTTP endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient

import logging

from sqlalchemy.exc import OperationalError

from forum_admin.domain.queries import CascadeStage
from forum_admin.infrastructure.database import SessionLocal
from forum_admin.infrastructure.repositories import SqlAlchemyForumRepository
from forum_admin.infrastructure.security import create_access_token
from forum_admin.interfaces.api.dependencies import get_repository
from main import create_app


@pytest.fixture()
def client():
    with TestClient(create_app()) as test_client:
        yield test_client


def _auth(user_id: int = 1, role: str = "ADMIN") -> dict[str, str]:
    token = create_access_token({"sub": str(user_id), "role": role})
    return {"Authorization": f"Bearer {token}"}


def test_requests_without_token_are_unauthorized(client):
    assert client.get("/admin/users").status_code == 401
    assert client.get("/admin/overview").status_code == 401
    assert client.post("/admin/actions", json={"action": "GENERATE_SYSTEM_REPORT"}).status_code == 401


def test_invalid_token_is_unauthorized(client):
    response = client.get("/admin/users", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401


def test_non_admin_is_forbidden(client):
    response = client.get("/admin/users", headers=_auth(role="USER"))

    assert response.status_code == 403
    assert response.json()["detail"]["error"] == "NotAuthorized"


def test_list_users_page(client, forum):
    for index in range(12):
        forum.user(f"Member {index:02d}")

    response = client.get(
        "/admin/users",
        params={"page": 2, "pageSize": 5, "sortBy": "name", "sortOrder": "asc"},
        headers=_auth(),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["entity_type"] == "users"
    assert body["total_count"] == 12
    assert body["total_pages"] == 3
    assert (body["has_prev"], body["has_next"]) == (True, True)
    assert [item["name"] for item in body["items"]] == [f"Member {index:02d}" for index in range(5, 10)]
    assert body["items"][0]["question_count"] == 0


def test_limit_is_accepted_as_page_size(client, forum):
    for _ in range(3):
        forum.user()

    body = client.get("/admin/users", params={"limit": 2}, headers=_auth()).json()

    assert body["page_size"] == 2
    assert len(body["items"]) == 2


def test_list_questions_with_filters(client, forum):
    author = forum.user()
    python = forum.tag("python")
    question = forum.question(author, "Decorators explained", tag_ids=[python])
    forum.question(author, "Joins in SQL")

    response = client.get(
        "/admin/questions", params={"tagId": python, "search": "decorator"}, headers=_auth()
    )

    assert response.status_code == 200
    items = response.json()["items"]
    assert [item["id"] for item in items] == [question]
    assert items[0]["tags"][0]["name"] == "python"
    assert items[0]["author"]["id"] == author


@pytest.mark.parametrize(
    ("path", "params", "code"),
    [
        ("/admin/users", {"authorId": "1"}, "InvalidFilterKey"),
        ("/admin/users", {"sortBy": "title"}, "InvalidSortField"),
        ("/admin/tags", {"sortOrder": "random", "sortBy": "name"}, "InvalidSortOrder"),
        ("/admin/comments", {"page": "two"}, "InvalidPageParameter"),
        ("/admin/badges", {}, "InvalidEntityType"),
    ],
)
def test_invalid_list_parameters(client, path, params, code):
    response = client.get(path, params=params, headers=_auth())

    assert response.status_code == 400
    assert response.json()["detail"]["code"] == code


def test_overview_endpoint(client, forum):
    author = forum.user("Author", days_ago=5)
    voter = forum.user("Voter")
    question = forum.question(author, "Popular", days_ago=3)
    forum.vote(voter, question)

    response = client.get("/admin/overview", headers=_auth())

    assert response.status_code == 200
    body = response.json()
    assert body["stats"]["total_users"] == 2
    assert body["growth"]["users"]["recent_count"] == 1
    assert body["top_questions"][0]["subject"]["title"] == "Popular"
    assert body["most_active_users"][0]["subject"]["name"] == "Author"
    assert {item["role"] for item in body["user_role_distribution"]} == {"USER", "ADMIN"}


def test_list_actions(client):
    response = client.get("/admin/actions", headers=_auth())

    assert response.status_code == 200
    assert "DELETE_USER" in response.json()


def test_action_without_confirmation_is_precondition_failed(client, forum):
    target = forum.user()

    response = client.post(
        "/admin/actions",
        json={"action": "DELETE_USER", "parameters": {"userId": target}},
        headers=_auth(),
    )

    assert response.status_code == 412
    users = client.get("/admin/users", headers=_auth()).json()
    assert users["total_count"] == 1


def test_delete_user_action(client, forum):
    forum.admin()
    target = forum.user()

    response = client.post(
        "/admin/actions",
        json={"action": "DELETE_USER", "parameters": {"userId": target, "confirm": True}},
        headers=_auth(user_id=1),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["action"] == "DELETE_USER"
    assert body["status"] == "completed"
    assert body["affected"] == 1


def test_delete_missing_user_is_not_found(client):
    response = client.post(
        "/admin/actions",
        json={"action": "DELETE_USER", "parameters": {"userId": 404, "confirm": True}},
        headers=_auth(),
    )

    assert response.status_code == 404


def test_dashboard_accepts_legacy_action_payload(client, forum):
    user = forum.user()
    forum.notification(user, read=True, days_ago=90)

    response = client.post(
        "/admin/overview",
        json={"action": "CLEAR_NOTIFICATIONS", "data": {"olderThanDays": 30}},
        headers=_auth(),
    )

    assert response.status_code == 200
    assert response.json()["action"] == "CLEAR_OLD_NOTIFICATIONS"
    assert response.json()["affected"] == 1


def test_system_report_action(client, forum):
    forum.user()

    response = client.post(
        "/admin/actions", json={"action": "GENERATE_SYSTEM_REPORT"}, headers=_auth()
    )

    assert response.status_code == 200
    body = response.json()
    assert body["affected"] == 0
    assert body["report"]["diagnostics"]["record_counts"]["users"] == 1
    assert body["report"]["overview"]["stats"]["total_users"] == 1


class _FailingUserStageRepository(SqlAlchemyForumRepository):
    def _delete_stage(self, stage, user_id):
        if stage is CascadeStage.USER:
            raise OperationalError("DELETE", {}, Exception("lock timeout"))
        return super()._delete_stage(stage, user_id)


@pytest.fixture()
def failing_client():
    app = create_app()

    def _repository():
        with SessionLocal() as session:
            yield _FailingUserStageRepository(session)

    app.dependency_overrides[get_repository] = _repository
    with TestClient(app) as test_client:
        yield test_client


@pytest.mark.parametrize("path", ["/admin/actions", "/admin/overview"])
def test_partial_failure_is_reported_the_same_on_both_action_routes(
    failing_client, forum, caplog, path
):
    forum.admin()
    target = forum.user()

    with caplog.at_level(logging.WARNING, logger="forum_admin.interfaces.api.routes_helpers"):
        response = failing_client.post(
            path,
            json={"action": "DELETE_USER", "parameters": {"userId": target, "confirm": True}},
            headers=_auth(user_id=1),
        )

    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["error"] == "PartialFailure"
    assert detail["stage"] == "user"
    assert detail["user_id"] == target
    assert "stopped at stage user" in caplog.text
