# mypy: ignore-errors
# tests/v1/test_admin.py
"""Tests for admin moderation and audit log endpoints."""

from fastapi import status

from community_platform.models import Comment


def test_admin_erases_post(client, admin_token, admin, test_post, db_session) -> None:
    """Admins can remove any post and the erase is audited."""
    response = client.delete(f"/api/v1/admin/posts/{test_post.id}", headers=admin_token)
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get(f"/api/v1/posts/{test_post.id}").status_code == status.HTTP_404_NOT_FOUND

    logs = client.patch(
        "/api/v1/admin/audit-logs",
        json={"event_type": "post_erase"},
        headers=admin_token,
    )
    assert logs.status_code == status.HTTP_200_OK
    data = logs.json()
    assert data["pagination"]["records"] == 1
    assert data["data"][0]["actor_admin_id"] == admin.id


def test_member_cannot_use_admin_routes(client, auth_token, test_post) -> None:
    """Member tokens are refused on admin routes."""
    response = client.delete(f"/api/v1/admin/posts/{test_post.id}", headers=auth_token)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_admin_erases_comment_thread(client, admin_token, auth_token, test_post, db_session) -> None:
    """Erasing a comment also removes its replies."""
    root = client.post(
        "/api/v1/comments",
        json={"post_id": test_post.id, "body": "root"},
        headers=auth_token,
    ).json()
    reply = client.post(
        "/api/v1/comments",
        json={"post_id": test_post.id, "body": "reply", "parent_comment_id": root["id"]},
        headers=auth_token,
    ).json()

    response = client.delete(f"/api/v1/admin/comments/{root['id']}", headers=admin_token)
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert db_session.get(Comment, reply["id"]).deleted_at is not None


def test_audit_log_filters_and_pages(client, admin_token) -> None:
    """Audit search filters by event type and paginates newest first."""
    for n in range(3):
        client.post(
            "/api/v1/auth/members/join",
            json={"email": f"user{n}@example.org", "password": "password-123"},
        )

    response = client.patch(
        "/api/v1/admin/audit-logs",
        json={"event_type": "member_join", "limit": 2},
        headers=admin_token,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["pagination"] == {"current": 1, "limit": 2, "records": 3, "pages": 2}
    assert all(row["event_type"] == "member_join" for row in data["data"])
