# mypy: ignore-errors
# tests/v1/test_reports.py
"""Tests for member reports and the admin report queue."""

from fastapi import status

from community_platform.models import Comment


def _report_post(client, headers, post_id, report_type="spam"):
    return client.post(
        f"/api/v1/posts/{post_id}/reports",
        json={"report_type": report_type, "reason": "Looks automated"},
        headers=headers,
    )


def test_report_post(client, other_auth_token, other_member, test_post) -> None:
    """Members can report a post; the report starts open."""
    response = _report_post(client, other_auth_token, test_post.id)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["post_id"] == test_post.id
    assert data["comment_id"] is None
    assert data["reporter_member_id"] == other_member.id
    assert data["status"] == "open"
    assert data["resolved_at"] is None


def test_duplicate_report_conflicts(client, other_auth_token, auth_token, test_post) -> None:
    """One live report per member and post; other members may still report."""
    assert _report_post(client, other_auth_token, test_post.id).status_code == status.HTTP_201_CREATED

    again = _report_post(client, other_auth_token, test_post.id, "abuse")
    assert again.status_code == status.HTTP_409_CONFLICT
    assert _report_post(client, auth_token, test_post.id).status_code == status.HTTP_201_CREATED


def test_report_missing_post(client, auth_token) -> None:
    """Reports need a live target."""
    assert _report_post(client, auth_token, "missing").status_code == status.HTTP_404_NOT_FOUND


def test_report_requires_auth(client, test_post) -> None:
    """Anonymous callers cannot file reports."""
    response = client.post(
        f"/api/v1/posts/{test_post.id}/reports",
        json={"report_type": "spam"},
    )
    assert response.status_code in {status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN}


def test_report_comment(client, other_auth_token, test_post, member, db_session) -> None:
    """Comments can be reported the same way."""
    comment = Comment(post_id=test_post.id, author_member_id=member.id, body="rude")
    db_session.add(comment)
    db_session.flush()

    response = client.post(
        f"/api/v1/comments/{comment.id}/reports",
        json={"report_type": "abuse"},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["comment_id"] == comment.id
    assert response.json()["post_id"] is None


def test_withdraw_report_allows_refiling(client, other_auth_token, auth_token, test_post) -> None:
    """Only the reporter can withdraw, and a withdrawn report no longer blocks a new one."""
    report_id = _report_post(client, other_auth_token, test_post.id).json()["id"]

    foreign = client.delete(f"/api/v1/reports/{report_id}", headers=auth_token)
    assert foreign.status_code == status.HTTP_404_NOT_FOUND

    response = client.delete(f"/api/v1/reports/{report_id}", headers=other_auth_token)
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert _report_post(client, other_auth_token, test_post.id).status_code == status.HTTP_201_CREATED


def test_admin_lists_report_queue(client, admin_token, other_auth_token, auth_token, make_post) -> None:
    """The queue filters by status and target and lists oldest first."""
    first = make_post("first", minutes=1)
    second = make_post("second", minutes=2)
    older = _report_post(client, other_auth_token, first.id).json()
    newer = _report_post(client, auth_token, second.id).json()

    response = client.patch(
        "/api/v1/admin/reports",
        json={"status": "open", "target": "post"},
        headers=admin_token,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["pagination"]["records"] == 2
    assert {row["id"] for row in data["data"]} == {older["id"], newer["id"]}

    filtered = client.patch(
        "/api/v1/admin/reports",
        json={"post_id": second.id},
        headers=admin_token,
    ).json()
    assert [row["id"] for row in filtered["data"]] == [newer["id"]]

    none = client.patch("/api/v1/admin/reports", json={"target": "comment"}, headers=admin_token)
    assert none.json()["data"] == []


def test_member_cannot_list_reports(client, auth_token) -> None:
    """The report queue is admin-only."""
    response = client.patch("/api/v1/admin/reports", json={}, headers=auth_token)
    assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_admin_resolves_report(client, admin_token, admin, other_auth_token, test_post) -> None:
    """Resolving stamps resolved_at, records the reviewer and is audited."""
    report_id = _report_post(client, other_auth_token, test_post.id).json()["id"]
    url = f"/api/v1/admin/reports/{report_id}"

    reviewing = client.put(url, json={"status": "reviewing"}, headers=admin_token)
    assert reviewing.status_code == status.HTTP_200_OK
    assert reviewing.json()["resolved_at"] is None
    assert reviewing.json()["reviewer_admin_id"] == admin.id

    resolved = client.put(
        url,
        json={"status": "resolved", "resolution_notes": "Post removed"},
        headers=admin_token,
    )
    assert resolved.status_code == status.HTTP_200_OK
    data = resolved.json()
    assert data["status"] == "resolved"
    assert data["resolved_at"] is not None
    assert data["resolution_notes"] == "Post removed"

    logs = client.patch(
        "/api/v1/admin/audit-logs",
        json={"event_type": "report_review"},
        headers=admin_token,
    ).json()
    assert logs["pagination"]["records"] == 2


def test_closed_report_cannot_reopen(client, admin_token, other_auth_token, test_post) -> None:
    """Closed reports keep their status; withdrawing one is refused too."""
    report_id = _report_post(client, other_auth_token, test_post.id).json()["id"]
    url = f"/api/v1/admin/reports/{report_id}"
    client.put(url, json={"status": "dismissed"}, headers=admin_token)

    reopen = client.put(url, json={"status": "open"}, headers=admin_token)
    assert reopen.status_code == status.HTTP_400_BAD_REQUEST

    notes = client.put(
        url,
        json={"status": "dismissed", "resolution_notes": "Not spam"},
        headers=admin_token,
    )
    assert notes.status_code == status.HTTP_200_OK
    assert notes.json()["resolution_notes"] == "Not spam"

    withdraw = client.delete(f"/api/v1/reports/{report_id}", headers=other_auth_token)
    assert withdraw.status_code == status.HTTP_409_CONFLICT


def test_update_missing_report(client, admin_token) -> None:
    """Unknown report ids are 404."""
    response = client.put(
        "/api/v1/admin/reports/missing",
        json={"status": "resolved"},
        headers=admin_token,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
