# mypy: ignore-errors
# tests/v1/test_communities.py
"""Tests for community-related endpoints."""

from fastapi import status

from community_platform.db.time import utcnow
from community_platform.models import CommunityMembership


def test_search_communities(client, community) -> None:
    """Test listing communities by name fragment."""
    response = client.patch("/api/v1/communities", json={"name": "COMMUNITY_"})
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["pagination"]["records"] == 1
    assert data["data"][0]["id"] == community.id


def test_search_communities_by_owner(client, community, other_member) -> None:
    """Owner filter excludes communities owned by others."""
    response = client.patch("/api/v1/communities", json={"owner_id": other_member.id})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"] == []


def test_get_community(client, community) -> None:
    """Test getting a specific community."""
    response = client.get(f"/api/v1/communities/{community.id}")
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["name"] == community.name


def test_get_nonexistent_community(client) -> None:
    """Test getting a non-existent community."""
    response = client.get("/api/v1/communities/99999")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_create_community(client, auth_token, member, db_session) -> None:
    """Creating a community makes the caller its owner and first member."""
    response = client.post(
        "/api/v1/communities",
        json={"name": "python-devs", "description": "All things Python"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["name"] == "python-devs"
    assert data["owner_member_id"] == member.id

    membership = db_session.query(CommunityMembership).filter_by(
        community_id=data["id"], member_id=member.id
    ).first()
    assert membership is not None


def test_create_duplicate_community(client, auth_token, community) -> None:
    """Names collide regardless of case."""
    response = client.post(
        "/api/v1/communities",
        json={"name": community.name.upper()},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_409_CONFLICT


def test_deleted_community_name_can_be_reused(client, auth_token, community, db_session) -> None:
    """Soft-deleted communities release their name."""
    community.deleted_at = utcnow()
    db_session.flush()
    response = client.post(
        "/api/v1/communities",
        json={"name": community.name},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED


def test_create_community_invalid_name(client, auth_token) -> None:
    """Names are 5-32 characters of letters, digits, hyphen or underscore."""
    for name in ("abc", "has spaces", "x" * 33, "emoji🙂name"):
        response = client.post(
            "/api/v1/communities",
            json={"name": name},
            headers=auth_token,
        )
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


def test_join_and_leave_community(client, other_auth_token, community) -> None:
    """Members can join once and leave once."""
    url = f"/api/v1/communities/{community.id}/memberships"

    joined = client.post(url, headers=other_auth_token)
    assert joined.status_code == status.HTTP_201_CREATED
    assert joined.json()["community_id"] == community.id

    again = client.post(url, headers=other_auth_token)
    assert again.status_code == status.HTTP_409_CONFLICT

    left = client.delete(url, headers=other_auth_token)
    assert left.status_code == status.HTTP_204_NO_CONTENT

    not_member = client.delete(url, headers=other_auth_token)
    assert not_member.status_code == status.HTTP_404_NOT_FOUND


def test_join_missing_community(client, auth_token) -> None:
    """Joining an unknown community is a 404."""
    response = client.post("/api/v1/communities/missing/memberships", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND


def _add_rule(client, headers, community_id, text):
    return client.post(
        f"/api/v1/communities/{community_id}/rules",
        json={"rule_text": text},
        headers=headers,
    )


def test_owner_adds_numbered_rules(client, auth_token, community) -> None:
    """Rules are numbered in the order they are added and listed publicly."""
    first = _add_rule(client, auth_token, community.id, "Be kind")
    second = _add_rule(client, auth_token, community.id, "No spam")
    assert first.status_code == status.HTTP_201_CREATED
    assert (first.json()["rule_index"], second.json()["rule_index"]) == (1, 2)

    response = client.get(f"/api/v1/communities/{community.id}/rules")
    assert response.status_code == status.HTTP_200_OK
    assert [rule["rule_text"] for rule in response.json()] == ["Be kind", "No spam"]


def test_only_owner_manages_rules(client, other_auth_token, auth_token, community) -> None:
    """Other members cannot add, edit or delete rules."""
    rule_id = _add_rule(client, auth_token, community.id, "Be kind").json()["id"]
    url = f"/api/v1/communities/{community.id}/rules/{rule_id}"

    assert _add_rule(client, other_auth_token, community.id, "Mine").status_code == status.HTTP_403_FORBIDDEN
    assert client.put(url, json={"rule_text": "x"}, headers=other_auth_token).status_code == status.HTTP_403_FORBIDDEN
    assert client.delete(url, headers=other_auth_token).status_code == status.HTTP_403_FORBIDDEN


def test_rule_limit(client, auth_token, community) -> None:
    """An eleventh rule is refused."""
    for n in range(10):
        assert _add_rule(client, auth_token, community.id, f"Rule {n}").status_code == status.HTTP_201_CREATED

    response = _add_rule(client, auth_token, community.id, "One too many")
    assert response.status_code == status.HTTP_409_CONFLICT


def test_update_rule_keeps_position(client, auth_token, community) -> None:
    """Rewording a rule leaves its index alone."""
    _add_rule(client, auth_token, community.id, "Be kind")
    rule_id = _add_rule(client, auth_token, community.id, "No spam").json()["id"]

    response = client.put(
        f"/api/v1/communities/{community.id}/rules/{rule_id}",
        json={"rule_text": "No spam or self-promotion"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["rule_index"] == 2
    assert response.json()["rule_text"] == "No spam or self-promotion"


def test_delete_rule_renumbers_the_rest(client, auth_token, community) -> None:
    """Deleting a rule closes the gap so indexes stay 1..N."""
    ids = [_add_rule(client, auth_token, community.id, text).json()["id"] for text in ("a", "b", "c")]

    response = client.delete(f"/api/v1/communities/{community.id}/rules/{ids[0]}", headers=auth_token)
    assert response.status_code == status.HTTP_204_NO_CONTENT

    rules = client.get(f"/api/v1/communities/{community.id}/rules").json()
    assert [(rule["rule_index"], rule["rule_text"]) for rule in rules] == [(1, "b"), (2, "c")]


def test_rule_from_another_community_is_not_found(client, auth_token, community) -> None:
    """Rule ids are scoped to their community."""
    other = client.post(
        "/api/v1/communities",
        json={"name": "second_home", "description": "x"},
        headers=auth_token,
    ).json()
    rule_id = _add_rule(client, auth_token, community.id, "Be kind").json()["id"]

    response = client.delete(f"/api/v1/communities/{other['id']}/rules/{rule_id}", headers=auth_token)
    assert response.status_code == status.HTTP_404_NOT_FOUND
