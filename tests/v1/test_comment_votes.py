# mypy: ignore-errors
# tests/v1/test_comment_votes.py
"""Tests for comment voting and the score ordering of comment search."""

from datetime import timedelta

from fastapi import status

from community_platform.db.time import utcnow
from community_platform.models import Comment, CommentVote


def _comment(db_session, post, author, body, *, minutes=0):
    created_at = utcnow() + timedelta(minutes=minutes)
    comment = Comment(
        post_id=post.id,
        author_member_id=author.id,
        body=body,
        created_at=created_at,
        updated_at=created_at,
    )
    db_session.add(comment)
    db_session.flush()
    return comment


def _votes(db_session, make_member, comment, *states):
    for state in states:
        voter = make_member(None)
        db_session.add(CommentVote(comment_id=comment.id, voter_member_id=voter.id, vote_state=state))
    db_session.flush()


def test_vote_on_comment(client, other_auth_token, other_member, test_post, member, db_session) -> None:
    """A member can upvote someone else's comment."""
    comment = _comment(db_session, test_post, member, "well said")

    response = client.post(
        f"/api/v1/comments/{comment.id}/votes",
        json={"vote_state": "upvote"},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()
    assert data["comment_id"] == comment.id
    assert data["voter_member_id"] == other_member.id
    assert data["vote_state"] == "upvote"


def test_comment_vote_is_upserted(client, other_auth_token, test_post, member, db_session) -> None:
    """Voting again replaces the caller's single row for that comment."""
    comment = _comment(db_session, test_post, member, "hmm")
    url = f"/api/v1/comments/{comment.id}/votes"

    first = client.post(url, json={"vote_state": "upvote"}, headers=other_auth_token).json()
    second = client.post(url, json={"vote_state": "downvote"}, headers=other_auth_token).json()

    assert second["id"] == first["id"]
    assert db_session.query(CommentVote).filter(CommentVote.comment_id == comment.id).count() == 1
    mine = client.get(f"{url}/me", headers=other_auth_token).json()
    assert mine == {"id": first["id"], "vote_state": "downvote"}


def test_vote_on_own_comment_is_forbidden(client, auth_token, test_post, member, db_session) -> None:
    """Authors cannot vote on their own comments."""
    comment = _comment(db_session, test_post, member, "mine")
    response = client.post(
        f"/api/v1/comments/{comment.id}/votes",
        json={"vote_state": "upvote"},
        headers=auth_token,
    )
    assert response.status_code == status.HTTP_403_FORBIDDEN


def test_vote_on_missing_comment(client, other_auth_token) -> None:
    """Votes need a live comment."""
    response = client.post(
        "/api/v1/comments/missing/votes",
        json={"vote_state": "upvote"},
        headers=other_auth_token,
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_search_comments_by_score(client, test_post, member, make_member, db_session) -> None:
    """Score ordering uses net votes, then recency; withdrawn votes count zero."""
    liked = _comment(db_session, test_post, member, "liked", minutes=1)
    unvoted_old = _comment(db_session, test_post, member, "unvoted old", minutes=2)
    unvoted_new = _comment(db_session, test_post, member, "unvoted new", minutes=3)
    disliked = _comment(db_session, test_post, member, "disliked", minutes=4)
    withdrawn = _comment(db_session, test_post, member, "withdrawn", minutes=0)
    _votes(db_session, make_member, liked, "upvote", "upvote", "downvote")
    _votes(db_session, make_member, disliked, "downvote")
    _votes(db_session, make_member, withdrawn, "none")

    response = client.patch(
        "/api/v1/comments",
        json={"post_id": test_post.id, "sort_by": "score"},
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert [row["id"] for row in data["data"]] == [
        liked.id, unvoted_new.id, unvoted_old.id, withdrawn.id, disliked.id,
    ]
    assert data["pagination"]["records"] == 5
