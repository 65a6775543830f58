"""Vote-related endpoints for the Community Platform API."""

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.orm import Session

from community_platform.api.v1.dependencies import CurrentMemberDep, SessionDep
from community_platform.db.time import utcnow
from community_platform.models import MemberUser, Post, PostVote
from community_platform.models.vote import VOTE_STATE_NONE
from community_platform.schemas.vote import VoteCreate, VoteResponse

from .posts import get_post_or_404

router = APIRouter(prefix="/posts/{post_id}/votes", tags=["votes"])


def _reject_self_vote(post: Post, member: MemberUser) -> None:
    if post.author_member_id == member.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You cannot vote on your own post",
        )


@router.post("", response_model=VoteResponse, status_code=status.HTTP_201_CREATED)
async def cast_vote(
    post_id: str,
    vote_data: VoteCreate,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> PostVote:
    """Create or replace the caller's vote on a post."""
    post = get_post_or_404(db, post_id)
    _reject_self_vote(post, current_member)

    now = utcnow()
    vote = db.query(PostVote).filter(
        PostVote.post_id == post_id,
        PostVote.voter_member_id == current_member.id,
    ).first()
    if vote is None:
        vote = PostVote(
            post_id=post_id,
            voter_member_id=current_member.id,
            vote_state=vote_data.vote_state,
            created_at=now,
            updated_at=now,
        )
        db.add(vote)
    else:
        vote.vote_state = vote_data.vote_state
        vote.updated_at = now

    db.commit()
    db.refresh(vote)
    return vote


def _get_vote_for_update(
    db: Session,
    post_id: str,
    vote_id: str,
    member: MemberUser,
) -> PostVote:
    vote = db.get(PostVote, vote_id)
    if vote is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Vote not found")
    if vote.post_id != post_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Vote does not belong to this post",
        )
    if vote.voter_member_id != member.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Vote does not belong to you",
        )
    return vote


@router.put("/{vote_id}", response_model=VoteResponse)
async def update_vote(
    post_id: str,
    vote_id: str,
    vote_data: VoteCreate,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> PostVote:
    """Change or withdraw an existing vote."""
    vote = _get_vote_for_update(db, post_id, vote_id, current_member)
    post = get_post_or_404(db, post_id)
    _reject_self_vote(post, current_member)

    vote.vote_state = vote_data.vote_state
    vote.updated_at = utcnow()
    db.commit()
    db.refresh(vote)
    return vote


@router.get("/me")
async def get_my_vote(
    post_id: str,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> dict[str, str | None]:
    """Get the caller's current vote state on a post."""
    vote = db.query(PostVote).filter(
        PostVote.post_id == post_id,
        PostVote.voter_member_id == current_member.id,
    ).first()

    if not vote:
        return {"id": None, "vote_state": VOTE_STATE_NONE}

    return {"id": vote.id, "vote_state": vote.vote_state}
