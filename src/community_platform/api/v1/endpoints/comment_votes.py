"""Vote endpoints for comments."""

from fastapi import APIRouter, HTTPException, status

from community_platform.api.v1.dependencies import CurrentMemberDep, SessionDep
from community_platform.db.time import utcnow
from community_platform.models import CommentVote
from community_platform.models.vote import VOTE_STATE_NONE
from community_platform.schemas.vote import CommentVoteResponse, VoteCreate

from .comments import get_comment_or_404

router = APIRouter(prefix="/comments/{comment_id}/votes", tags=["votes"])


@router.post("", response_model=CommentVoteResponse, status_code=status.HTTP_201_CREATED)
async def cast_comment_vote(
    comment_id: str,
    vote_data: VoteCreate,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> CommentVote:
    """Create or replace the caller's vote on a comment."""
    comment = get_comment_or_404(db, comment_id)
    if comment.author_member_id == current_member.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You cannot vote on your own comment",
        )

    now = utcnow()
    vote = db.query(CommentVote).filter(
        CommentVote.comment_id == comment_id,
        CommentVote.voter_member_id == current_member.id,
    ).first()
    if vote is None:
        vote = CommentVote(
            comment_id=comment_id,
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


@router.get("/me")
async def get_my_comment_vote(
    comment_id: str,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> dict[str, str | None]:
    """Get the caller's current vote state on a comment."""
    vote = db.query(CommentVote).filter(
        CommentVote.comment_id == comment_id,
        CommentVote.voter_member_id == current_member.id,
    ).first()

    if not vote:
        return {"id": None, "vote_state": VOTE_STATE_NONE}

    return {"id": vote.id, "vote_state": vote.vote_state}
