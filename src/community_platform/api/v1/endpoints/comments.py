"""Comment-related endpoints for the Community Platform API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import case, func, select
from sqlalchemy.orm import Session

from community_platform.api.v1.dependencies import CurrentMemberDep, SessionDep
from community_platform.db.time import as_utc, utcnow
from community_platform.models import Comment, CommentVote
from community_platform.models.vote import VOTE_STATE_DOWNVOTE, VOTE_STATE_UPVOTE
from community_platform.schemas.comment import (
    CommentCreate,
    CommentPage,
    CommentResponse,
    CommentSearchRequest,
    CommentUpdate,
)
from community_platform.services.comment_tree import soft_delete_thread
from community_platform.services.pagination import PageWindow, build_pagination

from .posts import get_post_or_404

router = APIRouter(prefix="/comments", tags=["comments"])


def get_comment_or_404(db: Session, comment_id: str) -> Comment:
    """Return a live comment or raise 404."""
    comment = db.query(Comment).filter(
        Comment.id == comment_id,
        Comment.deleted_at.is_(None),
    ).first()
    if comment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    return comment


def _get_owned_comment(db: Session, comment_id: str, member_id: str) -> Comment:
    comment = get_comment_or_404(db, comment_id)
    if comment.author_member_id != member_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You are not the author of this comment",
        )
    return comment


def _comment_scores():
    """Subquery of net vote score per voted comment; withdrawn votes count zero."""
    vote_value = case(
        (CommentVote.vote_state == VOTE_STATE_UPVOTE, 1),
        (CommentVote.vote_state == VOTE_STATE_DOWNVOTE, -1),
        else_=0,
    )
    return (
        select(CommentVote.comment_id, func.sum(vote_value).label("score"))
        .group_by(CommentVote.comment_id)
        .subquery()
    )


@router.patch("", response_model=CommentPage)
async def search_comments(payload: CommentSearchRequest, db: SessionDep) -> CommentPage:
    """List live comments with filters and pagination."""
    query = db.query(Comment).filter(Comment.deleted_at.is_(None))
    if payload.post_id is not None:
        query = query.filter(Comment.post_id == payload.post_id)
    if payload.author_id is not None:
        query = query.filter(Comment.author_member_id == payload.author_id)
    if payload.query:
        query = query.filter(Comment.body.icontains(payload.query, autoescape=True))
    if payload.created_from is not None:
        query = query.filter(Comment.created_at >= as_utc(payload.created_from))
    if payload.created_to is not None:
        query = query.filter(Comment.created_at <= as_utc(payload.created_to))

    window = PageWindow.from_request(payload.page, payload.limit)
    total = query.count()

    if payload.sort_by == "oldest":
        query = query.order_by(Comment.created_at.asc(), Comment.id.asc())
    elif payload.sort_by == "score":
        scores = _comment_scores()
        query = query.outerjoin(scores, scores.c.comment_id == Comment.id).order_by(
            func.coalesce(scores.c.score, 0).desc(),
            Comment.created_at.desc(),
            Comment.id.desc(),
        )
    else:
        query = query.order_by(Comment.created_at.desc(), Comment.id.desc())

    rows = query.offset(window.skip).limit(window.limit).all()
    return CommentPage(
        pagination=build_pagination(window, total),
        data=[CommentResponse.model_validate(row) for row in rows],
    )


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(comment_id: str, db: SessionDep) -> Comment:
    """Get a specific comment by ID."""
    return get_comment_or_404(db, comment_id)


@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
async def create_comment(
    comment_data: CommentCreate,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> Comment:
    """Reply to a post, or to another comment on the same post."""
    post = get_post_or_404(db, comment_data.post_id)

    if comment_data.parent_comment_id is not None:
        parent = get_comment_or_404(db, comment_data.parent_comment_id)
        if parent.post_id != post.id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Parent comment does not belong to the target post",
            )

    now = utcnow()
    comment = Comment(
        post_id=post.id,
        parent_comment_id=comment_data.parent_comment_id,
        author_member_id=current_member.id,
        body=comment_data.body,
        created_at=now,
        updated_at=now,
    )
    db.add(comment)
    db.commit()
    db.refresh(comment)
    return comment


@router.put("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: str,
    comment_data: CommentUpdate,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> Comment:
    """Edit the body of the caller's own comment."""
    comment = _get_owned_comment(db, comment_id, current_member.id)
    comment.body = comment_data.body
    comment.edited = True
    comment.updated_at = utcnow()
    db.commit()
    db.refresh(comment)
    return comment


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> None:
    """Soft-delete the caller's comment together with its replies."""
    comment = _get_owned_comment(db, comment_id, current_member.id)
    soft_delete_thread(db, comment)
    db.commit()
