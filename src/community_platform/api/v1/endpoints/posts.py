# src/community_platform/api/v1/endpoints/posts.py
"""Post-related endpoints for the Community Platform API."""

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.orm import Session

from community_platform.api.v1.dependencies import CurrentMemberDep, SessionDep
from community_platform.db.time import utcnow
from community_platform.models import Community, Post
from community_platform.repositories.post_repo import PostRepository
from community_platform.schemas.post import (
    PostCreate,
    PostResponse,
    PostSearchRequest,
    PostSummaryPage,
    PostUpdate,
)
from community_platform.services.post_search import InvalidSearchQuery, search_posts

router = APIRouter(prefix="/posts", tags=["posts"])


def get_post_or_404(db: Session, post_id: str) -> Post:
    """Return a live post or raise 404."""
    post = PostRepository(db).get_live(post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


def _get_owned_post(db: Session, post_id: str, member_id: str) -> Post:
    post = get_post_or_404(db, post_id)
    if post.author_member_id != member_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the original author can modify this post",
        )
    return post


def _blank_to_none(value: str | None) -> str | None:
    if value is None or not value.strip():
        return None
    return value


@router.patch("", response_model=PostSummaryPage)
async def search_post_summaries(
    payload: PostSearchRequest,
    db: SessionDep,
) -> PostSummaryPage:
    """Search, filter, sort and paginate live posts.

    Args:
        payload: Filters (community, authors, keyword, date range), sort mode and paging
        db: Database session

    Returns:
        Pagination metadata and one page of post summaries

    Raises:
        HTTPException: If the keyword is one character long or the sort is unsupported
    """
    try:
        return search_posts(db, payload)
    except InvalidSearchQuery as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, db: SessionDep) -> Post:
    """Get a specific post by ID."""
    return get_post_or_404(db, post_id)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> Post:
    """Create a post in an existing community.

    Raises:
        HTTPException: If the community does not exist or has been deleted
    """
    community = db.query(Community).filter(
        Community.id == post_data.community_id,
        Community.deleted_at.is_(None),
    ).first()
    if community is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Community not found",
        )

    now = utcnow()
    new_post = Post(
        community_id=community.id,
        author_member_id=current_member.id,
        author_display_name=_blank_to_none(post_data.author_display_name),
        title=post_data.title,
        body=post_data.body,
        created_at=now,
        updated_at=now,
    )
    db.add(new_post)
    db.commit()
    db.refresh(new_post)
    return new_post


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    post_data: PostUpdate,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> Post:
    """Edit the title, body or display name of the caller's own post."""
    post = _get_owned_post(db, post_id, current_member.id)

    changes = post_data.model_dump(exclude_unset=True)
    if "author_display_name" in changes:
        changes["author_display_name"] = _blank_to_none(changes["author_display_name"])
    for field in ("title", "body"):
        if changes.get(field) is None:
            changes.pop(field, None)
    for key, value in changes.items():
        setattr(post, key, value)
    post.updated_at = utcnow()

    db.commit()
    db.refresh(post)
    return post


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> None:
    """Soft-delete the caller's own post."""
    post = _get_owned_post(db, post_id, current_member.id)
    post.deleted_at = utcnow()
    db.commit()
