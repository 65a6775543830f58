"""Operations over threaded comment trees."""
from __future__ import annotations

from sqlalchemy.orm import Session

from community_platform.db.time import utcnow
from community_platform.models import Comment


def live_descendant_ids(db: Session, root_id: str) -> list[str]:
    """Return ids of every live comment below ``root_id``, breadth first."""
    found: list[str] = []
    frontier = [root_id]
    while frontier:
        children = db.query(Comment.id).filter(
            Comment.parent_comment_id.in_(frontier),
            Comment.deleted_at.is_(None),
        ).all()
        frontier = [child_id for (child_id,) in children]
        found.extend(frontier)
    return found


def soft_delete_thread(db: Session, comment: Comment) -> int:
    """Stamp ``deleted_at`` on a comment and all of its live replies.

    Returns:
        Number of comments marked deleted. The caller commits.
    """
    ids = [comment.id, *live_descendant_ids(db, comment.id)]
    now = utcnow()
    db.query(Comment).filter(Comment.id.in_(ids)).update(
        {Comment.deleted_at: now},
        synchronize_session="fetch",
    )
    return len(ids)
