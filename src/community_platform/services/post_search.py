"""Post search: filtering, vote-based ranking and pagination.

A search runs in three steps. ``build_post_filter`` turns the optional
request fields into a conjunctive predicate. The ordering step either lets
the database sort (``newest`` and explicit column sorts) or, for ``top``,
re-ranks a recency-ordered candidate set by net vote score in memory. The
page envelope is then computed from the total match count.

Two scopes exist for ``top``:

``window``
    The candidate set is the ``max(100, limit * 3)`` most recent posts
    *starting at the requested offset*. Page 2 therefore ranks the next
    chronological batch rather than the second slice of a global ranking.
    This keeps every request bounded.

``global``
    Every matching post is scored and sorted, then the page is sliced out of
    the full ranking. Costs grow with the result set.

In both scopes ``pagination.records`` counts all matching posts. Under the
window scope this may exceed the number of posts the ranking can reach.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Literal

from sqlalchemy import or_
from sqlalchemy.orm import Session
from sqlalchemy.sql.expression import ColumnElement, UnaryExpression

from community_platform.core.settings import settings
from community_platform.db.time import as_utc
from community_platform.models.post import Post
from community_platform.models.vote import VOTE_STATE_DOWNVOTE, VOTE_STATE_UPVOTE
from community_platform.repositories.post_repo import PostRepository
from community_platform.schemas.post import PostSearchRequest, PostSummary, PostSummaryPage
from community_platform.services.pagination import PageWindow, build_pagination

logger = logging.getLogger(__name__)

__all__ = [
    "InvalidSearchQuery",
    "NEWEST_ORDER",
    "SORT_COLUMNS",
    "build_post_filter",
    "candidate_window_size",
    "rank_by_score",
    "resolve_order",
    "score_votes",
    "search_posts",
]

MIN_QUERY_LENGTH = 2
RANKING_SCOPES = ("window", "global")
RankingScope = Literal["window", "global"]

# Column sorts a client may request by name; anything else is rejected.
SORT_COLUMNS = {
    "created_at": Post.created_at,
    "updated_at": Post.updated_at,
    "title": Post.title,
}
NEWEST_ORDER: tuple[UnaryExpression, ...] = (Post.created_at.desc(), Post.id.desc())


class InvalidSearchQuery(ValueError):
    """Raised when search input is rejected before any storage access."""


def normalize_query(query: str | None) -> str | None:
    """Return the trimmed keyword, or None when no keyword filter applies.

    Raises:
        InvalidSearchQuery: If a keyword is present but shorter than 2 characters.
    """
    if query is None:
        return None
    keyword = query.strip()
    if not keyword:
        return None
    if len(keyword) < MIN_QUERY_LENGTH:
        raise InvalidSearchQuery(
            f"Search keyword must be at least {MIN_QUERY_LENGTH} characters"
        )
    return keyword


def build_post_filter(request: PostSearchRequest) -> list[ColumnElement[bool]]:
    """Translate the request's optional filters into predicate clauses.

    Soft-deleted posts are always excluded. The returned clauses are meant to
    be combined with AND.
    """
    keyword = normalize_query(request.query)

    clauses: list[ColumnElement[bool]] = [Post.deleted_at.is_(None)]
    if request.community_id is not None:
        clauses.append(Post.community_id == request.community_id)
    if request.author_ids:
        clauses.append(Post.author_member_id.in_(request.author_ids))
    if keyword is not None:
        clauses.append(
            or_(
                Post.title.icontains(keyword, autoescape=True),
                Post.body.icontains(keyword, autoescape=True),
            )
        )
    if request.min_date is not None:
        clauses.append(Post.created_at >= as_utc(request.min_date))
    if request.max_date is not None:
        clauses.append(Post.created_at <= as_utc(request.max_date))
    return clauses


def resolve_order(sort_by: str, order: str = "desc") -> tuple[UnaryExpression, ...]:
    """Map a sort name onto ORDER BY expressions with an id tie-break.

    ``top`` shares the recency order because it is the candidate order that
    the in-memory ranking starts from.
    """
    if sort_by in ("newest", "top"):
        return NEWEST_ORDER
    column = SORT_COLUMNS.get(sort_by)
    if column is None:
        raise InvalidSearchQuery(f"Unsupported sort field: {sort_by}")
    if order == "asc":
        return (column.asc(), Post.id.asc())
    if order == "desc":
        return (column.desc(), Post.id.desc())
    raise InvalidSearchQuery(f"Unsupported sort direction: {order}")


def candidate_window_size(limit: int) -> int:
    """Number of recent posts considered when ranking one page by score."""
    return max(settings.top_candidate_floor, limit * settings.top_candidate_multiplier)


def score_votes(votes: Iterable[tuple[str, str]]) -> dict[str, int]:
    """Sum ``(post_id, vote_state)`` rows into net scores.

    Upvotes count +1 and downvotes -1; withdrawn (``none``) votes are ignored.
    Posts absent from the result have an implicit score of 0.
    """
    scores: dict[str, int] = {}
    for post_id, vote_state in votes:
        if vote_state == VOTE_STATE_UPVOTE:
            scores[post_id] = scores.get(post_id, 0) + 1
        elif vote_state == VOTE_STATE_DOWNVOTE:
            scores[post_id] = scores.get(post_id, 0) - 1
    return scores


def rank_by_score(posts: Sequence[Post], scores: dict[str, int]) -> list[Post]:
    """Order posts by (score, created_at, id), all descending."""
    return sorted(
        posts,
        key=lambda post: (scores.get(post.id, 0), as_utc(post.created_at), post.id),
        reverse=True,
    )


def _rank_top(
    repo: PostRepository,
    where: Sequence[ColumnElement[bool]],
    window: PageWindow,
    scope: RankingScope,
) -> list[Post]:
    if scope == "global":
        candidates = repo.find_many(where, NEWEST_ORDER)
        scores = score_votes(repo.vote_states_for([post.id for post in candidates]))
        ranked = rank_by_score(candidates, scores)
        return ranked[window.skip : window.skip + window.limit]

    candidates = repo.find_many(
        where,
        NEWEST_ORDER,
        skip=window.skip,
        take=candidate_window_size(window.limit),
    )
    scores = score_votes(repo.vote_states_for([post.id for post in candidates]))
    return rank_by_score(candidates, scores)[: window.limit]


def to_post_summary(post: Post) -> PostSummary:
    """Convert a Post ORM instance to its search-row schema."""
    return PostSummary.model_validate(post)


def search_posts(
    db: Session,
    request: PostSearchRequest,
    *,
    ranking_scope: RankingScope | None = None,
) -> PostSummaryPage:
    """Run a post search and return one page of summaries.

    Args:
        db: Database session.
        request: Filters, sort mode and pagination values.
        ranking_scope: Overrides ``settings.top_ranking_scope`` for ``top`` sorts.

    Returns:
        The page envelope and the post summaries, in display order.

    Raises:
        InvalidSearchQuery: If the keyword, sort field or ranking scope is invalid.
    """
    where = build_post_filter(request)
    order_by = resolve_order(request.sort_by, request.order)
    scope = ranking_scope or settings.top_ranking_scope
    if scope not in RANKING_SCOPES:
        raise InvalidSearchQuery(f"Unsupported ranking scope: {scope}")
    window = PageWindow.from_request(request.page, request.limit)

    repo = PostRepository(db)
    if request.sort_by == "top":
        posts = _rank_top(repo, where, window, scope)
    else:
        posts = repo.find_many(where, order_by, skip=window.skip, take=window.limit)
    total = repo.count(where)

    logger.debug(
        "Post search sort=%s scope=%s page=%d limit=%d returned=%d records=%d",
        request.sort_by,
        scope,
        window.page,
        window.limit,
        len(posts),
        total,
    )
    return PostSummaryPage(
        pagination=build_pagination(window, total),
        data=[to_post_summary(post) for post in posts],
    )
