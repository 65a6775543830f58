# src/community_platform/api/v1/endpoints/communities.py
"""Community-related endpoints for the Community Platform API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from community_platform.api.v1.dependencies import CurrentMemberDep, SessionDep
from community_platform.db.time import utcnow
from community_platform.models import Community, CommunityMembership, CommunityRule
from community_platform.models.community import MAX_COMMUNITY_RULES
from community_platform.schemas.community import (
    CommunityCreate,
    CommunityPage,
    CommunityResponse,
    CommunityRuleResponse,
    CommunityRuleWrite,
    CommunitySearchRequest,
    MembershipResponse,
)
from community_platform.services.pagination import PageWindow, build_pagination

router = APIRouter(prefix="/communities", tags=["communities"])


def get_community_or_404(db: Session, community_id: str) -> Community:
    """Return a live community or raise 404."""
    community = db.query(Community).filter(
        Community.id == community_id,
        Community.deleted_at.is_(None),
    ).first()
    if not community:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Community not found"
        )
    return community


@router.patch("", response_model=CommunityPage)
async def search_communities(payload: CommunitySearchRequest, db: SessionDep) -> CommunityPage:
    """Search live communities by name and owner, newest first."""
    query = db.query(Community).filter(Community.deleted_at.is_(None))
    if payload.name:
        query = query.filter(Community.name.icontains(payload.name, autoescape=True))
    if payload.owner_id is not None:
        query = query.filter(Community.owner_member_id == payload.owner_id)

    window = PageWindow.from_request(payload.page, payload.limit)
    total = query.count()
    rows = (
        query.order_by(Community.created_at.desc(), Community.id.desc())
        .offset(window.skip)
        .limit(window.limit)
        .all()
    )
    return CommunityPage(
        pagination=build_pagination(window, total),
        data=[CommunityResponse.model_validate(row) for row in rows],
    )


@router.get("/{community_id}", response_model=CommunityResponse)
async def get_community(community_id: str, db: SessionDep) -> Community:
    """Get a specific community by ID."""
    return get_community_or_404(db, community_id)


@router.post("", response_model=CommunityResponse, status_code=status.HTTP_201_CREATED)
async def create_community(
    community_data: CommunityCreate,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> Community:
    """Create a new community owned by the caller."""
    # Names are unique regardless of case among live communities.
    existing = db.query(Community).filter(
        func.lower(Community.name) == community_data.name.lower(),
        Community.deleted_at.is_(None),
    ).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Community name already exists"
        )

    now = utcnow()
    new_community = Community(
        name=community_data.name,
        description=community_data.description,
        owner_member_id=current_member.id,
        created_at=now,
        updated_at=now,
    )
    db.add(new_community)
    db.flush()
    db.add(CommunityMembership(community_id=new_community.id, member_id=current_member.id))
    db.commit()
    db.refresh(new_community)
    return new_community


@router.post(
    "/{community_id}/memberships",
    response_model=MembershipResponse,
    status_code=status.HTTP_201_CREATED,
)
async def join_community(
    community_id: str,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> CommunityMembership:
    """Join a community."""
    get_community_or_404(db, community_id)

    existing_membership = db.query(CommunityMembership).filter(
        CommunityMembership.community_id == community_id,
        CommunityMembership.member_id == current_member.id,
    ).first()
    if existing_membership:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Already a member of this community"
        )

    membership = CommunityMembership(community_id=community_id, member_id=current_member.id)
    db.add(membership)
    db.commit()
    db.refresh(membership)
    return membership


@router.delete("/{community_id}/memberships", status_code=status.HTTP_204_NO_CONTENT)
async def leave_community(
    community_id: str,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> None:
    """Leave a community."""
    membership = db.query(CommunityMembership).filter(
        CommunityMembership.community_id == community_id,
        CommunityMembership.member_id == current_member.id,
    ).first()
    if not membership:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Not a member of this community"
        )

    db.delete(membership)
    db.commit()


def _get_owned_community(db: Session, community_id: str, member_id: str) -> Community:
    community = get_community_or_404(db, community_id)
    if community.owner_member_id != member_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the community owner can manage rules",
        )
    return community


def _get_rule_or_404(db: Session, community_id: str, rule_id: str) -> CommunityRule:
    rule = db.query(CommunityRule).filter(
        CommunityRule.id == rule_id,
        CommunityRule.community_id == community_id,
    ).first()
    if rule is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Rule not found")
    return rule


def _ordered_rules(db: Session, community_id: str) -> list[CommunityRule]:
    return (
        db.query(CommunityRule)
        .filter(CommunityRule.community_id == community_id)
        .order_by(CommunityRule.rule_index.asc(), CommunityRule.created_at.asc())
        .all()
    )


@router.get("/{community_id}/rules", response_model=list[CommunityRuleResponse])
async def list_rules(community_id: str, db: SessionDep) -> list[CommunityRule]:
    """List a community's rules in display order."""
    get_community_or_404(db, community_id)
    return _ordered_rules(db, community_id)


@router.post(
    "/{community_id}/rules",
    response_model=CommunityRuleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_rule(
    community_id: str,
    rule_data: CommunityRuleWrite,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> CommunityRule:
    """Append a rule; the owner may keep up to ten."""
    _get_owned_community(db, community_id, current_member.id)
    existing = db.query(CommunityRule).filter(CommunityRule.community_id == community_id).count()
    if existing >= MAX_COMMUNITY_RULES:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"A community can have at most {MAX_COMMUNITY_RULES} rules",
        )

    now = utcnow()
    rule = CommunityRule(
        community_id=community_id,
        rule_index=existing + 1,
        rule_text=rule_data.rule_text,
        created_at=now,
        updated_at=now,
    )
    db.add(rule)
    db.commit()
    db.refresh(rule)
    return rule


@router.put("/{community_id}/rules/{rule_id}", response_model=CommunityRuleResponse)
async def update_rule(
    community_id: str,
    rule_id: str,
    rule_data: CommunityRuleWrite,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> CommunityRule:
    """Reword a rule without moving it."""
    _get_owned_community(db, community_id, current_member.id)
    rule = _get_rule_or_404(db, community_id, rule_id)
    rule.rule_text = rule_data.rule_text
    rule.updated_at = utcnow()
    db.commit()
    db.refresh(rule)
    return rule


@router.delete("/{community_id}/rules/{rule_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rule(
    community_id: str,
    rule_id: str,
    current_member: CurrentMemberDep,
    db: SessionDep,
) -> None:
    """Remove a rule and close the gap in the numbering."""
    _get_owned_community(db, community_id, current_member.id)
    rule = _get_rule_or_404(db, community_id, rule_id)
    db.delete(rule)
    db.flush()

    for position, remaining in enumerate(_ordered_rules(db, community_id), start=1):
        remaining.rule_index = position
    db.commit()
