"""comment votes, content reports and community rules

Revision ID: 8d2e5f1a9c63
Revises: 3c1f9a2b7d40
Create Date: 2026-10-17 15:40:02.771935

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "8d2e5f1a9c63"
down_revision: Union[str, Sequence[str], None] = "3c1f9a2b7d40"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the comment_vote, content_report and community_rule tables."""
    op.create_table(
        "comment_vote",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("comment_id", sa.String(length=36), nullable=False),
        sa.Column("voter_member_id", sa.String(length=36), nullable=False),
        sa.Column("vote_state", sa.String(length=8), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint(
            "vote_state IN ('upvote', 'downvote', 'none')",
            name="ck_comment_vote_state",
        ),
        sa.ForeignKeyConstraint(["comment_id"], ["comment.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["voter_member_id"], ["member_user.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("comment_id", "voter_member_id", name="uq_comment_vote_voter"),
    )
    op.create_index("ix_comment_vote_comment_id", "comment_vote", ["comment_id"])

    op.create_table(
        "content_report",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("post_id", sa.String(length=36), nullable=True),
        sa.Column("comment_id", sa.String(length=36), nullable=True),
        sa.Column("reporter_member_id", sa.String(length=36), nullable=False),
        sa.Column("report_type", sa.String(length=64), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("reviewer_admin_id", sa.String(length=36), nullable=True),
        sa.Column("resolution_notes", sa.Text(), nullable=True),
        sa.Column("resolved_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "(post_id IS NULL) <> (comment_id IS NULL)",
            name="ck_content_report_single_target",
        ),
        sa.CheckConstraint(
            "status IN ('open', 'reviewing', 'resolved', 'dismissed')",
            name="ck_content_report_status",
        ),
        sa.ForeignKeyConstraint(["post_id"], ["post.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["comment_id"], ["comment.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["reporter_member_id"], ["member_user.id"]),
        sa.ForeignKeyConstraint(["reviewer_admin_id"], ["admin_user.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_content_report_post_id", "content_report", ["post_id"])
    op.create_index("ix_content_report_comment_id", "content_report", ["comment_id"])
    op.create_index(
        "ix_content_report_status_created", "content_report", ["status", "created_at"]
    )

    op.create_table(
        "community_rule",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("community_id", sa.String(length=36), nullable=False),
        sa.Column("rule_index", sa.Integer(), nullable=False),
        sa.Column("rule_text", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["community_id"], ["community.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_community_rule_community_index", "community_rule", ["community_id", "rule_index"]
    )


def downgrade() -> None:
    """Drop the tables added in upgrade()."""
    op.drop_index("ix_community_rule_community_index", table_name="community_rule")
    op.drop_table("community_rule")
    op.drop_index("ix_content_report_status_created", table_name="content_report")
    op.drop_index("ix_content_report_comment_id", table_name="content_report")
    op.drop_index("ix_content_report_post_id", table_name="content_report")
    op.drop_table("content_report")
    op.drop_index("ix_comment_vote_comment_id", table_name="comment_vote")
    op.drop_table("comment_vote")
