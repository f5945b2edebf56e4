"""Create users, content, engagement, report and audit tables.

Revision ID: 20261017_create_moderation_tables
Revises:
Create Date: 2026-10-17
"""
from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261017_create_moderation_tables"
down_revision = None
branch_labels = None
depends_on = None


def _uuid() -> postgresql.UUID:
    return postgresql.UUID(as_uuid=True)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("username", sa.String(length=150), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("active", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("role", sa.String(length=32), server_default="user", nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "posts",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("author_id", _uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("content", sa.String(length=1000), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_posts_author_id", "posts", ["author_id"])

    op.create_table(
        "comments",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("post_id", _uuid(), sa.ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("author_id", _uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_comments_post_id", "comments", ["post_id"])
    op.create_index("ix_comments_author_id", "comments", ["author_id"])

    op.create_table(
        "reactions",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("type", sa.String(length=16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("user_id", _uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("post_id", _uuid(), sa.ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
        sa.UniqueConstraint("user_id", "post_id", name="uq_reactions_user_post"),
    )
    op.create_index("ix_reactions_user_id", "reactions", ["user_id"])
    op.create_index("ix_reactions_post_id", "reactions", ["post_id"])

    op.create_table(
        "follows",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("follow_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("follower_id", _uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("followed_id", _uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.UniqueConstraint("follower_id", "followed_id", name="uq_follows_follower_followed"),
    )
    op.create_index("ix_follows_follower_id", "follows", ["follower_id"])
    op.create_index("ix_follows_followed_id", "follows", ["followed_id"])

    op.create_table(
        "reports",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("reason", sa.String(length=500), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=16), nullable=False),
        sa.Column("report_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("review_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reporter_id", _uuid(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("post_id", _uuid(), sa.ForeignKey("posts.id", ondelete="SET NULL"), nullable=True),
    )
    op.create_index("ix_reports_status", "reports", ["status"])
    op.create_index("ix_reports_reporter_id", "reports", ["reporter_id"])
    op.create_index("ix_reports_post_id", "reports", ["post_id"])
    op.create_index("ix_reports_status_report_date", "reports", ["status", "report_date"])
    op.create_index(
        "uq_reports_reporter_post",
        "reports",
        ["reporter_id", "post_id"],
        unique=True,
        postgresql_where=sa.text("post_id IS NOT NULL"),
        sqlite_where=sa.text("post_id IS NOT NULL"),
    )

    op.create_table(
        "admin_actions",
        sa.Column("id", _uuid(), primary_key=True),
        sa.Column("action_type", sa.String(length=32), nullable=False),
        sa.Column("description", sa.String(length=500), nullable=False),
        sa.Column("reason", sa.String(length=1000), nullable=True),
        sa.Column("action_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("target_kind", sa.String(length=16), nullable=False),
        sa.Column("target_id", _uuid(), nullable=False),
        sa.Column("admin_id", _uuid(), nullable=False),
        sa.Column("admin_username", sa.String(length=150), nullable=False),
        sa.Column("admin_first_name", sa.String(length=100), nullable=True),
        sa.Column("admin_last_name", sa.String(length=100), nullable=True),
        sa.Column("affected_user_id", _uuid(), nullable=True),
        sa.Column("affected_username", sa.String(length=150), nullable=True),
        sa.Column("affected_first_name", sa.String(length=100), nullable=True),
        sa.Column("affected_last_name", sa.String(length=100), nullable=True),
    )
    op.create_index("ix_admin_actions_admin_id", "admin_actions", ["admin_id"])
    op.create_index("ix_admin_actions_affected_user_id", "admin_actions", ["affected_user_id"])
    op.create_index("ix_admin_actions_action_type", "admin_actions", ["action_type"])
    op.create_index("ix_admin_actions_action_date", "admin_actions", ["action_date"])
    op.create_index("ix_admin_actions_target", "admin_actions", ["target_kind", "target_id"])


def downgrade() -> None:
    op.drop_table("admin_actions")
    op.drop_index("uq_reports_reporter_post", table_name="reports")
    op.drop_table("reports")
    op.drop_table("follows")
    op.drop_table("reactions")
    op.drop_table("comments")
    op.drop_table("posts")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
