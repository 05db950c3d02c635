"""initial schema

Revision ID: 1a2b3c4d5e6f
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from stratizen_hub.core.points import RANK_TIERS

# revision identifiers, used by Alembic.
revision: str = "1a2b3c4d5e6f"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_resource_type = sa.Enum("assignment", "note", "past_paper", name="resource_type")


def _named() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
    ]


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)


def upgrade() -> None:
    """Create the catalog, users, resources and engagement tables."""
    op.create_table("programs", *_named(), _created_at())
    op.create_table(
        "courses",
        *_named(),
        sa.Column("program_id", sa.Integer(), sa.ForeignKey("programs.id"), nullable=False),
        _created_at(),
    )
    op.create_table(
        "years",
        *_named(),
        sa.Column("course_id", sa.Integer(), sa.ForeignKey("courses.id"), nullable=False),
        _created_at(),
    )
    op.create_table(
        "semesters",
        *_named(),
        sa.Column("year_id", sa.Integer(), sa.ForeignKey("years.id"), nullable=False),
        _created_at(),
    )
    op.create_table(
        "groups",
        *_named(),
        sa.Column("semester_id", sa.Integer(), sa.ForeignKey("semesters.id"), nullable=False),
        _created_at(),
    )
    op.create_table(
        "class_instances",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("program_id", sa.Integer(), sa.ForeignKey("programs.id"), nullable=False),
        sa.Column("course_id", sa.Integer(), sa.ForeignKey("courses.id"), nullable=False),
        sa.Column("year_id", sa.Integer(), sa.ForeignKey("years.id"), nullable=False),
        sa.Column("semester_id", sa.Integer(), sa.ForeignKey("semesters.id"), nullable=False),
        sa.Column("group_id", sa.Integer(), sa.ForeignKey("groups.id"), nullable=False),
        sa.Column("admin_id", sa.String(length=36), nullable=True),
        _created_at(),
    )
    op.create_table(
        "units",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("code", sa.String(length=32), nullable=False),
        sa.Column("lecturer", sa.Text(), nullable=False),
        sa.Column(
            "class_instance_id",
            sa.Integer(),
            sa.ForeignKey("class_instances.id"),
            nullable=False,
        ),
        _created_at(),
    )
    op.create_index("ix_units_class_instance_id", "units", ["class_instance_id"])

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column("admission_number", sa.String(length=32), nullable=False, unique=True),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("profile_picture_url", sa.Text(), nullable=True),
        sa.Column("password_hash", sa.String(length=255), nullable=True),
        sa.Column(
            "class_instance_id",
            sa.Integer(),
            sa.ForeignKey("class_instances.id"),
            nullable=True,
        ),
        sa.Column("is_admin", sa.Boolean(), nullable=False),
        sa.Column("is_super_admin", sa.Boolean(), nullable=False),
        sa.Column("points", sa.Integer(), nullable=False),
        sa.Column("rank", sa.Integer(), nullable=False),
        sa.Column("reset_code", sa.String(length=64), nullable=True),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        _created_at(),
        sa.CheckConstraint("points >= 0", name="ck_users_points_non_negative"),
    )
    op.create_table(
        "auth_sessions",
        sa.Column("id", sa.String(length=36), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(length=36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _created_at(),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_auth_sessions_user_id", "auth_sessions", ["user_id"])

    op.create_table(
        "resources",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("type", _resource_type, nullable=False),
        sa.Column("file_url", sa.Text(), nullable=True),
        sa.Column("deadline", sa.DateTime(timezone=True), nullable=True),
        sa.Column("unit_id", sa.Integer(), sa.ForeignKey("units.id"), nullable=False),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("likes", sa.Integer(), nullable=False),
        sa.Column("dislikes", sa.Integer(), nullable=False),
        _created_at(),
        sa.CheckConstraint("likes >= 0", name="ck_resources_likes_non_negative"),
        sa.CheckConstraint("dislikes >= 0", name="ck_resources_dislikes_non_negative"),
    )
    op.create_index("ix_resources_unit_id", "resources", ["unit_id"])

    op.create_table(
        "completions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("resource_id", sa.Integer(), sa.ForeignKey("resources.id"), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=False),
        _created_at(),
        sa.UniqueConstraint("user_id", "resource_id", name="uq_completions_user_resource"),
    )
    op.create_index("ix_completions_resource_id", "completions", ["resource_id"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("resource_id", sa.Integer(), sa.ForeignKey("resources.id"), nullable=False),
        _created_at(),
    )
    op.create_index("ix_comments_resource_id", "comments", ["resource_id"])

    op.create_table(
        "resource_votes",
        sa.Column("resource_id", sa.Integer(), sa.ForeignKey("resources.id"), nullable=False),
        sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("direction", sa.SmallInteger(), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("resource_id", "user_id"),
        sa.CheckConstraint("direction IN (1, -1)", name="ck_resource_votes_direction"),
    )

    ranks = op.create_table(
        "ranks",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("icon", sa.Text(), nullable=False),
        sa.Column("min_points", sa.Integer(), nullable=False),
        sa.Column("max_points", sa.Integer(), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.bulk_insert(
        ranks,
        [
            {
                "id": tier.id,
                "name": tier.name,
                "icon": tier.icon,
                "min_points": tier.min_points,
                "max_points": tier.max_points,
            }
            for tier in RANK_TIERS
        ],
    )


def downgrade() -> None:
    """Drop every table created by this revision."""
    for table in (
        "ranks",
        "resource_votes",
        "comments",
        "completions",
        "resources",
        "auth_sessions",
        "users",
        "units",
        "class_instances",
        "groups",
        "semesters",
        "years",
        "courses",
        "programs",
    ):
        op.drop_table(table)
    _resource_type.drop(op.get_bind(), checkfirst=True)
