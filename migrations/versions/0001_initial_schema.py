"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_initial"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now())


def _updated_at() -> sa.Column:
    return sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now())


def _gym_fk() -> sa.Column:
    return sa.Column(
        "gym_id", sa.Integer(), sa.ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False
    )


def _user_fk() -> sa.Column:
    return sa.Column(
        "user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=True),
        sa.Column("avatar", sa.String(), nullable=True),
        sa.Column("fitness_goals", sa.JSON(), nullable=True),
        sa.Column("preferred_workouts", sa.JSON(), nullable=True),
        sa.Column("budget_range", sa.String(16), nullable=True),
        _created_at(),
        _updated_at(),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "gyms",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("slug", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("address", sa.String(), nullable=False),
        sa.Column("lat", sa.Float(), nullable=True),
        sa.Column("lng", sa.Float(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("website", sa.String(), nullable=True),
        sa.Column("price_range", sa.String(16), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
        _updated_at(),
    )
    op.create_index("ix_gyms_id", "gyms", ["id"])
    op.create_index("ix_gyms_slug", "gyms", ["slug"], unique=True)
    op.create_index("ix_gyms_price_range", "gyms", ["price_range"])
    op.create_index("ix_gyms_type", "gyms", ["type"])
    op.create_index("ix_gyms_created_at", "gyms", ["created_at"])

    op.create_table(
        "gym_hours",
        sa.Column("id", sa.Integer(), primary_key=True),
        _gym_fk(),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("open_time", sa.String(5), nullable=False),
        sa.Column("close_time", sa.String(5), nullable=False),
        sa.Column("is_closed", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_gym_hours_gym_id", "gym_hours", ["gym_id"])

    op.create_table(
        "gym_amenities",
        sa.Column("id", sa.Integer(), primary_key=True),
        _gym_fk(),
        sa.Column("amenity_name", sa.String(), nullable=False),
        sa.Column("icon", sa.String(), nullable=True),
    )
    op.create_index("ix_gym_amenities_gym_id", "gym_amenities", ["gym_id"])
    op.create_index("ix_gym_amenities_amenity_name", "gym_amenities", ["amenity_name"])

    op.create_table(
        "gym_photos",
        sa.Column("id", sa.Integer(), primary_key=True),
        _gym_fk(),
        sa.Column("url", sa.String(), nullable=False),
        sa.Column("caption", sa.String(), nullable=True),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("order", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_gym_photos_gym_id", "gym_photos", ["gym_id"])

    op.create_table(
        "memberships",
        sa.Column("id", sa.Integer(), primary_key=True),
        _gym_fk(),
        sa.Column("plan_name", sa.String(), nullable=False),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("duration_months", sa.Integer(), nullable=False),
        sa.Column("features", sa.JSON(), nullable=True),
        sa.Column("is_popular", sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_memberships_gym_id", "memberships", ["gym_id"])

    op.create_table(
        "gym_classes",
        sa.Column("id", sa.Integer(), primary_key=True),
        _gym_fk(),
        sa.Column("class_name", sa.String(), nullable=False),
        sa.Column("instructor", sa.String(), nullable=True),
        sa.Column("day_of_week", sa.Integer(), nullable=False),
        sa.Column("start_time", sa.String(5), nullable=False),
        sa.Column("end_time", sa.String(5), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=True),
        sa.Column("category", sa.String(32), nullable=True),
    )
    op.create_index("ix_gym_classes_gym_id", "gym_classes", ["gym_id"])

    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer(), primary_key=True),
        _gym_fk(),
        _user_fk(),
        sa.Column("rating", sa.Float(), nullable=False),
        sa.Column("cleanliness", sa.Float(), nullable=True),
        sa.Column("equipment", sa.Float(), nullable=True),
        sa.Column("staff", sa.Float(), nullable=True),
        sa.Column("value_for_money", sa.Float(), nullable=True),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("helpful_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        _created_at(),
        _updated_at(),
    )
    op.create_index("ix_reviews_gym_id", "reviews", ["gym_id"])
    op.create_index("ix_reviews_user_id", "reviews", ["user_id"])
    op.create_index("ix_reviews_created_at", "reviews", ["created_at"])

    op.create_table(
        "review_helpful",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "review_id",
            sa.Integer(),
            sa.ForeignKey("reviews.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _user_fk(),
        _created_at(),
        sa.UniqueConstraint("review_id", "user_id", name="uq_review_helpful_user"),
    )
    op.create_index("ix_review_helpful_review_id", "review_helpful", ["review_id"])

    op.create_table(
        "review_reports",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "review_id",
            sa.Integer(),
            sa.ForeignKey("reviews.id", ondelete="CASCADE"),
            nullable=False,
        ),
        _user_fk(),
        sa.Column("reason", sa.String(), nullable=False),
        sa.Column("status", sa.String(), nullable=False, server_default="open"),
        _created_at(),
        sa.UniqueConstraint("review_id", "user_id", name="uq_review_report_user"),
    )
    op.create_index("ix_review_reports_review_id", "review_reports", ["review_id"])
    op.create_index("ix_review_reports_status", "review_reports", ["status"])

    op.create_table(
        "favorites",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        _gym_fk(),
        _created_at(),
        sa.UniqueConstraint("user_id", "gym_id", name="uq_favorites_user_gym"),
    )
    op.create_index("ix_favorites_user_id", "favorites", ["user_id"])
    op.create_index("ix_favorites_created_at", "favorites", ["created_at"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        _gym_fk(),
        sa.Column("booking_type", sa.String(32), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time_slot", sa.String(32), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        _created_at(),
        _updated_at(),
    )
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"])
    op.create_index("ix_bookings_gym_id", "bookings", ["gym_id"])
    op.create_index("ix_bookings_created_at", "bookings", ["created_at"])

    op.create_table(
        "deals",
        sa.Column("id", sa.Integer(), primary_key=True),
        _gym_fk(),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("discount", sa.Float(), nullable=False),
        sa.Column("valid_from", sa.DateTime(timezone=True), nullable=False),
        sa.Column("valid_until", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _created_at(),
    )
    op.create_index("ix_deals_gym_id", "deals", ["gym_id"])
    op.create_index("ix_deals_valid_until", "deals", ["valid_until"])

    op.create_table(
        "project_tasks",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("phase_id", sa.String(), nullable=False),
        sa.Column("task_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("test_type", sa.String(32), nullable=False),
        sa.Column("test_spec", sa.JSON(), nullable=True),
        _created_at(),
    )
    op.create_index("ix_project_tasks_phase_id", "project_tasks", ["phase_id"])
    op.create_index("ix_project_tasks_task_id", "project_tasks", ["task_id"])

    op.create_table(
        "recent_views",
        sa.Column("id", sa.Integer(), primary_key=True),
        _user_fk(),
        _gym_fk(),
        sa.Column("viewed_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "gym_id", name="uq_recent_views_user_gym"),
    )
    op.create_index("ix_recent_views_user_id", "recent_views", ["user_id"])
    op.create_index("ix_recent_views_viewed_at", "recent_views", ["viewed_at"])


def downgrade() -> None:
    for table in (
        "recent_views",
        "project_tasks",
        "deals",
        "bookings",
        "favorites",
        "review_reports",
        "review_helpful",
        "reviews",
        "gym_classes",
        "memberships",
        "gym_photos",
        "gym_amenities",
        "gym_hours",
        "gyms",
        "users",
    ):
        op.drop_table(table)
