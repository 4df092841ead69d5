"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-18

Creates all tables:
- city, attraction (read-only catalog)
- trip, trip_stop, trip_activity
- expense, shared_trip
- audit_log
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create all tables."""
    # city table
    op.create_table(
        "city",
        sa.Column("city_id", sa.Uuid(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("country", sa.Text(), nullable=False),
        sa.Column("cost_index", sa.Float(), nullable=False),
    )

    # attraction table
    op.create_table(
        "attraction",
        sa.Column("attraction_id", sa.Uuid(), primary_key=True),
        sa.Column("city_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("cost", sa.Float(), nullable=False),
        sa.ForeignKeyConstraint(["city_id"], ["city.city_id"]),
    )
    op.create_index("idx_attraction_city", "attraction", ["city_id"])

    # trip table
    op.create_table(
        "trip",
        sa.Column("trip_id", sa.Uuid(), primary_key=True),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("cover_image", sa.Text(), nullable=True),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime(), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("is_locked", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("idx_trip_owner", "trip", ["owner_id", "start_date"])

    # trip_stop table
    op.create_table(
        "trip_stop",
        sa.Column("stop_id", sa.Uuid(), primary_key=True),
        sa.Column("trip_id", sa.Uuid(), nullable=False),
        sa.Column("city_id", sa.Uuid(), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.DateTime(), nullable=False),
        sa.Column("end_date", sa.DateTime(), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["trip_id"], ["trip.trip_id"], ondelete="CASCADE"),
        sa.UniqueConstraint("trip_id", "order", name="uq_stop_trip_order"),
        sa.UniqueConstraint("trip_id", "city_id", name="uq_stop_trip_city"),
    )

    # trip_activity table
    op.create_table(
        "trip_activity",
        sa.Column("activity_id", sa.Uuid(), primary_key=True),
        sa.Column("stop_id", sa.Uuid(), nullable=False),
        sa.Column("attraction_id", sa.Uuid(), nullable=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", sa.String(32), nullable=False),
        sa.Column("cost", sa.Float(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("date", sa.DateTime(), nullable=True),
        sa.Column("time", sa.String(16), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["stop_id"], ["trip_stop.stop_id"], ondelete="CASCADE"),
    )
    op.create_index("idx_activity_stop", "trip_activity", ["stop_id"])

    # expense table
    op.create_table(
        "expense",
        sa.Column("expense_id", sa.Uuid(), primary_key=True),
        sa.Column("trip_id", sa.Uuid(), nullable=False),
        sa.Column("category", sa.String(32), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("description", sa.String(200), nullable=True),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(["trip_id"], ["trip.trip_id"], ondelete="CASCADE"),
    )
    op.create_index("idx_expense_trip", "expense", ["trip_id", "date"])

    # shared_trip table
    op.create_table(
        "shared_trip",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("trip_id", sa.Uuid(), nullable=False),
        sa.Column("share_id", sa.String(64), nullable=False),
        sa.Column("is_public", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("can_copy", sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(["trip_id"], ["trip.trip_id"], ondelete="CASCADE"),
        sa.UniqueConstraint("trip_id", name="uq_shared_trip_trip"),
        sa.UniqueConstraint("share_id", name="uq_shared_trip_share_id"),
    )

    # audit_log table
    op.create_table(
        "audit_log",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("action", sa.String(64), nullable=False),
        sa.Column("entity_type", sa.String(32), nullable=False),
        sa.Column("entity_id", sa.String(64), nullable=False),
        sa.Column("actor_id", sa.Uuid(), nullable=False),
        sa.Column("detail", sa.Text(), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False),
    )
    op.create_index("idx_audit_entity", "audit_log", ["entity_type", "entity_id"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("audit_log")
    op.drop_table("shared_trip")
    op.drop_table("expense")
    op.drop_table("trip_activity")
    op.drop_table("trip_stop")
    op.drop_table("trip")
    op.drop_table("attraction")
    op.drop_table("city")
