"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates all tables for SlotSwapper: users, events, swap_requests,
plus the partial unique index that allows one PENDING request per slot pair.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    # --- events ---
    op.create_table(
        "events",
        sa.Column("event_id", sa.String(36), primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", sa.String(12), nullable=False, server_default="BUSY"),
        sa.Column("owner_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("end_time > start_time", name="check_event_end_after_start"),
        sa.CheckConstraint(
            "status IN ('BUSY', 'SWAPPABLE', 'SWAP_PENDING')", name="event_status"
        ),
    )
    op.create_index("ix_events_owner_id", "events", ["owner_id"])
    op.create_index("ix_events_status_start", "events", ["status", "start_time"])

    # --- swap_requests ---
    op.create_table(
        "swap_requests",
        sa.Column("request_id", sa.String(36), primary_key=True),
        sa.Column("requester_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("receiver_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("my_slot_id", sa.String(36), nullable=False),
        sa.Column("their_slot_id", sa.String(36), nullable=False),
        sa.Column("status", sa.String(8), nullable=False, server_default="PENDING"),
        sa.Column("version", sa.Integer, nullable=False, server_default="1"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "status IN ('PENDING', 'ACCEPTED', 'REJECTED')", name="swap_status"
        ),
    )
    op.create_index("ix_swap_requests_requester_id", "swap_requests", ["requester_id"])
    op.create_index("ix_swap_requests_receiver_id", "swap_requests", ["receiver_id"])
    op.create_index("ix_swap_requests_created_at", "swap_requests", ["created_at"])
    op.create_index(
        "uq_swap_requests_pending_pair",
        "swap_requests",
        ["my_slot_id", "their_slot_id"],
        unique=True,
        postgresql_where=sa.text("status = 'PENDING'"),
        sqlite_where=sa.text("status = 'PENDING'"),
    )


def downgrade() -> None:
    op.drop_index("uq_swap_requests_pending_pair", table_name="swap_requests")
    op.drop_table("swap_requests")
    op.drop_table("events")
    op.drop_table("users")
