"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Creates the karaoke queue tables: events and their song_requests.
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
    # --- events ---
    op.create_table(
        "events",
        sa.Column("event_id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(150), nullable=False),
        sa.Column("join_code", sa.String(12), nullable=False),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("accepting_requests", sa.Boolean, nullable=True, server_default=sa.true()),
        sa.Column("song_minutes_avg", sa.Float, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_events_join_code", "events", ["join_code"])

    # --- song_requests ---
    op.create_table(
        "song_requests",
        sa.Column("request_id", sa.String(36), primary_key=True),
        sa.Column(
            "event_id", sa.String(36),
            sa.ForeignKey("events.event_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("nickname", sa.String(100), nullable=False),
        sa.Column("song_title", sa.String(255), nullable=False),
        sa.Column("key_shift", sa.Integer, nullable=False, server_default="0"),
        sa.Column(
            "status",
            sa.Enum("WAITING", "NEXT", "ON_STAGE", name="requeststatus"),
            nullable=False,
            server_default="WAITING",
        ),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.String(20), nullable=True),
    )
    op.create_index("ix_song_requests_event_id", "song_requests", ["event_id"])
    op.create_index("ix_song_requests_created_at", "song_requests", ["created_at"])


def downgrade() -> None:
    op.drop_index("ix_song_requests_created_at", table_name="song_requests")
    op.drop_index("ix_song_requests_event_id", table_name="song_requests")
    op.drop_table("song_requests")
    sa.Enum(name="requeststatus").drop(op.get_bind(), checkfirst=True)
    op.drop_index("ix_events_join_code", table_name="events")
    op.drop_table("events")
