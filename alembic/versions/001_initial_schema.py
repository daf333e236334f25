"""Initial schema — users, sports, sessions, roster_entries.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("role", sa.String(10), nullable=False, server_default="player"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "sports",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("admin_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("admin_id", "name", name="uq_sports_admin_name"),
    )
    op.create_index("ix_sports_admin_id", "sports", ["admin_id"])

    op.create_table(
        "sessions",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("sport_id", sa.Integer, sa.ForeignKey("sports.id"), nullable=False),
        sa.Column("creator_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("time", sa.Time, nullable=False),
        sa.Column("venue", sa.String(200), nullable=False),
        sa.Column("players_needed", sa.Integer, nullable=False),
        sa.Column("roster_size", sa.Integer, nullable=False, server_default="0"),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("cancellation_reason", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "roster_size <= players_needed", name="ck_sessions_roster_within_capacity",
        ),
        sa.CheckConstraint("roster_size >= 0", name="ck_sessions_roster_non_negative"),
    )
    op.create_index("ix_sessions_sport_id", "sessions", ["sport_id"])
    op.create_index("ix_sessions_creator_id", "sessions", ["creator_id"])
    op.create_index("ix_sessions_date", "sessions", ["date"])
    op.create_index("ix_sessions_status", "sessions", ["status"])

    op.create_table(
        "roster_entries",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "user_id", sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column(
            "session_id", sa.Integer,
            sa.ForeignKey("sessions.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "session_id", name="uq_roster_user_session"),
    )
    op.create_index("ix_roster_entries_user_id", "roster_entries", ["user_id"])
    op.create_index("ix_roster_entries_session_id", "roster_entries", ["session_id"])


def downgrade() -> None:
    op.drop_table("roster_entries")
    op.drop_table("sessions")
    op.drop_table("sports")
    op.drop_table("users")
