"""Session ORM — one scheduled sports gathering with a fixed capacity.

Invariants:
    - status in {active, cancelled, completed}; cancelled never returns to active
    - cancellation_reason is set iff status is cancelled
    - roster_size mirrors the number of roster_entries rows and never exceeds
      players_needed (CHECK constraint); only the roster store writes it
    - sport_id is a reference: the sport name is always read through it

Design Decisions:
    - roster_size counter: lets a single conditional UPDATE claim a slot atomically
    - cascade delete for roster entries
"""

import datetime as dt

from sqlalchemy import (
    CheckConstraint, Date, DateTime, ForeignKey, Integer, String, Text, Time,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sports_scheduler.core.domain_types import SessionStatus
from sports_scheduler.db.base import Base


class Session(Base):
    """Session aggregate root — owns its roster entries."""
    __tablename__ = "sessions"
    __table_args__ = (
        CheckConstraint(
            "roster_size <= players_needed", name="ck_sessions_roster_within_capacity",
        ),
        CheckConstraint("roster_size >= 0", name="ck_sessions_roster_non_negative"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sport_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("sports.id"), nullable=False, index=True,
    )
    creator_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    venue: Mapped[str] = mapped_column(String(200), nullable=False)
    players_needed: Mapped[int] = mapped_column(Integer, nullable=False)
    roster_size: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=SessionStatus.ACTIVE.value, index=True,
    )
    cancellation_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: dt.datetime.now(dt.timezone.utc),
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: dt.datetime.now(dt.timezone.utc),
        onupdate=lambda: dt.datetime.now(dt.timezone.utc),
    )

    # Relationships
    sport: Mapped["Sport"] = relationship("Sport", lazy="selectin")
    creator: Mapped["User"] = relationship("User", lazy="selectin")
    roster_entries: Mapped[list["RosterEntry"]] = relationship(
        "RosterEntry", back_populates="session",
        cascade="all, delete-orphan", passive_deletes=True,
    )
