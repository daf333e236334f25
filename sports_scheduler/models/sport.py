"""Sport ORM — named category owned by exactly one admin.

Invariants:
    - (admin_id, name) is unique; name is stored trimmed
    - No deletion path: sports are only created and renamed
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sports_scheduler.db.base import Base


class Sport(Base):
    __tablename__ = "sports"
    __table_args__ = (
        UniqueConstraint("admin_id", "name", name="uq_sports_admin_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    admin_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    admin: Mapped["User"] = relationship("User", lazy="selectin")
