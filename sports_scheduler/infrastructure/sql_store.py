"""SQL Store — SQLAlchemy implementation of the repository protocols.

Invariants:
    - One AsyncSession per store; every repository shares it, so a transaction()
      spans all reads and writes of one operation
    - RosterStore.add claims a slot with a single conditional UPDATE
      (status active AND roster_size < players_needed) before inserting the row;
      zero rows updated means the slot was lost and ConflictError is raised
    - A duplicate (user, session) insert hits uq_roster_user_session and becomes
      ConflictError(ALREADY_JOINED); the rollback also undoes the slot claim
    - Capacity edits re-assert roster_size <= players_needed in the UPDATE itself
    - get(for_update=True) takes a row lock (FOR UPDATE) and refreshes the identity map

Design Decisions:
    - roster_size counter on sessions: Postgres re-evaluates the UPDATE's WHERE
      after waiting on the row lock, SQLite serializes writers, so both dialects
      admit exactly one winner for the last slot
"""

import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncGenerator, Sequence

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from sports_scheduler.core.domain_types import (
    BlockReason, SessionId, SessionStatus, SportId, UserId,
)
from sports_scheduler.core.errors import (
    ConflictError, ErrorContext, ValidationError,
)
from sports_scheduler.models.roster_entry import RosterEntry
from sports_scheduler.models.session import Session as SessionModel
from sports_scheduler.models.sport import Sport
from sports_scheduler.models.user import User

logger = logging.getLogger(__name__)


_SESSION_ORDER = (SessionModel.date.asc(), SessionModel.time.asc(), SessionModel.id.asc())
_SESSION_ORDER_DESC = (
    SessionModel.date.desc(), SessionModel.time.desc(), SessionModel.id.desc(),
)


class SqlUserRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: UserId) -> User | None:
        return await self.db.get(User, user_id)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()

    async def add(self, email: str, name: str, role: str) -> User:
        user = User(email=email, name=name, role=role)
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError:
            raise ConflictError("EMAIL_TAKEN", "An account with this email already exists")
        return user

    async def count_by_role(self, role: str) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(User).where(User.role == role),
        )
        return result.scalar_one()


class SqlSportRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, sport_id: SportId) -> Sport | None:
        return await self.db.get(Sport, sport_id)

    async def find_owned(self, admin_id: UserId, name: str) -> Sport | None:
        result = await self.db.execute(
            select(Sport)
            .where(Sport.admin_id == admin_id)
            .where(Sport.name == name),
        )
        return result.scalar_one_or_none()

    async def add(self, admin_id: UserId, name: str) -> Sport:
        sport = Sport(admin_id=admin_id, name=name)
        self.db.add(sport)
        await self._flush_unique(sport.name)
        await self.db.refresh(sport)
        return sport

    async def rename(self, sport: Sport, name: str) -> Sport:
        sport.name = name
        await self._flush_unique(name)
        await self.db.refresh(sport)
        return sport

    async def _flush_unique(self, name: str) -> None:
        try:
            await self.db.flush()
        except IntegrityError:
            raise ConflictError(
                "SPORT_NAME_TAKEN", f"You already have a sport named '{name}'",
            )

    async def list_all(self) -> Sequence[Sport]:
        result = await self.db.execute(
            select(Sport).order_by(Sport.name.asc(), Sport.id.asc()),
        )
        return result.scalars().all()

    async def list_owned(self, admin_id: UserId) -> Sequence[Sport]:
        result = await self.db.execute(
            select(Sport)
            .where(Sport.admin_id == admin_id)
            .order_by(Sport.created_at.desc(), Sport.id.desc()),
        )
        return result.scalars().all()


class SqlSessionRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(
        self, session_id: SessionId, for_update: bool = False,
    ) -> SessionModel | None:
        query = select(SessionModel).where(SessionModel.id == session_id)
        if for_update:
            query = query.with_for_update().execution_options(populate_existing=True)
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def add(self, fields: dict) -> SessionModel:
        session = SessionModel(
            **fields, status=SessionStatus.ACTIVE.value, roster_size=0,
        )
        self.db.add(session)
        await self.db.flush()
        await self.db.refresh(session)
        return session

    async def replace_fields(self, session: SessionModel, fields: dict) -> SessionModel:
        """Replace all editable fields; capacity is re-checked against roster_size."""
        result = await self.db.execute(
            update(SessionModel)
            .where(SessionModel.id == session.id)
            .where(SessionModel.roster_size <= fields["players_needed"])
            .values(**fields)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            await self.db.refresh(session)
            raise ValidationError(
                "Cannot reduce players needed below current joined count "
                f"({session.roster_size})",
                "players_needed",
                ErrorContext(session_id=session.id),
            )
        await self.db.refresh(session)
        return session

    async def mark_cancelled(self, session: SessionModel, reason: str) -> SessionModel:
        result = await self.db.execute(
            update(SessionModel)
            .where(SessionModel.id == session.id)
            .where(SessionModel.status != SessionStatus.CANCELLED.value)
            .values(
                status=SessionStatus.CANCELLED.value, cancellation_reason=reason,
            )
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            raise ConflictError(
                BlockReason.SESSION_CANCELLED,
                context=ErrorContext(session_id=session.id),
            )
        await self.db.refresh(session)
        return session

    async def list_created_by(self, user_id: UserId) -> Sequence[SessionModel]:
        result = await self.db.execute(
            select(SessionModel)
            .where(SessionModel.creator_id == user_id)
            .order_by(*_SESSION_ORDER),
        )
        return result.scalars().all()

    async def list_active(
        self, sport_id: SportId | None = None,
        limit: int | None = None, offset: int = 0,
    ) -> Sequence[SessionModel]:
        query = (
            select(SessionModel)
            .where(SessionModel.status == SessionStatus.ACTIVE.value)
            .order_by(*_SESSION_ORDER)
        )
        if sport_id is not None:
            query = query.where(SessionModel.sport_id == sport_id)
        if limit is not None:
            query = query.limit(limit).offset(offset)
        result = await self.db.execute(query)
        return result.scalars().all()

    async def list_upcoming_active(
        self, today: date, limit: int | None = None,
    ) -> Sequence[SessionModel]:
        query = (
            select(SessionModel)
            .where(SessionModel.status == SessionStatus.ACTIVE.value)
            .where(SessionModel.date >= today)
            .order_by(*_SESSION_ORDER)
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.db.execute(query)
        return result.scalars().all()

    async def count_active(self, sport_id: SportId | None = None) -> int:
        query = (
            select(func.count())
            .select_from(SessionModel)
            .where(SessionModel.status == SessionStatus.ACTIVE.value)
        )
        if sport_id is not None:
            query = query.where(SessionModel.sport_id == sport_id)
        result = await self.db.execute(query)
        return result.scalar_one()

    async def count_by_sport(self, active_only: bool = False) -> dict[int, int]:
        query = select(SessionModel.sport_id, func.count()).group_by(SessionModel.sport_id)
        if active_only:
            query = query.where(SessionModel.status == SessionStatus.ACTIVE.value)
        result = await self.db.execute(query)
        return {sport_id: count for sport_id, count in result.all()}

    async def list_for_sport(self, sport_id: SportId) -> Sequence[SessionModel]:
        result = await self.db.execute(
            select(SessionModel)
            .where(SessionModel.sport_id == sport_id)
            .order_by(*_SESSION_ORDER),
        )
        return result.scalars().all()

    async def list_between(self, start: date, end: date) -> Sequence[SessionModel]:
        result = await self.db.execute(
            select(SessionModel)
            .where(SessionModel.date.between(start, end))
            .order_by(*_SESSION_ORDER_DESC),
        )
        return result.scalars().all()

    async def list_all_latest_first(self) -> Sequence[SessionModel]:
        result = await self.db.execute(
            select(SessionModel).order_by(*_SESSION_ORDER_DESC),
        )
        return result.scalars().all()

    async def count_all(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(SessionModel))
        return result.scalar_one()


class SqlRosterStore:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, session: SessionModel, user_id: UserId) -> None:
        """Claim a slot and insert the membership row, or raise ConflictError."""
        context = ErrorContext(session_id=session.id, user_id=user_id)
        result = await self.db.execute(
            update(SessionModel)
            .where(SessionModel.id == session.id)
            .where(SessionModel.status == SessionStatus.ACTIVE.value)
            .where(SessionModel.roster_size < SessionModel.players_needed)
            .values(roster_size=SessionModel.roster_size + 1)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            status = await self.db.scalar(
                select(SessionModel.status).where(SessionModel.id == session.id),
            )
            if status == SessionStatus.CANCELLED.value:
                raise ConflictError(BlockReason.SESSION_CANCELLED, context=context)
            if status != SessionStatus.ACTIVE.value:
                raise ConflictError(BlockReason.SESSION_NOT_ACTIVE, context=context)
            raise ConflictError(BlockReason.SESSION_FULL, context=context)

        self.db.add(RosterEntry(session_id=session.id, user_id=user_id))
        try:
            await self.db.flush()
        except IntegrityError:
            raise ConflictError(BlockReason.ALREADY_JOINED, context=context)
        await self.db.refresh(session, ["roster_size"])

    async def remove(self, session: SessionModel, user_id: UserId) -> bool:
        """Delete the membership row. Returns False when there was none."""
        result = await self.db.execute(
            delete(RosterEntry)
            .where(RosterEntry.session_id == session.id)
            .where(RosterEntry.user_id == user_id)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount == 0:
            return False
        await self.db.execute(
            update(SessionModel)
            .where(SessionModel.id == session.id)
            .values(roster_size=SessionModel.roster_size - 1)
            .execution_options(synchronize_session=False),
        )
        await self.db.refresh(session, ["roster_size"])
        return True

    async def count_for(self, session_id: SessionId) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(RosterEntry)
            .where(RosterEntry.session_id == session_id),
        )
        return result.scalar_one()

    async def contains(self, session_id: SessionId, user_id: UserId) -> bool:
        result = await self.db.execute(
            select(RosterEntry.id)
            .where(RosterEntry.session_id == session_id)
            .where(RosterEntry.user_id == user_id),
        )
        return result.first() is not None

    async def list_users_for(self, session_id: SessionId) -> Sequence[User]:
        result = await self.db.execute(
            select(User)
            .join(RosterEntry, RosterEntry.user_id == User.id)
            .where(RosterEntry.session_id == session_id)
            .order_by(RosterEntry.joined_at.asc(), RosterEntry.id.asc()),
        )
        return result.scalars().all()

    async def list_sessions_for(self, user_id: UserId) -> Sequence[SessionModel]:
        result = await self.db.execute(
            select(SessionModel)
            .join(RosterEntry, RosterEntry.session_id == SessionModel.id)
            .where(RosterEntry.user_id == user_id)
            .order_by(*_SESSION_ORDER),
        )
        return result.scalars().all()

    async def counts_for(self, session_ids: Sequence[int]) -> dict[int, int]:
        if not session_ids:
            return {}
        result = await self.db.execute(
            select(RosterEntry.session_id, func.count())
            .where(RosterEntry.session_id.in_(session_ids))
            .group_by(RosterEntry.session_id),
        )
        counts = {session_id: 0 for session_id in session_ids}
        counts.update({session_id: n for session_id, n in result.all()})
        return counts

    async def members_for(self, session_ids: Sequence[int]) -> dict[int, set[int]]:
        if not session_ids:
            return {}
        result = await self.db.execute(
            select(RosterEntry.session_id, RosterEntry.user_id)
            .where(RosterEntry.session_id.in_(session_ids)),
        )
        members: dict[int, set[int]] = {session_id: set() for session_id in session_ids}
        for session_id, user_id in result.all():
            members[session_id].add(user_id)
        return members


class SqlSchedulerStore:
    """Unit of work over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.users = SqlUserRepository(db)
        self.sports = SqlSportRepository(db)
        self.sessions = SqlSessionRepository(db)
        self.roster = SqlRosterStore(db)

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator["SqlSchedulerStore", None]:
        """Commit on success, roll back on any exception."""
        try:
            yield self
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
