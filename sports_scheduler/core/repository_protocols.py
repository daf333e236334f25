"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Every mutation happens inside SchedulerStore.transaction()
    - RosterStore.add re-asserts capacity and uniqueness at write time;
      the eligibility pre-check alone never guarantees them

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these protocols are never async themselves
"""

from contextlib import AbstractAsyncContextManager
from datetime import date, time
from typing import Protocol, Sequence

from sports_scheduler.core.domain_types import SessionId, SportId, UserId


class UserLike(Protocol):
    id: int
    email: str
    name: str
    role: str


class SportLike(Protocol):
    id: int
    name: str
    admin_id: int


class SessionLike(Protocol):
    """Structural contract for Session objects passed to the eligibility engine."""
    id: int
    sport_id: int
    creator_id: int
    date: date
    time: time
    venue: str
    players_needed: int
    status: str
    cancellation_reason: str | None


class UserRepository(Protocol):
    async def get(self, user_id: UserId) -> UserLike | None: ...
    async def get_by_email(self, email: str) -> UserLike | None: ...
    async def add(self, email: str, name: str, role: str) -> UserLike: ...
    async def count_by_role(self, role: str) -> int: ...


class SportRepository(Protocol):
    async def get(self, sport_id: SportId) -> SportLike | None: ...
    async def find_owned(self, admin_id: UserId, name: str) -> SportLike | None: ...
    async def add(self, admin_id: UserId, name: str) -> SportLike: ...
    async def rename(self, sport: SportLike, name: str) -> SportLike: ...
    async def list_all(self) -> Sequence[SportLike]: ...
    async def list_owned(self, admin_id: UserId) -> Sequence[SportLike]: ...


class SessionRepository(Protocol):
    async def get(
        self, session_id: SessionId, for_update: bool = False,
    ) -> SessionLike | None: ...
    async def add(self, fields: dict) -> SessionLike: ...
    async def replace_fields(self, session: SessionLike, fields: dict) -> SessionLike: ...
    async def mark_cancelled(self, session: SessionLike, reason: str) -> SessionLike: ...
    async def list_created_by(self, user_id: UserId) -> Sequence[SessionLike]: ...
    async def list_active(
        self, sport_id: SportId | None = None,
        limit: int | None = None, offset: int = 0,
    ) -> Sequence[SessionLike]: ...
    async def list_upcoming_active(
        self, today: date, limit: int | None = None,
    ) -> Sequence[SessionLike]: ...
    async def count_active(self, sport_id: SportId | None = None) -> int: ...
    async def count_by_sport(self, active_only: bool = False) -> dict[int, int]: ...
    async def list_for_sport(self, sport_id: SportId) -> Sequence[SessionLike]: ...
    async def list_between(self, start: date, end: date) -> Sequence[SessionLike]: ...
    async def list_all_latest_first(self) -> Sequence[SessionLike]: ...
    async def count_all(self) -> int: ...


class RosterStore(Protocol):
    """Join table between users and sessions, at most one row per pair."""
    async def add(self, session: SessionLike, user_id: UserId) -> None: ...
    async def remove(self, session: SessionLike, user_id: UserId) -> bool: ...
    async def count_for(self, session_id: SessionId) -> int: ...
    async def contains(self, session_id: SessionId, user_id: UserId) -> bool: ...
    async def list_users_for(self, session_id: SessionId) -> Sequence[UserLike]: ...
    async def list_sessions_for(self, user_id: UserId) -> Sequence[SessionLike]: ...
    async def counts_for(self, session_ids: Sequence[int]) -> dict[int, int]: ...
    async def members_for(self, session_ids: Sequence[int]) -> dict[int, set[int]]: ...


class SchedulerStore(Protocol):
    """Unit of work: all repositories share one transaction."""
    users: UserRepository
    sports: SportRepository
    sessions: SessionRepository
    roster: RosterStore

    def transaction(self) -> AbstractAsyncContextManager["SchedulerStore"]: ...
