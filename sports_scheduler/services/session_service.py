"""Session Lifecycle — create, update, cancel and inspect sessions.

Invariants:
    - Every mutation runs inside one store transaction spanning the eligibility
      check and the write; update/cancel lock the session row first
    - Wall-clock time is read at call time through the injected clock
    - Field constraints are re-validated here even when the HTTP layer already did
    - A cancelled session is never written to again by this service

Design Decisions:
    - Impureim sandwich: load (IO) -> decide (core, pure) -> write (IO)
"""

import logging
from collections.abc import Callable
from datetime import date, datetime, time

from sports_scheduler.core.domain_types import Caller, SessionId, SportId
from sports_scheduler.core.enforce_eligibility import (
    available_slots, can_cancel, can_edit, can_join,
)
from sports_scheduler.core.errors import ErrorContext, NotFoundError
from sports_scheduler.core.repository_protocols import SchedulerStore, SessionLike
from sports_scheduler.core.session_rules import (
    formatted_date_time,
    validate_cancellation_reason,
    validate_capacity_edit,
    validate_session_fields,
)

logger = logging.getLogger(__name__)


class SessionService:
    """Session Entity operations for one caller request."""

    def __init__(
        self, store: SchedulerStore, clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.clock = clock

    async def create_session(
        self,
        caller: Caller,
        sport_id: SportId,
        session_date: date,
        session_time: time,
        venue: str,
        players_needed: int,
    ) -> SessionLike:
        """New active session with an empty roster, created by `caller`."""
        async with self.store.transaction() as tx:
            fields = validate_session_fields(
                session_date, session_time, venue, players_needed, self.clock(),
            )
            if await tx.sports.get(sport_id) is None:
                raise NotFoundError("Sport", sport_id, ErrorContext(sport_id=sport_id))
            session = await tx.sessions.add(
                {**fields, "sport_id": sport_id, "creator_id": caller.id},
            )
        logger.info(
            f"Session {session.id} created for sport {sport_id}",
            extra={"session_id": session.id, "user_id": caller.id, "sport_id": sport_id},
        )
        return session

    async def update_session(
        self,
        caller: Caller,
        session_id: SessionId,
        sport_id: SportId,
        session_date: date,
        session_time: time,
        venue: str,
        players_needed: int,
    ) -> SessionLike:
        """Replace all editable fields at once. Creator or admin only."""
        async with self.store.transaction() as tx:
            session = await tx.sessions.get(session_id, for_update=True)
            now = self.clock()
            blocked = can_edit(session, caller, now)
            if blocked:
                self._log_refusal("update", session_id, caller, blocked.reason)
                raise blocked.to_error(session_id)

            fields = validate_session_fields(
                session_date, session_time, venue, players_needed, now,
            )
            if await tx.sports.get(sport_id) is None:
                raise NotFoundError("Sport", sport_id, ErrorContext(sport_id=sport_id))
            validate_capacity_edit(
                fields["players_needed"], await tx.roster.count_for(session_id),
            )
            session = await tx.sessions.replace_fields(
                session, {**fields, "sport_id": sport_id},
            )
        logger.info(
            f"Session {session_id} updated",
            extra={"session_id": session_id, "user_id": caller.id},
        )
        return session

    async def cancel_session(
        self, caller: Caller, session_id: SessionId, reason: str,
    ) -> SessionLike:
        """Cancel with a 10–500 character reason. Roster rows are kept."""
        async with self.store.transaction() as tx:
            session = await tx.sessions.get(session_id, for_update=True)
            blocked = can_cancel(session, caller, self.clock())
            if blocked:
                self._log_refusal("cancel", session_id, caller, blocked.reason)
                raise blocked.to_error(session_id)
            reason = validate_cancellation_reason(reason)
            session = await tx.sessions.mark_cancelled(session, reason)
        logger.info(
            f"Session {session_id} cancelled",
            extra={"session_id": session_id, "user_id": caller.id},
        )
        return session

    async def session_detail(self, caller: Caller, session_id: SessionId) -> dict:
        """Session with roster and what `caller` may do with it right now."""
        session = await self.store.sessions.get(session_id)
        if session is None:
            raise NotFoundError("Session", session_id, ErrorContext(session_id=session_id))
        players = await self.store.roster.list_users_for(session_id)
        roster_ids = {p.id for p in players}
        now = self.clock()
        has_joined = caller.id in roster_ids
        join_blocked = can_join(
            session, len(players), caller, now, already_joined=has_joined,
        )
        return {
            "session": session,
            "players": list(players),
            "has_joined": has_joined,
            "available_slots": available_slots(session, len(players)),
            "is_owner": session.creator_id == caller.id,
            "can_join": join_blocked is None,
            "join_blocked_reason": join_blocked.reason if join_blocked else None,
            "can_edit": can_edit(session, caller, now) is None,
            "can_cancel": can_cancel(session, caller, now) is None,
            "formatted_date_time": formatted_date_time(session),
        }

    @staticmethod
    def _log_refusal(operation: str, session_id: int, caller: Caller, reason) -> None:
        logger.info(
            f"Session {operation} refused: {reason.value}",
            extra={"session_id": session_id, "user_id": caller.id, "reason": reason.value},
        )
