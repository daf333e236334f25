"""Roster Operations — join and leave sessions.

Invariants:
    - join: pre-check with can_join, then RosterStore.add re-asserts capacity and
      uniqueness at write time; a ConflictError from the write is the canonical
      "lost the race" outcome and is never retried here
    - leave: allowed for any current member, even for past or cancelled sessions
    - Roster size never exceeds players_needed
"""

import logging
from collections.abc import Callable
from datetime import datetime

from sports_scheduler.core.domain_types import BlockReason, Caller, SessionId
from sports_scheduler.core.enforce_eligibility import can_join, can_leave
from sports_scheduler.core.errors import ConflictError, ErrorContext, NotFoundError
from sports_scheduler.core.repository_protocols import SchedulerStore, SessionLike

logger = logging.getLogger(__name__)


class RosterService:
    """Join/leave for one caller request."""

    def __init__(
        self, store: SchedulerStore, clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.clock = clock

    async def join_session(self, caller: Caller, session_id: SessionId) -> SessionLike:
        async with self.store.transaction() as tx:
            session = await tx.sessions.get(session_id)
            roster_size = await tx.roster.count_for(session_id) if session else 0
            already_joined = (
                await tx.roster.contains(session_id, caller.id) if session else False
            )
            blocked = can_join(
                session, roster_size, caller, self.clock(),
                already_joined=already_joined,
            )
            if blocked:
                logger.info(
                    f"Join refused: {blocked.reason.value}",
                    extra={
                        "session_id": session_id, "user_id": caller.id,
                        "reason": blocked.reason.value,
                    },
                )
                raise blocked.to_error(session_id)

            try:
                await tx.roster.add(session, caller.id)
            except ConflictError as e:
                logger.warning(
                    f"Join lost a race: {e.code}",
                    extra={"session_id": session_id, "user_id": caller.id, "reason": e.code},
                )
                raise
        logger.info(
            f"User {caller.id} joined session {session_id}",
            extra={"session_id": session_id, "user_id": caller.id},
        )
        return session

    async def leave_session(self, caller: Caller, session_id: SessionId) -> SessionLike:
        async with self.store.transaction() as tx:
            session = await tx.sessions.get(session_id)
            if session is None:
                raise NotFoundError(
                    "Session", session_id, ErrorContext(session_id=session_id),
                )
            members = {u.id for u in await tx.roster.list_users_for(session_id)}
            blocked = can_leave(members, caller.id)
            if blocked:
                raise blocked.to_error(session_id)
            if not await tx.roster.remove(session, caller.id):
                raise ConflictError(
                    BlockReason.NOT_JOINED,
                    context=ErrorContext(session_id=session_id, user_id=caller.id),
                )
        logger.info(
            f"User {caller.id} left session {session_id}",
            extra={"session_id": session_id, "user_id": caller.id},
        )
        return session
