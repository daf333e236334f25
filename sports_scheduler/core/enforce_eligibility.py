"""Capacity & Eligibility Engine — decides whether a caller may act on a session now.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Each check returns Blocked on violation, None when the caller is eligible
    - can_* chains its checks — first block wins, and the order is fixed:
      not found, ownership, past, cancelled/inactive, own session, already joined, full
    - available_slots is never negative
    - can_leave ignores past-ness and status: leaving only drops a commitment

Design Decisions:
    - Return values (not exceptions): callers such as the session detail view need the
      answer without aborting; services turn a Blocked into an error with to_error()
    - The verdict is advisory. RosterStore.add re-asserts capacity and uniqueness when
      it writes, and its ConflictError carries the same BlockReason
"""

from collections.abc import Collection
from dataclasses import dataclass
from datetime import datetime

from sports_scheduler.core.domain_types import BlockReason, Caller, SessionStatus
from sports_scheduler.core.errors import (
    REASON_MESSAGES,
    ErrorContext,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    SchedulerError,
)
from sports_scheduler.core.repository_protocols import SessionLike
from sports_scheduler.core.session_rules import is_past


@dataclass(frozen=True)
class Blocked:
    """A specific, user-facing reason an operation was refused."""
    reason: BlockReason
    message: str

    @classmethod
    def because(cls, reason: BlockReason) -> "Blocked":
        return cls(reason, REASON_MESSAGES[reason])

    def to_error(self, session_id: int | None = None) -> SchedulerError:
        context = ErrorContext(session_id=session_id)
        if self.reason == BlockReason.SESSION_NOT_FOUND:
            return NotFoundError("Session", session_id, context)
        if self.reason == BlockReason.NOT_OWNER:
            return ForbiddenError(self.message, context)
        return InvalidStateError(self.reason, self.message, context)


# ─── Capacity ────────────────────────────────────────────────────

def available_slots(session: SessionLike, roster_size: int) -> int:
    return max(0, session.players_needed - roster_size)


def is_full(session: SessionLike, roster_size: int) -> bool:
    return roster_size >= session.players_needed


def is_owner_or_admin(session: SessionLike, caller: Caller) -> bool:
    return caller.is_admin or session.creator_id == caller.id


# ─── Individual checks ───────────────────────────────────────────

def check_exists(session: SessionLike | None) -> Blocked | None:
    if session is None:
        return Blocked.because(BlockReason.SESSION_NOT_FOUND)
    return None


def check_owner_or_admin(session: SessionLike, caller: Caller) -> Blocked | None:
    if not is_owner_or_admin(session, caller):
        return Blocked.because(BlockReason.NOT_OWNER)
    return None


def check_not_past(session: SessionLike, now: datetime) -> Blocked | None:
    if is_past(session, now):
        return Blocked.because(BlockReason.SESSION_PAST)
    return None


def check_not_cancelled(session: SessionLike) -> Blocked | None:
    if session.status == SessionStatus.CANCELLED:
        return Blocked.because(BlockReason.SESSION_CANCELLED)
    return None


def check_active(session: SessionLike) -> Blocked | None:
    """Only ACTIVE sessions accept joins; cancelled gets its own reason."""
    if session.status != SessionStatus.ACTIVE:
        return check_not_cancelled(session) or Blocked.because(
            BlockReason.SESSION_NOT_ACTIVE,
        )
    return None


def check_not_own_session(session: SessionLike, caller: Caller) -> Blocked | None:
    if session.creator_id == caller.id:
        return Blocked.because(BlockReason.OWN_SESSION)
    return None


def check_not_joined(already_joined: bool) -> Blocked | None:
    if already_joined:
        return Blocked.because(BlockReason.ALREADY_JOINED)
    return None


def check_capacity(session: SessionLike, roster_size: int) -> Blocked | None:
    if is_full(session, roster_size):
        return Blocked.because(BlockReason.SESSION_FULL)
    return None


# ─── Operation verdicts ──────────────────────────────────────────

def can_join(
    session: SessionLike | None,
    roster_size: int,
    caller: Caller,
    now: datetime,
    *,
    already_joined: bool,
) -> Blocked | None:
    """Chain all join checks. Returns first block or None."""
    return check_exists(session) or (
        check_not_past(session, now)
        or check_active(session)
        or check_not_own_session(session, caller)
        or check_not_joined(already_joined)
        or check_capacity(session, roster_size)
    )


def can_leave(roster: Collection[int], user_id: int) -> Blocked | None:
    """Leaving only requires current membership."""
    if user_id not in roster:
        return Blocked.because(BlockReason.NOT_JOINED)
    return None


def can_edit(
    session: SessionLike | None, caller: Caller, now: datetime,
) -> Blocked | None:
    return check_exists(session) or (
        check_owner_or_admin(session, caller)
        or check_not_past(session, now)
        or check_not_cancelled(session)
    )


def can_cancel(
    session: SessionLike | None, caller: Caller, now: datetime,
) -> Blocked | None:
    return check_exists(session) or (
        check_owner_or_admin(session, caller)
        or check_not_past(session, now)
        or check_not_cancelled(session)
    )
