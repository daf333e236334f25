"""Domain Types — identities, roles, lifecycle states and block reasons.

Invariants:
    - UserId, SportId, SessionId wrap integer primary keys
    - SessionStatus is tri-state; only ACTIVE permits joins and edits
    - Every way an operation can be refused has exactly one BlockReason

Design Decisions:
    - str Enums: values double as API error codes and DB column values
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
SportId = NewType("SportId", int)
SessionId = NewType("SessionId", int)


# ─── Enums ───────────────────────────────────────────────────────

class UserRole(str, Enum):
    """Admins implicitly hold every player capability."""
    ADMIN = "admin"
    PLAYER = "player"


class SessionStatus(str, Enum):
    """Session lifecycle states — maps to DB `status` column."""
    ACTIVE = "active"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class BlockReason(str, Enum):
    """Specific reason an operation on a session was refused."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    SESSION_PAST = "SESSION_PAST"
    SESSION_CANCELLED = "SESSION_CANCELLED"
    SESSION_NOT_ACTIVE = "SESSION_NOT_ACTIVE"
    OWN_SESSION = "OWN_SESSION"
    ALREADY_JOINED = "ALREADY_JOINED"
    SESSION_FULL = "SESSION_FULL"
    NOT_JOINED = "NOT_JOINED"
    NOT_OWNER = "NOT_OWNER"


# ─── Caller Identity ─────────────────────────────────────────────

@dataclass(frozen=True)
class Caller:
    """Authenticated identity handed in by the web layer."""
    id: UserId
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN
