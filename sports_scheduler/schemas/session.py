"""Session Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - SessionWrite.venue: 2-200 chars after stripping
    - SessionWrite.players_needed: 1-50
    - CancelRequest.reason: 10-500 chars after stripping
    - Responses always carry the sport name read through the sport reference
"""

from datetime import date, time

from pydantic import BaseModel, Field, field_validator

from sports_scheduler.core.enforce_eligibility import available_slots
from sports_scheduler.core.session_rules import (
    MAX_PLAYERS_NEEDED, MIN_PLAYERS_NEEDED,
    REASON_MAX_LENGTH, REASON_MIN_LENGTH,
    VENUE_MAX_LENGTH, VENUE_MIN_LENGTH,
)


class SessionWrite(BaseModel):
    """Create or full update — every editable field is supplied together."""
    sport_id: int = Field(ge=1)
    date: date
    time: time
    venue: str = Field(min_length=VENUE_MIN_LENGTH, max_length=VENUE_MAX_LENGTH)
    players_needed: int = Field(ge=MIN_PLAYERS_NEEDED, le=MAX_PLAYERS_NEEDED)

    @field_validator("venue")
    @classmethod
    def strip_venue(cls, v: str) -> str:
        v = v.strip()
        if len(v) < VENUE_MIN_LENGTH:
            raise ValueError(
                f"venue must be between {VENUE_MIN_LENGTH} and {VENUE_MAX_LENGTH} characters",
            )
        return v


class CancelRequest(BaseModel):
    reason: str = Field(min_length=REASON_MIN_LENGTH, max_length=REASON_MAX_LENGTH)

    @field_validator("reason")
    @classmethod
    def strip_reason(cls, v: str) -> str:
        v = v.strip()
        if len(v) < REASON_MIN_LENGTH:
            raise ValueError(
                f"reason must be between {REASON_MIN_LENGTH} and {REASON_MAX_LENGTH} characters",
            )
        return v


class PlayerSummary(BaseModel):
    id: int
    name: str


class SessionResponse(BaseModel):
    """Session response — public-facing session data."""
    id: int
    sport_id: int
    sport_name: str
    creator_id: int
    creator_name: str
    date: date
    time: time
    venue: str
    players_needed: int
    roster_size: int
    available_slots: int
    status: str
    cancellation_reason: str | None = None

    @classmethod
    def from_session(cls, session) -> "SessionResponse":
        return cls(
            id=session.id,
            sport_id=session.sport_id,
            sport_name=session.sport.name,
            creator_id=session.creator_id,
            creator_name=session.creator.name,
            date=session.date,
            time=session.time,
            venue=session.venue,
            players_needed=session.players_needed,
            roster_size=session.roster_size,
            available_slots=available_slots(session, session.roster_size),
            status=session.status,
            cancellation_reason=session.cancellation_reason,
        )


class SessionDetailResponse(BaseModel):
    session: SessionResponse
    players: list[PlayerSummary]
    has_joined: bool
    available_slots: int
    is_owner: bool
    can_join: bool
    join_blocked_reason: str | None = None
    can_edit: bool
    can_cancel: bool
    formatted_date_time: dict[str, str]

    @classmethod
    def from_detail(cls, detail: dict) -> "SessionDetailResponse":
        reason = detail["join_blocked_reason"]
        return cls(
            session=SessionResponse.from_session(detail["session"]),
            players=[PlayerSummary(id=p.id, name=p.name) for p in detail["players"]],
            has_joined=detail["has_joined"],
            available_slots=detail["available_slots"],
            is_owner=detail["is_owner"],
            can_join=detail["can_join"],
            join_blocked_reason=reason.value if reason else None,
            can_edit=detail["can_edit"],
            can_cancel=detail["can_cancel"],
            formatted_date_time=detail["formatted_date_time"],
        )
