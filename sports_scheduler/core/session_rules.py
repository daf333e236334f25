"""Session Rules — field constraints and the past-ness predicate for Session.

Invariants:
    - is_past is the single source of truth for "this session is over"
    - is_past takes `now` as an argument; callers pass wall-clock time at call time
    - Date + time form one naive instant (single-timezone deployment)
    - validate_session_fields raises the FIRST violated constraint as ValidationError

Design Decisions:
    - Same validator for create and update: update replaces all editable fields
      together, so it must satisfy the same constraints as create
"""

from datetime import date, datetime, time

from sports_scheduler.core.errors import ValidationError
from sports_scheduler.core.repository_protocols import SessionLike


VENUE_MIN_LENGTH: int = 2
VENUE_MAX_LENGTH: int = 200
MIN_PLAYERS_NEEDED: int = 1
MAX_PLAYERS_NEEDED: int = 50
REASON_MIN_LENGTH: int = 10
REASON_MAX_LENGTH: int = 500


def session_instant(session_date: date, session_time: time) -> datetime:
    return datetime.combine(session_date, session_time.replace(tzinfo=None))


def _naive(now: datetime) -> datetime:
    """Aware datetimes are converted to local wall-clock time."""
    if now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    return now


def is_past(session: SessionLike, now: datetime) -> bool:
    """True iff the session's date+time instant is strictly before `now`."""
    return session_instant(session.date, session.time) < _naive(now)


def validate_session_fields(
    session_date: date,
    session_time: time,
    venue: str,
    players_needed: int,
    now: datetime,
) -> dict:
    """Validate editable session fields. Returns the normalized field dict."""
    if session_instant(session_date, session_time) < _naive(now):
        raise ValidationError("Session date must be in the future", "date")

    venue = (venue or "").strip()
    if not VENUE_MIN_LENGTH <= len(venue) <= VENUE_MAX_LENGTH:
        raise ValidationError(
            f"Venue must be between {VENUE_MIN_LENGTH} and "
            f"{VENUE_MAX_LENGTH} characters",
            "venue",
        )

    if isinstance(players_needed, bool) or not isinstance(players_needed, int):
        raise ValidationError("Players needed must be a whole number", "players_needed")
    if not MIN_PLAYERS_NEEDED <= players_needed <= MAX_PLAYERS_NEEDED:
        raise ValidationError(
            f"Players needed must be between {MIN_PLAYERS_NEEDED} and "
            f"{MAX_PLAYERS_NEEDED}",
            "players_needed",
        )

    return {
        "date": session_date,
        "time": session_time.replace(tzinfo=None),
        "venue": venue,
        "players_needed": players_needed,
    }


def validate_capacity_edit(players_needed: int, roster_size: int) -> None:
    """Capacity may never be edited below the current roster size."""
    if players_needed < roster_size:
        raise ValidationError(
            f"Cannot reduce players needed below current joined count ({roster_size})",
            "players_needed",
        )


def validate_cancellation_reason(reason: str) -> str:
    """Reason must be 10–500 characters once surrounding whitespace is removed."""
    reason = (reason or "").strip()
    if not REASON_MIN_LENGTH <= len(reason) <= REASON_MAX_LENGTH:
        raise ValidationError(
            f"Cancellation reason must be between {REASON_MIN_LENGTH} and "
            f"{REASON_MAX_LENGTH} characters",
            "reason",
        )
    return reason


def formatted_date_time(session: SessionLike) -> dict:
    """Display strings, e.g. {"date": "Sat Oct 24 2026", "time": "6:30 PM"}."""
    instant = session_instant(session.date, session.time)
    hour = instant.hour % 12 or 12
    meridiem = "AM" if instant.hour < 12 else "PM"
    return {
        "date": instant.strftime("%a %b %d %Y"),
        "time": f"{hour}:{instant.minute:02d} {meridiem}",
    }
