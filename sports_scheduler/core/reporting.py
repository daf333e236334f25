"""Reporting — pure derivations for dashboards, browsing and popularity analytics.

Invariants:
    - Read-only: inputs are sessions and roster membership snapshots, never mutated
    - "Upcoming" and "past" on dashboards are calendar-date buckets (date >= today)
    - Ordering by (date, time) ascending unless stated otherwise; sorts are stable
    - sport_popularity ties keep first-appearance order of the input sessions
"""

import math
from collections.abc import Iterable, Mapping, Sequence
from datetime import date, datetime

from sports_scheduler.core.domain_types import SessionStatus
from sports_scheduler.core.repository_protocols import SessionLike
from sports_scheduler.core.session_rules import is_past


def chronological(sessions: Iterable[SessionLike]) -> list[SessionLike]:
    return sorted(sessions, key=lambda s: (s.date, s.time))


def partition_by_date(
    sessions: Iterable[SessionLike], today: date,
) -> tuple[list[SessionLike], list[SessionLike]]:
    """Split into (upcoming, past) by calendar date."""
    upcoming, past = [], []
    for session in sessions:
        (upcoming if session.date >= today else past).append(session)
    return upcoming, past


def select_candidates(
    sessions: Iterable[SessionLike],
    user_id: int,
    joined_ids: Iterable[int],
    now: datetime,
    limit: int,
) -> list[SessionLike]:
    """Active sessions by others, not joined, not yet started — earliest first."""
    joined = set(joined_ids)
    candidates = [
        s for s in sessions
        if s.status == SessionStatus.ACTIVE
        and s.creator_id != user_id
        and s.id not in joined
        and not is_past(s, now)
    ]
    return chronological(candidates)[:limit]


def build_dashboard(
    created: Sequence[SessionLike],
    joined: Sequence[SessionLike],
    active: Sequence[SessionLike],
    user_id: int,
    now: datetime,
    limit: int,
) -> dict:
    """Partition a user's sessions and pick up to `limit` joinable candidates."""
    today = now.date()
    upcoming_created, past_created = partition_by_date(chronological(created), today)
    upcoming_joined, past_joined = partition_by_date(chronological(joined), today)
    return {
        "upcoming_created": upcoming_created,
        "past_created": past_created,
        "upcoming_joined": upcoming_joined,
        "past_joined": past_joined,
        "available": select_candidates(
            active, user_id, (s.id for s in joined), now, limit,
        ),
    }


def page_window(page: int, page_size: int) -> tuple[int, int]:
    """(limit, offset) for a 1-based page number."""
    page = max(1, page)
    return page_size, (page - 1) * page_size


def pagination_info(page: int, page_size: int, total: int) -> dict:
    page = max(1, page)
    total_pages = math.ceil(total / page_size) if page_size else 0
    return {
        "current_page": page,
        "page_size": page_size,
        "total": total,
        "total_pages": total_pages,
        "has_next": page < total_pages,
        "has_prev": page > 1,
    }


def partition_sport_sessions(
    sessions: Iterable[SessionLike], today: date,
) -> tuple[list[SessionLike], list[SessionLike]]:
    """Sport page buckets: upcoming means dated today or later AND still active."""
    upcoming, past = [], []
    for session in chronological(sessions):
        if session.date >= today and session.status == SessionStatus.ACTIVE:
            upcoming.append(session)
        else:
            past.append(session)
    return upcoming, past


def sport_popularity(
    sessions: Iterable[SessionLike],
    start: date,
    end: date,
    rosters: Mapping[int, set[int]],
    sport_names: Mapping[int, str],
) -> list[dict]:
    """Per-sport session count and distinct players for sessions dated in [start, end].

    Sorted by session_count descending; equal counts keep the order in which
    each sport first appears in `sessions`.
    """
    groups: dict[int, dict] = {}
    players: dict[int, set[int]] = {}
    for session in sessions:
        if not start <= session.date <= end:
            continue
        group = groups.get(session.sport_id)
        if group is None:
            group = groups[session.sport_id] = {
                "sport_id": session.sport_id,
                "name": sport_names.get(session.sport_id, ""),
                "session_count": 0,
                "total_players": 0,
            }
            players[session.sport_id] = set()
        group["session_count"] += 1
        players[session.sport_id] |= rosters.get(session.id, set())

    for sport_id, group in groups.items():
        group["total_players"] = len(players[sport_id])
    return sorted(groups.values(), key=lambda g: -g["session_count"])


def report_stats(
    sessions: Sequence[SessionLike], rosters: Mapping[int, set[int]],
) -> dict:
    unique_players: set[int] = set()
    for session in sessions:
        unique_players |= rosters.get(session.id, set())
    return {
        "total_sessions": len(sessions),
        "active_sessions": sum(
            1 for s in sessions if s.status == SessionStatus.ACTIVE
        ),
        "cancelled_sessions": sum(
            1 for s in sessions if s.status == SessionStatus.CANCELLED
        ),
        "total_unique_players": len(unique_players),
    }
