"""Session Lifecycle — create, update, cancel and detail against a real store.

Invariants:
    - Created sessions are active with an empty roster
    - Update replaces every editable field; capacity never drops below the roster
    - Only the creator or an admin may edit/cancel, and never once the session started
    - Cancelling keeps the roster and stores the trimmed reason
"""

from datetime import date, datetime, time

import pytest

from sports_scheduler.core.domain_types import BlockReason
from sports_scheduler.core.errors import (
    ForbiddenError, InvalidStateError, NotFoundError, ValidationError,
)
from sports_scheduler.services.roster_service import RosterService
from sports_scheduler.services.session_service import SessionService
from sports_scheduler.services.sport_service import SportService

NOW = datetime(2030, 6, 1, 12, 0)
SESSION_DATE = date(2030, 6, 10)
SESSION_TIME = time(18, 0)
AFTER_SESSION = datetime(2030, 6, 11, 9, 0)


def fixed_clock(at: datetime = NOW):
    return lambda: at


def _service(store, at=None):
    return SessionService(store, fixed_clock(at or NOW))


async def _update(store, caller, session_id, sport_id, at=None, **overrides):
    fields = {
        "session_date": SESSION_DATE,
        "session_time": SESSION_TIME,
        "venue": "Riverside Park",
        "players_needed": 4,
    }
    fields.update(overrides)
    return await _service(store, at).update_session(
        caller, session_id, sport_id, **fields,
    )


# ─── create ──────────────────────────────────────────────────────

async def test_create_session_is_active_and_empty(store, creator, sport_id):
    session = await _service(store).create_session(
        creator, sport_id, SESSION_DATE, time(18, 30), "  Court 3  ", 10,
    )
    assert session.status == "active"
    assert session.roster_size == 0
    assert session.venue == "Court 3"
    assert session.creator_id == creator.id
    assert session.sport.name == "Football"
    assert await store.roster.count_for(session.id) == 0


async def test_create_rejects_past_date(store, creator, sport_id):
    with pytest.raises(ValidationError, match="Session date must be in the future"):
        await _service(store).create_session(
            creator, sport_id, date(2030, 5, 1), SESSION_TIME, "Court", 4,
        )


async def test_create_rejects_out_of_range_players(store, creator, sport_id):
    with pytest.raises(ValidationError) as exc:
        await _service(store).create_session(
            creator, sport_id, SESSION_DATE, SESSION_TIME, "Court", 51,
        )
    assert exc.value.field == "players_needed"
    assert await store.sessions.count_all() == 0


async def test_create_with_unknown_sport_is_not_found(store, creator):
    with pytest.raises(NotFoundError):
        await _service(store).create_session(
            creator, 999, SESSION_DATE, SESSION_TIME, "Court", 4,
        )


# ─── update ──────────────────────────────────────────────────────

async def test_creator_updates_all_fields(store, admin, creator, sport_id, make_session):
    session_id = await make_session()
    tennis = await SportService(store).create_sport(admin, "Tennis")

    session = await _update(
        store, creator, session_id, tennis.id,
        session_date=date(2030, 6, 12), session_time=time(9, 15),
        venue="Hall B", players_needed=8,
    )

    assert session.sport_id == tennis.id
    assert session.date == date(2030, 6, 12)
    assert session.time == time(9, 15)
    assert session.venue == "Hall B"
    assert session.players_needed == 8


async def test_admin_may_update_any_session(store, admin, sport_id, make_session):
    session_id = await make_session()
    session = await _update(store, admin, session_id, sport_id, venue="Admin Field")
    assert session.venue == "Admin Field"


async def test_other_player_cannot_update(store, player, sport_id, make_session):
    session_id = await make_session()
    with pytest.raises(ForbiddenError):
        await _update(store, player, session_id, sport_id, venue="Hijacked")


async def test_update_missing_session_is_not_found(store, creator, sport_id):
    with pytest.raises(NotFoundError):
        await _update(store, creator, 12345, sport_id)


async def test_update_after_start_is_refused(store, creator, sport_id, make_session):
    session_id = await make_session()
    with pytest.raises(InvalidStateError) as exc:
        await _update(
            store, creator, session_id, sport_id, at=AFTER_SESSION,
            session_date=date(2030, 7, 1),
        )
    assert exc.value.reason == BlockReason.SESSION_PAST


async def test_update_cannot_shrink_below_roster(
    store, creator, player, other_player, sport_id, make_session,
):
    session_id = await make_session(players_needed=4)
    roster = RosterService(store, fixed_clock())
    await roster.join_session(player, session_id)
    await roster.join_session(other_player, session_id)

    with pytest.raises(ValidationError) as exc:
        await _update(store, creator, session_id, sport_id, players_needed=1)
    assert exc.value.message == (
        "Cannot reduce players needed below current joined count (2)"
    )

    session = await _update(store, creator, session_id, sport_id, players_needed=2)
    assert session.players_needed == 2
    assert session.roster_size == 2


async def test_update_cancelled_session_is_refused(store, creator, sport_id, make_session):
    session_id = await make_session()
    await _service(store).cancel_session(creator, session_id, "Field is flooded today")
    with pytest.raises(InvalidStateError) as exc:
        await _update(store, creator, session_id, sport_id)
    assert exc.value.code == "SESSION_CANCELLED"


# ─── cancel ──────────────────────────────────────────────────────

async def test_cancel_keeps_roster_and_trims_reason(
    store, creator, player, make_session,
):
    session_id = await make_session()
    await RosterService(store, fixed_clock()).join_session(player, session_id)

    session = await _service(store).cancel_session(
        creator, session_id, "   Heavy rain expected   ",
    )

    assert session.status == "cancelled"
    assert session.cancellation_reason == "Heavy rain expected"
    assert await store.roster.contains(session_id, player.id)


async def test_cancel_reason_too_short(store, creator, make_session):
    session_id = await make_session()
    with pytest.raises(ValidationError):
        await _service(store).cancel_session(creator, session_id, "rain")
    session = await store.sessions.get(session_id)
    assert session.status == "active"


async def test_cancel_by_non_owner_forbidden(store, player, make_session):
    session_id = await make_session()
    with pytest.raises(ForbiddenError):
        await _service(store).cancel_session(player, session_id, "I do not like it")


async def test_cancel_twice_refused(store, admin, make_session):
    session_id = await make_session()
    await _service(store).cancel_session(admin, session_id, "Venue closed for repairs")
    with pytest.raises(InvalidStateError) as exc:
        await _service(store).cancel_session(admin, session_id, "Venue closed for repairs")
    assert exc.value.reason == BlockReason.SESSION_CANCELLED


async def test_cancel_past_session_refused(store, creator, make_session):
    session_id = await make_session()
    with pytest.raises(InvalidStateError) as exc:
        await _service(store, AFTER_SESSION).cancel_session(
            creator, session_id, "Too late to cancel now",
        )
    assert exc.value.reason == BlockReason.SESSION_PAST


# ─── detail ──────────────────────────────────────────────────────

async def test_detail_for_player_who_can_join(store, player, make_session):
    session_id = await make_session(players_needed=3)
    detail = await _service(store).session_detail(player, session_id)

    assert detail["can_join"] is True
    assert detail["join_blocked_reason"] is None
    assert detail["has_joined"] is False
    assert detail["available_slots"] == 3
    assert detail["is_owner"] is False
    assert detail["can_edit"] is False
    assert detail["can_cancel"] is False
    assert detail["formatted_date_time"] == {"date": "Mon Jun 10 2030", "time": "6:00 PM"}


async def test_detail_for_creator(store, creator, player, make_session):
    session_id = await make_session(players_needed=3)
    await RosterService(store, fixed_clock()).join_session(player, session_id)

    detail = await _service(store).session_detail(creator, session_id)

    assert [p.id for p in detail["players"]] == [player.id]
    assert detail["is_owner"] is True
    assert detail["can_edit"] is True
    assert detail["can_join"] is False
    assert detail["join_blocked_reason"] == BlockReason.OWN_SESSION
    assert detail["available_slots"] == 2


async def test_detail_missing_session(store, player):
    with pytest.raises(NotFoundError):
        await _service(store).session_detail(player, 404)
