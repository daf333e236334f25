"""Session Rules — field validation, past-ness and display formatting."""

from datetime import date, datetime, time, timedelta, timezone

import pytest

from sports_scheduler.core.errors import ValidationError
from sports_scheduler.core.session_rules import (
    formatted_date_time,
    is_past,
    session_instant,
    validate_cancellation_reason,
    validate_capacity_edit,
    validate_session_fields,
)

NOW = datetime(2030, 6, 1, 12, 0)
FUTURE = date(2030, 6, 10)


def _validate(**overrides):
    args = {
        "session_date": FUTURE,
        "session_time": time(18, 30),
        "venue": "Riverside Park",
        "players_needed": 6,
        "now": NOW,
    }
    args.update(overrides)
    return validate_session_fields(**args)


# ─── is_past ─────────────────────────────────────────────────────

def test_is_past_strictly_before_now(make_session):
    session = make_session(date=date(2030, 6, 1), time=time(12, 0))
    assert not is_past(session, NOW)
    assert is_past(session, NOW + timedelta(seconds=1))


def test_is_past_accepts_aware_now(make_session):
    session = make_session(date=date(2000, 1, 1), time=time(9, 0))
    assert is_past(session, datetime.now(timezone.utc))


def test_session_instant_combines_date_and_time():
    assert session_instant(FUTURE, time(7, 5)) == datetime(2030, 6, 10, 7, 5)


# ─── validate_session_fields ─────────────────────────────────────

def test_valid_fields_are_normalized():
    fields = _validate(venue="  Court 3  ")
    assert fields == {
        "date": FUTURE,
        "time": time(18, 30),
        "venue": "Court 3",
        "players_needed": 6,
    }


def test_past_date_rejected():
    with pytest.raises(ValidationError, match="Session date must be in the future"):
        _validate(session_date=date(2030, 5, 31))


def test_earlier_today_rejected():
    with pytest.raises(ValidationError) as exc:
        _validate(session_date=NOW.date(), session_time=time(11, 59))
    assert exc.value.field == "date"


def test_past_date_reported_before_bad_venue():
    with pytest.raises(ValidationError) as exc:
        _validate(session_date=date(2020, 1, 1), venue="x")
    assert exc.value.field == "date"


@pytest.mark.parametrize("venue", ["", " ", "A", "  B  ", "x" * 201])
def test_venue_length_bounds(venue):
    with pytest.raises(ValidationError) as exc:
        _validate(venue=venue)
    assert exc.value.field == "venue"


def test_venue_exact_bounds_accepted():
    assert _validate(venue="AB")["venue"] == "AB"
    assert len(_validate(venue="x" * 200)["venue"]) == 200


@pytest.mark.parametrize("players", [0, 51, -3])
def test_players_needed_out_of_range(players):
    with pytest.raises(ValidationError, match="between 1 and 50"):
        _validate(players_needed=players)


@pytest.mark.parametrize("players", [2.5, "4", True])
def test_players_needed_must_be_whole_number(players):
    with pytest.raises(ValidationError) as exc:
        _validate(players_needed=players)
    assert exc.value.field == "players_needed"


# ─── Capacity edit & cancellation reason ─────────────────────────

def test_capacity_may_equal_roster_size():
    validate_capacity_edit(3, 3)


def test_capacity_below_roster_size_rejected():
    with pytest.raises(ValidationError) as exc:
        validate_capacity_edit(2, 3)
    assert exc.value.message == (
        "Cannot reduce players needed below current joined count (3)"
    )


def test_cancellation_reason_trimmed():
    assert validate_cancellation_reason("  Rain forecast today  ") == "Rain forecast today"


@pytest.mark.parametrize("reason", ["", "too short", "   short   ", "x" * 501])
def test_cancellation_reason_length(reason):
    with pytest.raises(ValidationError) as exc:
        validate_cancellation_reason(reason)
    assert exc.value.field == "reason"


# ─── formatted_date_time ─────────────────────────────────────────

def test_formatted_date_time_evening(make_session):
    session = make_session(date=date(2030, 6, 15), time=time(18, 30))
    assert formatted_date_time(session) == {"date": "Sat Jun 15 2030", "time": "6:30 PM"}


def test_formatted_date_time_midnight_and_noon(make_session):
    assert formatted_date_time(make_session(time=time(0, 5)))["time"] == "12:05 AM"
    assert formatted_date_time(make_session(time=time(12, 0)))["time"] == "12:00 PM"
