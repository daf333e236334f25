"""Request schemas — field-level bounds enforced at the API boundary."""

import pytest
from pydantic import ValidationError

from sports_scheduler.schemas.session import CancelRequest, SessionWrite
from sports_scheduler.schemas.sport import SportWrite
from sports_scheduler.schemas.user import UserCreate


def _session_body(**overrides) -> dict:
    body = {
        "sport_id": 1,
        "date": "2030-06-10",
        "time": "18:00:00",
        "venue": "Riverside Park",
        "players_needed": 10,
    }
    body.update(overrides)
    return body


def test_session_write_strips_venue():
    assert SessionWrite(**_session_body(venue="  Court 1  ")).venue == "Court 1"


@pytest.mark.parametrize("venue", ["A", "  A  ", "x" * 201])
def test_session_write_rejects_bad_venue(venue):
    with pytest.raises(ValidationError):
        SessionWrite(**_session_body(venue=venue))


@pytest.mark.parametrize("players", [0, 51])
def test_session_write_players_bounds(players):
    with pytest.raises(ValidationError):
        SessionWrite(**_session_body(players_needed=players))


def test_session_write_requires_every_field():
    body = _session_body()
    del body["time"]
    with pytest.raises(ValidationError):
        SessionWrite(**body)


def test_cancel_request_strips_and_bounds():
    assert CancelRequest(reason="  Storm warning issued  ").reason == "Storm warning issued"
    with pytest.raises(ValidationError):
        CancelRequest(reason="   short    ")


def test_sport_write_rejects_whitespace():
    with pytest.raises(ValidationError):
        SportWrite(name="    ")


def test_user_create_defaults_to_player():
    user = UserCreate(email="new@example.com", name="New Person")
    assert user.role == "player"


def test_user_create_rejects_malformed_email():
    with pytest.raises(ValidationError):
        UserCreate(email="not-an-email", name="New Person")
