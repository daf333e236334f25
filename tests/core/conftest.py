"""Core test helpers — plain stand-ins satisfying the SessionLike protocol."""

from dataclasses import dataclass
from datetime import date, time

import pytest


@dataclass
class FakeSession:
    id: int = 1
    sport_id: int = 1
    creator_id: int = 100
    date: date = date(2030, 6, 10)
    time: time = time(18, 0)
    venue: str = "Riverside Park"
    players_needed: int = 4
    status: str = "active"
    cancellation_reason: str | None = None


@pytest.fixture
def make_session():
    """Factory: make_session(players_needed=2, status="cancelled", ...)."""
    def _make(**overrides) -> FakeSession:
        return FakeSession(**overrides)
    return _make
