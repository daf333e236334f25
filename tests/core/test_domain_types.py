"""Domain Types — enum values double as DB values and API codes."""

from sports_scheduler.core.domain_types import (
    BlockReason, SessionId, SessionStatus, SportId, UserId, UserRole,
)


def test_identity_types_wrap_int():
    assert UserId(3) == 3
    assert SportId(4) == 4
    assert SessionId(5) == 5


def test_session_status_has_three_states():
    assert {s.value for s in SessionStatus} == {"active", "cancelled", "completed"}


def test_roles():
    assert {r.value for r in UserRole} == {"admin", "player"}


def test_status_compares_equal_to_column_value():
    assert SessionStatus.ACTIVE == "active"


def test_block_reason_values_are_their_names():
    for reason in BlockReason:
        assert reason.value == reason.name
