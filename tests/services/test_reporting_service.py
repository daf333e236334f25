"""Query & Reporting — dashboards, browse pagination, reports and admin views."""

from datetime import date, datetime, time

import pytest

from sports_scheduler.core.errors import ForbiddenError, ValidationError
from sports_scheduler.services.reporting_service import ReportingService
from sports_scheduler.services.roster_service import RosterService
from sports_scheduler.services.session_service import SessionService
from sports_scheduler.services.sport_service import SportService

NOW = datetime(2030, 6, 1, 12, 0)


def _reporting(store, at: datetime = NOW, **kwargs) -> ReportingService:
    return ReportingService(store, lambda: at, **kwargs)


async def test_dashboard_groups_created_joined_and_available(
    store, creator, player, make_session,
):
    mine = await make_session(by=player)
    joined = await make_session(session_date=date(2030, 6, 12))
    open_id = await make_session(session_date=date(2030, 6, 11))
    await RosterService(store, lambda: NOW).join_session(player, joined)

    dashboard = await _reporting(store).dashboard_for(player)

    assert [s.id for s in dashboard["upcoming_created"]] == [mine]
    assert [s.id for s in dashboard["upcoming_joined"]] == [joined]
    assert [s.id for s in dashboard["available"]] == [open_id]
    assert dashboard["past_created"] == []
    assert dashboard["past_joined"] == []


async def test_dashboard_moves_sessions_to_past_after_their_date(
    store, player, make_session,
):
    mine = await make_session(by=player)
    later = datetime(2030, 6, 11, 8, 0)

    dashboard = await _reporting(store, later).dashboard_for(player)

    assert [s.id for s in dashboard["past_created"]] == [mine]
    assert dashboard["upcoming_created"] == []


async def test_dashboard_available_is_capped(store, player, make_session):
    for day in range(2, 12):
        await make_session(session_date=date(2030, 6, day))

    dashboard = await _reporting(store, dashboard_limit=6).dashboard_for(player)

    dates = [s.date for s in dashboard["available"]]
    assert len(dates) == 6
    assert dates == sorted(dates)
    assert dates[0] == date(2030, 6, 2)


async def test_browse_paginates_active_sessions(store, creator, player, make_session):
    ids = [await make_session(session_date=date(2030, 6, day)) for day in range(2, 5)]
    cancelled = await make_session(session_date=date(2030, 6, 5))
    await SessionService(store, lambda: NOW).cancel_session(
        creator, cancelled, "Clashes with a tournament",
    )
    await RosterService(store, lambda: NOW).join_session(player, ids[2])

    first = await _reporting(store).browse(player, page=1, page_size=2)
    second = await _reporting(store).browse(player, page=2, page_size=2)

    assert [e["session"].id for e in first["sessions"]] == ids[:2]
    assert first["pagination"]["total"] == 3
    assert first["pagination"]["total_pages"] == 2
    assert first["pagination"]["has_next"] is True
    assert [(e["session"].id, e["has_joined"]) for e in second["sessions"]] == [
        (ids[2], True),
    ]
    assert second["pagination"]["has_prev"] is True


async def test_browse_filters_by_sport(store, admin, player, sport_id, make_session):
    tennis = await SportService(store).create_sport(admin, "Tennis")
    await make_session()
    tennis_session = await make_session(sport=tennis.id)

    result = await _reporting(store).browse(player, sport_id=tennis.id)

    assert [e["session"].id for e in result["sessions"]] == [tennis_session]


async def test_report_popularity_and_stats(
    store, admin, creator, player, other_player, sport_id, make_session,
):
    tennis = await SportService(store).create_sport(admin, "Tennis")
    football_a = await make_session(session_date=date(2030, 6, 3))
    football_b = await make_session(session_date=date(2030, 6, 4))
    tennis_a = await make_session(sport=tennis.id, session_date=date(2030, 6, 5))
    outside = await make_session(session_date=date(2030, 7, 15))
    roster = RosterService(store, lambda: NOW)
    await roster.join_session(player, football_a)
    await roster.join_session(player, football_b)
    await roster.join_session(other_player, football_b)
    await roster.join_session(other_player, outside)
    await SessionService(store, lambda: NOW).cancel_session(
        creator, tennis_a, "Nets are being replaced",
    )

    report = await _reporting(store).session_report(date(2030, 6, 1), date(2030, 6, 30))

    assert {s.id for s in report["sessions"]} == {football_a, football_b, tennis_a}
    assert report["sport_popularity"] == [
        {"sport_id": sport_id, "name": "Football", "session_count": 2, "total_players": 2},
        {"sport_id": tennis.id, "name": "Tennis", "session_count": 1, "total_players": 0},
    ]
    assert report["stats"] == {
        "total_sessions": 3,
        "active_sessions": 2,
        "cancelled_sessions": 1,
        "total_unique_players": 2,
    }


async def test_report_defaults_to_last_thirty_days(store):
    report = await _reporting(store, datetime(2030, 6, 30, 9, 0)).session_report()
    assert report["end"] == date(2030, 6, 30)
    assert report["start"] == date(2030, 5, 31)


async def test_report_rejects_inverted_range(store):
    with pytest.raises(ValidationError):
        await _reporting(store).session_report(date(2030, 6, 2), date(2030, 6, 1))


async def test_admin_dashboard(store, admin, player, sport_id, make_session):
    await make_session(session_date=date(2030, 6, 2))
    await make_session(session_date=date(2030, 6, 3), session_time=time(7, 0))

    dashboard = await _reporting(store, admin_upcoming_limit=1).admin_dashboard(admin)

    assert [(e["sport"].id, e["session_count"]) for e in dashboard["sports"]] == [
        (sport_id, 2),
    ]
    assert [s.date for s in dashboard["upcoming_sessions"]] == [date(2030, 6, 2)]
    assert dashboard["stats"] == {
        "total_sports": 1,
        "total_players": 2,
        "total_sessions": 2,
    }


async def test_admin_views_forbidden_for_players(store, player):
    with pytest.raises(ForbiddenError):
        await _reporting(store).admin_dashboard(player)
    with pytest.raises(ForbiddenError):
        await _reporting(store).all_sessions(player)


async def test_all_sessions_latest_first(store, admin, make_session):
    early = await make_session(session_date=date(2030, 6, 2))
    late = await make_session(session_date=date(2030, 6, 9))
    sessions = await _reporting(store).all_sessions(admin)
    assert [s.id for s in sessions] == [late, early]
