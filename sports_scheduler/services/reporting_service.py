"""Query & Reporting — dashboards, browsing and analytics over sessions and rosters.

Invariants:
    - Read-only: never opens a write transaction
    - Derivations live in core/reporting.py; this module only gathers inputs
    - Admin-only views raise ForbiddenError for players
"""

import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta

from sports_scheduler.core.domain_types import Caller, SportId, UserRole
from sports_scheduler.core.errors import ErrorContext, ForbiddenError, ValidationError
from sports_scheduler.core.reporting import (
    build_dashboard,
    page_window,
    pagination_info,
    report_stats,
    sport_popularity,
)
from sports_scheduler.core.repository_protocols import SchedulerStore

logger = logging.getLogger(__name__)


class ReportingService:

    def __init__(
        self,
        store: SchedulerStore,
        clock: Callable[[], datetime] = datetime.now,
        dashboard_limit: int = 6,
        admin_upcoming_limit: int = 5,
        report_default_days: int = 30,
    ):
        self.store = store
        self.clock = clock
        self.dashboard_limit = dashboard_limit
        self.admin_upcoming_limit = admin_upcoming_limit
        self.report_default_days = report_default_days

    async def dashboard_for(self, caller: Caller) -> dict:
        created = await self.store.sessions.list_created_by(caller.id)
        joined = await self.store.roster.list_sessions_for(caller.id)
        active = await self.store.sessions.list_active()
        return build_dashboard(
            created, joined, active, caller.id, self.clock(), self.dashboard_limit,
        )

    async def browse(
        self,
        caller: Caller,
        sport_id: SportId | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> dict:
        """Active sessions, earliest first, flagged with whether `caller` joined."""
        limit, offset = page_window(page, page_size)
        sessions = await self.store.sessions.list_active(sport_id, limit, offset)
        total = await self.store.sessions.count_active(sport_id)
        joined_ids = {
            s.id for s in await self.store.roster.list_sessions_for(caller.id)
        }
        return {
            "sessions": [
                {"session": s, "has_joined": s.id in joined_ids} for s in sessions
            ],
            "pagination": pagination_info(page, page_size, total),
        }

    async def session_report(
        self, start: date | None = None, end: date | None = None,
    ) -> dict:
        """Sessions dated in [start, end] with sport popularity and summary stats."""
        end = end or self.clock().date()
        start = start or end - timedelta(days=self.report_default_days)
        if start > end:
            raise ValidationError("Start date must not be after end date", "start_date")

        sessions = await self.store.sessions.list_between(start, end)
        rosters = await self.store.roster.members_for([s.id for s in sessions])
        sport_names = {s.id: s.name for s in await self.store.sports.list_all()}
        return {
            "start": start,
            "end": end,
            "sessions": list(sessions),
            "sport_popularity": sport_popularity(
                sessions, start, end, rosters, sport_names,
            ),
            "stats": report_stats(sessions, rosters),
        }

    async def sport_popularity(self, start: date, end: date) -> list[dict]:
        return (await self.session_report(start, end))["sport_popularity"]

    async def admin_dashboard(self, caller: Caller) -> dict:
        _require_admin(caller)
        my_sports = await self.store.sports.list_owned(caller.id)
        counts = await self.store.sessions.count_by_sport()
        upcoming = await self.store.sessions.list_upcoming_active(
            self.clock().date(), self.admin_upcoming_limit,
        )
        return {
            "sports": [
                {"sport": sport, "session_count": counts.get(sport.id, 0)}
                for sport in my_sports
            ],
            "upcoming_sessions": list(upcoming),
            "stats": {
                "total_sports": len(my_sports),
                "total_players": await self.store.users.count_by_role(
                    UserRole.PLAYER.value,
                ),
                "total_sessions": await self.store.sessions.count_all(),
            },
        }

    async def all_sessions(self, caller: Caller) -> list:
        _require_admin(caller)
        return list(await self.store.sessions.list_all_latest_first())


def _require_admin(caller: Caller) -> None:
    if not caller.is_admin:
        raise ForbiddenError(
            "Access denied. Admin privileges required.",
            ErrorContext(user_id=caller.id),
        )
