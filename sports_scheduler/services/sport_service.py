"""Sport Catalog — admins define sports; everyone picks from them.

Invariants:
    - Only admins create sports; only the owning admin renames one
    - Names are trimmed, 2–50 characters, unique per owning admin
      (checked here, and enforced by uq_sports_admin_name on write)
    - No deletion path
"""

import logging
from collections.abc import Callable
from datetime import datetime

from sports_scheduler.core.domain_types import Caller, SportId
from sports_scheduler.core.errors import (
    ConflictError, ErrorContext, ForbiddenError, NotFoundError,
)
from sports_scheduler.core.reporting import partition_sport_sessions
from sports_scheduler.core.repository_protocols import SchedulerStore, SportLike
from sports_scheduler.core.sport_rules import normalize_sport_name

logger = logging.getLogger(__name__)


class SportService:

    def __init__(
        self, store: SchedulerStore, clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.clock = clock

    async def create_sport(self, caller: Caller, name: str) -> SportLike:
        if not caller.is_admin:
            raise ForbiddenError(
                "Admin privileges required", ErrorContext(user_id=caller.id),
            )
        name = normalize_sport_name(name)
        async with self.store.transaction() as tx:
            if await tx.sports.find_owned(caller.id, name) is not None:
                raise _name_taken(name)
            sport = await tx.sports.add(caller.id, name)
        logger.info(
            f"Sport '{name}' created",
            extra={"sport_id": sport.id, "user_id": caller.id},
        )
        return sport

    async def rename_sport(
        self, caller: Caller, sport_id: SportId, name: str,
    ) -> SportLike:
        async with self.store.transaction() as tx:
            sport = await tx.sports.get(sport_id)
            if sport is None:
                raise NotFoundError("Sport", sport_id, ErrorContext(sport_id=sport_id))
            if not caller.is_admin or sport.admin_id != caller.id:
                raise ForbiddenError(
                    "You can only edit sports you created",
                    ErrorContext(sport_id=sport_id, user_id=caller.id),
                )
            name = normalize_sport_name(name)
            existing = await tx.sports.find_owned(caller.id, name)
            if existing is not None and existing.id != sport.id:
                raise _name_taken(name)
            sport = await tx.sports.rename(sport, name)
        logger.info(
            f"Sport {sport_id} renamed to '{name}'",
            extra={"sport_id": sport_id, "user_id": caller.id},
        )
        return sport

    async def list_sports(self) -> list[dict]:
        """All sports by name, with their number of active sessions."""
        sports = await self.store.sports.list_all()
        active = await self.store.sessions.count_by_sport(active_only=True)
        return [
            {"sport": sport, "active_sessions": active.get(sport.id, 0)}
            for sport in sports
        ]

    async def sport_detail(self, caller: Caller, sport_id: SportId) -> dict:
        sport = await self.store.sports.get(sport_id)
        if sport is None:
            raise NotFoundError("Sport", sport_id, ErrorContext(sport_id=sport_id))
        sessions = await self.store.sessions.list_for_sport(sport_id)
        upcoming, past = partition_sport_sessions(sessions, self.clock().date())
        joined = await self.store.roster.list_sessions_for(caller.id)
        return {
            "sport": sport,
            "upcoming": upcoming,
            "past": past,
            "joined_session_ids": sorted(
                s.id for s in joined if s.sport_id == sport_id
            ),
        }


def _name_taken(name: str) -> ConflictError:
    return ConflictError("SPORT_NAME_TAKEN", f"You already have a sport named '{name}'")
