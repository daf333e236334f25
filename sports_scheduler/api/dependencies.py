"""API Dependencies — store wiring and caller identity resolution.

Invariants:
    - One SqlSchedulerStore per request, bound to the request's AsyncSession
    - The caller is resolved from the X-User-Id header by loading the user;
      the role comes from storage
    - Unknown or missing identity -> 401
"""

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from sports_scheduler.config import get_settings
from sports_scheduler.core.domain_types import Caller, UserId
from sports_scheduler.infrastructure.database import get_db
from sports_scheduler.infrastructure.sql_store import SqlSchedulerStore
from sports_scheduler.services.reporting_service import ReportingService
from sports_scheduler.services.roster_service import RosterService
from sports_scheduler.services.session_service import SessionService
from sports_scheduler.services.sport_service import SportService
from sports_scheduler.services.user_service import UserService


async def get_store(db: AsyncSession = Depends(get_db)) -> SqlSchedulerStore:
    return SqlSchedulerStore(db)


async def get_caller(
    x_user_id: int | None = Header(None),
    store: SqlSchedulerStore = Depends(get_store),
) -> Caller:
    if x_user_id is None:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="Please log in")
    user = await store.users.get(UserId(x_user_id))
    if user is None:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, detail="Unknown user")
    return await UserService(store).resolve_caller(user.id)


def session_service(store: SqlSchedulerStore = Depends(get_store)) -> SessionService:
    return SessionService(store)


def roster_service(store: SqlSchedulerStore = Depends(get_store)) -> RosterService:
    return RosterService(store)


def sport_service(store: SqlSchedulerStore = Depends(get_store)) -> SportService:
    return SportService(store)


def user_service(store: SqlSchedulerStore = Depends(get_store)) -> UserService:
    return UserService(store)


def reporting_service(store: SqlSchedulerStore = Depends(get_store)) -> ReportingService:
    settings = get_settings()
    return ReportingService(
        store,
        dashboard_limit=settings.dashboard_available_limit,
        admin_upcoming_limit=settings.admin_upcoming_limit,
        report_default_days=settings.report_default_days,
    )
