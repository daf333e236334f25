"""Admin Routes — admin dashboard, every session, and date-range reports."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from sports_scheduler.api.dependencies import get_caller, reporting_service
from sports_scheduler.core.domain_types import Caller
from sports_scheduler.core.errors import ErrorContext, ForbiddenError
from sports_scheduler.schemas.reporting import (
    AdminDashboardResponse, AdminSportEntry, AdminStats, ReportResponse,
    ReportStats, SportPopularity,
)
from sports_scheduler.schemas.session import SessionResponse
from sports_scheduler.schemas.sport import SportResponse
from sports_scheduler.services.reporting_service import ReportingService

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


async def require_admin(caller: Caller = Depends(get_caller)) -> Caller:
    if not caller.is_admin:
        raise ForbiddenError(
            "Access denied. Admin privileges required.",
            ErrorContext(user_id=caller.id),
        )
    return caller


@router.get("/dashboard", response_model=AdminDashboardResponse)
async def admin_dashboard(
    caller: Caller = Depends(require_admin),
    service: ReportingService = Depends(reporting_service),
):
    dashboard = await service.admin_dashboard(caller)
    return AdminDashboardResponse(
        sports=[
            AdminSportEntry(
                sport=SportResponse.from_sport(entry["sport"]),
                session_count=entry["session_count"],
            )
            for entry in dashboard["sports"]
        ],
        upcoming_sessions=[
            SessionResponse.from_session(s) for s in dashboard["upcoming_sessions"]
        ],
        stats=AdminStats(**dashboard["stats"]),
    )


@router.get("/sessions", response_model=list[SessionResponse])
async def all_sessions(
    caller: Caller = Depends(require_admin),
    service: ReportingService = Depends(reporting_service),
):
    return [SessionResponse.from_session(s) for s in await service.all_sessions(caller)]


@router.get("/reports", response_model=ReportResponse)
async def reports(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    caller: Caller = Depends(require_admin),
    service: ReportingService = Depends(reporting_service),
):
    report = await service.session_report(start_date, end_date)
    return ReportResponse(
        start_date=report["start"],
        end_date=report["end"],
        sessions=[SessionResponse.from_session(s) for s in report["sessions"]],
        sport_popularity=[SportPopularity(**p) for p in report["sport_popularity"]],
        stats=ReportStats(**report["stats"]),
    )
