"""Player Routes — personal dashboard and paginated browsing of open sessions."""

from fastapi import APIRouter, Depends, Query

from sports_scheduler.api.dependencies import get_caller, reporting_service
from sports_scheduler.config import get_settings
from sports_scheduler.core.domain_types import Caller, SportId
from sports_scheduler.schemas.reporting import (
    BrowseEntry, BrowseResponse, DashboardResponse, Pagination,
)
from sports_scheduler.schemas.session import SessionResponse
from sports_scheduler.services.reporting_service import ReportingService

router = APIRouter(prefix="/api/v1/player", tags=["player"])


@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(
    caller: Caller = Depends(get_caller),
    service: ReportingService = Depends(reporting_service),
):
    return DashboardResponse.from_dashboard(await service.dashboard_for(caller))


@router.get("/sessions", response_model=BrowseResponse)
async def browse_sessions(
    sport_id: int | None = Query(None, ge=1),
    page: int = Query(1, ge=1),
    caller: Caller = Depends(get_caller),
    service: ReportingService = Depends(reporting_service),
):
    result = await service.browse(
        caller,
        SportId(sport_id) if sport_id is not None else None,
        page,
        get_settings().browse_page_size,
    )
    return BrowseResponse(
        sessions=[
            BrowseEntry(
                session=SessionResponse.from_session(entry["session"]),
                has_joined=entry["has_joined"],
            )
            for entry in result["sessions"]
        ],
        pagination=Pagination(**result["pagination"]),
    )
