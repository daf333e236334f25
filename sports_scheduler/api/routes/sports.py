"""Sport Routes — catalog listing for everyone, management for owning admins."""

from fastapi import APIRouter, Depends, status

from sports_scheduler.api.dependencies import get_caller, sport_service
from sports_scheduler.core.domain_types import Caller, SportId
from sports_scheduler.schemas.session import SessionResponse
from sports_scheduler.schemas.sport import (
    SportDetailResponse, SportResponse, SportWrite,
)
from sports_scheduler.services.sport_service import SportService

router = APIRouter(prefix="/api/v1/sports", tags=["sports"])


@router.get("", response_model=list[SportResponse])
async def list_sports(
    caller: Caller = Depends(get_caller),
    service: SportService = Depends(sport_service),
):
    return [
        SportResponse.from_sport(entry["sport"], entry["active_sessions"])
        for entry in await service.list_sports()
    ]


@router.get("/{sport_id}", response_model=SportDetailResponse)
async def get_sport(
    sport_id: int,
    caller: Caller = Depends(get_caller),
    service: SportService = Depends(sport_service),
):
    detail = await service.sport_detail(caller, SportId(sport_id))
    sport = detail["sport"]
    return SportDetailResponse(
        sport=SportResponse.from_sport(sport),
        admin_name=sport.admin.name,
        upcoming=[SessionResponse.from_session(s) for s in detail["upcoming"]],
        past=[SessionResponse.from_session(s) for s in detail["past"]],
        joined_session_ids=detail["joined_session_ids"],
    )


@router.post("", response_model=SportResponse, status_code=status.HTTP_201_CREATED)
async def create_sport(
    body: SportWrite,
    caller: Caller = Depends(get_caller),
    service: SportService = Depends(sport_service),
):
    return SportResponse.from_sport(await service.create_sport(caller, body.name))


@router.put("/{sport_id}", response_model=SportResponse)
async def rename_sport(
    sport_id: int,
    body: SportWrite,
    caller: Caller = Depends(get_caller),
    service: SportService = Depends(sport_service),
):
    sport = await service.rename_sport(caller, SportId(sport_id), body.name)
    return SportResponse.from_sport(sport)
