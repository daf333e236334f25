"""Session Routes — create, view, edit, cancel, join and leave.

Invariants:
    - Every endpoint requires a resolved caller
    - Request bodies are syntax-checked by Pydantic; services re-check the rules
      that can change between form render and submission (past-ness, ownership, capacity)
"""

from fastapi import APIRouter, Depends, status

from sports_scheduler.api.dependencies import (
    get_caller, roster_service, session_service,
)
from sports_scheduler.core.domain_types import Caller, SessionId, SportId
from sports_scheduler.schemas.session import (
    CancelRequest, SessionDetailResponse, SessionResponse, SessionWrite,
)
from sports_scheduler.services.roster_service import RosterService
from sports_scheduler.services.session_service import SessionService

router = APIRouter(prefix="/api/v1/sessions", tags=["sessions"])


@router.post(
    "", response_model=SessionResponse, status_code=status.HTTP_201_CREATED,
)
async def create_session(
    body: SessionWrite,
    caller: Caller = Depends(get_caller),
    service: SessionService = Depends(session_service),
):
    session = await service.create_session(
        caller, SportId(body.sport_id), body.date, body.time,
        body.venue, body.players_needed,
    )
    return SessionResponse.from_session(session)


@router.get("/{session_id}", response_model=SessionDetailResponse)
async def get_session(
    session_id: int,
    caller: Caller = Depends(get_caller),
    service: SessionService = Depends(session_service),
):
    detail = await service.session_detail(caller, SessionId(session_id))
    return SessionDetailResponse.from_detail(detail)


@router.put("/{session_id}", response_model=SessionResponse)
async def update_session(
    session_id: int,
    body: SessionWrite,
    caller: Caller = Depends(get_caller),
    service: SessionService = Depends(session_service),
):
    session = await service.update_session(
        caller, SessionId(session_id), SportId(body.sport_id),
        body.date, body.time, body.venue, body.players_needed,
    )
    return SessionResponse.from_session(session)


@router.post("/{session_id}/cancel", response_model=SessionResponse)
async def cancel_session(
    session_id: int,
    body: CancelRequest,
    caller: Caller = Depends(get_caller),
    service: SessionService = Depends(session_service),
):
    session = await service.cancel_session(caller, SessionId(session_id), body.reason)
    return SessionResponse.from_session(session)


@router.post("/{session_id}/join", response_model=SessionResponse)
async def join_session(
    session_id: int,
    caller: Caller = Depends(get_caller),
    service: RosterService = Depends(roster_service),
):
    session = await service.join_session(caller, SessionId(session_id))
    return SessionResponse.from_session(session)


@router.post("/{session_id}/leave", response_model=SessionResponse)
async def leave_session(
    session_id: int,
    caller: Caller = Depends(get_caller),
    service: RosterService = Depends(roster_service),
):
    session = await service.leave_session(caller, SessionId(session_id))
    return SessionResponse.from_session(session)
