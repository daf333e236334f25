"""User Routes — registration and the current caller's profile."""

from fastapi import APIRouter, Depends, status

from sports_scheduler.api.dependencies import get_caller, user_service
from sports_scheduler.core.domain_types import Caller
from sports_scheduler.schemas.user import UserCreate, UserResponse
from sports_scheduler.services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


def _to_response(user) -> UserResponse:
    return UserResponse(id=user.id, email=user.email, name=user.name, role=user.role)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(body: UserCreate, service: UserService = Depends(user_service)):
    return _to_response(await service.register_user(body.email, body.name, body.role))


@router.get("/me", response_model=UserResponse)
async def me(
    caller: Caller = Depends(get_caller),
    service: UserService = Depends(user_service),
):
    return _to_response(await service.get_user(caller.id))
