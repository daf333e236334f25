"""Sport Schemas — name bounds match core/sport_rules.py."""

from pydantic import BaseModel, Field, field_validator

from sports_scheduler.core.sport_rules import (
    SPORT_NAME_MAX_LENGTH, SPORT_NAME_MIN_LENGTH,
)
from sports_scheduler.schemas.session import SessionResponse


class SportWrite(BaseModel):
    name: str = Field(min_length=SPORT_NAME_MIN_LENGTH, max_length=SPORT_NAME_MAX_LENGTH)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class SportResponse(BaseModel):
    id: int
    name: str
    admin_id: int
    active_sessions: int | None = None

    @classmethod
    def from_sport(cls, sport, active_sessions: int | None = None) -> "SportResponse":
        return cls(
            id=sport.id, name=sport.name, admin_id=sport.admin_id,
            active_sessions=active_sessions,
        )


class SportDetailResponse(BaseModel):
    sport: SportResponse
    admin_name: str
    upcoming: list[SessionResponse]
    past: list[SessionResponse]
    joined_session_ids: list[int]
