"""User Schemas — registration payload and public user data."""

from pydantic import BaseModel, Field, field_validator

from sports_scheduler.core.domain_types import UserRole

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreate(BaseModel):
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    name: str = Field(min_length=2, max_length=100)
    role: UserRole = UserRole.PLAYER

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("name must be between 2 and 100 characters")
        return v


class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    role: UserRole
