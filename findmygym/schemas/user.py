from __future__ import annotations

from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from findmygym.schemas.common import CamelModel

MIN_PASSWORD_LENGTH = 8


class SignupRequest(CamelModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        s = v.strip()
        if not s:
            raise ValueError("name must not be blank")
        return s


class SignupResponse(CamelModel):
    id: int
    name: str
    email: str


class ProfileCounts(CamelModel):
    reviews: int = 0
    favorites: int = 0
    bookings: int = 0


class ProfileOut(CamelModel):
    id: int
    name: str
    email: str
    avatar: str | None = None
    fitness_goals: list[str] = Field(default_factory=list)
    preferred_workouts: list[str] = Field(default_factory=list)
    budget_range: str | None = None
    created_at: datetime | None = None
    counts: ProfileCounts | None = None


class ProfileUpdateRequest(CamelModel):
    """Only fields present in the payload are written; a blank name is ignored."""

    name: str | None = None
    fitness_goals: list[str] | None = None
    preferred_workouts: list[str] | None = None
    budget_range: str | None = None
