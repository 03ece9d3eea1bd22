from __future__ import annotations

from datetime import datetime

from pydantic import Field

from findmygym.schemas.common import CamelModel
from findmygym.schemas.gym import FavoriteGymCard


class FavoriteCreateRequest(CamelModel):
    gym_id: int = Field(description="Gym ID")


class FavoriteOut(CamelModel):
    id: int
    user_id: int
    gym_id: int
    created_at: datetime | None = None


class FavoriteListResponse(CamelModel):
    gyms: list[FavoriteGymCard] = Field(default_factory=list)
