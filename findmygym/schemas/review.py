from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from findmygym.schemas.common import CamelModel


class ReviewAuthor(CamelModel):
    id: int
    name: str
    avatar: str | None = None


class ReviewGymRef(CamelModel):
    name: str
    slug: str
    address: str | None = None


class ReviewOut(CamelModel):
    id: int
    gym_id: int
    user_id: int
    rating: float
    cleanliness: float | None = None
    equipment: float | None = None
    staff: float | None = None
    value_for_money: float | None = None
    text: str
    helpful_count: int = 0
    is_verified: bool = False
    created_at: datetime | None = None
    user: ReviewAuthor | None = None
    gym: ReviewGymRef | None = None


class ReviewCreateRequest(CamelModel):
    gym_id: int = Field(description="Gym being reviewed")
    rating: float = Field(description="Overall rating (1..5)")
    cleanliness: float | None = None
    equipment: float | None = None
    staff: float | None = None
    value_for_money: float | None = None
    text: str = Field(min_length=1, description="Review body")

    @field_validator("rating", "cleanliness", "equipment", "staff", "value_for_money")
    @classmethod
    def _check_range(cls, v: float | None) -> float | None:
        if v is None:
            return None
        if not (1.0 <= float(v) <= 5.0):
            raise ValueError("ratings must be between 1 and 5")
        return float(v)

    @field_validator("text")
    @classmethod
    def _strip_text(cls, v: str) -> str:
        s = v.strip()
        if not s:
            raise ValueError("text must not be blank")
        return s


class ReviewListResponse(CamelModel):
    reviews: list[ReviewOut] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    total_pages: int = 0


class UserReviewsResponse(CamelModel):
    reviews: list[ReviewOut] = Field(default_factory=list)


class HelpfulToggleResponse(CamelModel):
    action: Literal["added", "removed"]


class ReviewReportRequest(CamelModel):
    reason: str = Field(min_length=1, description="Why the review is being reported")

    @field_validator("reason")
    @classmethod
    def _strip_reason(cls, v: str) -> str:
        s = v.strip()
        if not s:
            raise ValueError("reason must not be blank")
        return s
