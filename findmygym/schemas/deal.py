from __future__ import annotations

from datetime import datetime

from pydantic import Field

from findmygym.schemas.common import CamelModel


class DealGymRef(CamelModel):
    name: str
    slug: str
    image_url: str | None = None
    address: str | None = None


class DealOut(CamelModel):
    id: int
    gym_id: int
    title: str
    description: str | None = None
    discount: float
    valid_from: datetime
    valid_until: datetime
    gym: DealGymRef


class DealListResponse(CamelModel):
    deals: list[DealOut] = Field(default_factory=list)
