from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import Field, field_validator

from findmygym.schemas.common import CamelModel

BookingType = Literal["trial", "visit", "inquiry"]


class BookingGymRef(CamelModel):
    name: str
    slug: str
    address: str | None = None
    image_url: str | None = None
    phone: str | None = None


class BookingOut(CamelModel):
    id: int
    user_id: int
    gym_id: int
    booking_type: str
    date: dt.date
    time_slot: str | None = None
    notes: str | None = None
    status: str
    created_at: dt.datetime | None = None
    gym: BookingGymRef | None = None


class BookingListResponse(CamelModel):
    bookings: list[BookingOut] = Field(default_factory=list)


class BookingCreateRequest(CamelModel):
    gym_id: int = Field(description="Gym to visit")
    booking_type: BookingType = Field(description="trial | visit | inquiry")
    date: dt.date = Field(description="Requested day (YYYY-MM-DD)")
    time_slot: str | None = Field(default=None, description="Preferred slot, e.g. 18:00")
    notes: str | None = None

    @field_validator("time_slot", "notes")
    @classmethod
    def _blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        s = v.strip()
        return s or None


class BookingStatusUpdate(CamelModel):
    status: str | None = Field(
        default=None, description="pending | confirmed | cancelled | completed"
    )
