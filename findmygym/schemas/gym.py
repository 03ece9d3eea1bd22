# findmygym/schemas/gym.py
from __future__ import annotations

from datetime import datetime
from typing import Annotated

from fastapi import HTTPException, Query
from pydantic import Field, ValidationError, field_validator

from findmygym.models import GYM_TYPES, PRICE_RANGES
from findmygym.schemas.common import CamelModel
from findmygym.schemas.review import ReviewOut
from findmygym.utils.sort import GymSortKey, resolve_sort_key

__all__ = [
    "CategoryRatings",
    "GymCard",
    "GymCompareResponse",
    "GymDetail",
    "GymFilterCriteria",
    "GymHourOut",
    "GymListResponse",
    "FeaturedGymsResponse",
    "OpenStatus",
]


class GymHourOut(CamelModel):
    day_of_week: int
    open_time: str
    close_time: str
    is_closed: bool = False


class GymAmenityOut(CamelModel):
    amenity_name: str
    icon: str | None = None


class GymPhotoOut(CamelModel):
    url: str
    caption: str | None = None
    is_primary: bool = False
    order: int = 0


class MembershipOut(CamelModel):
    id: int
    plan_name: str
    price: float
    duration_months: int
    features: list[str] = Field(default_factory=list)
    is_popular: bool = False


class GymClassOut(CamelModel):
    id: int
    class_name: str
    instructor: str | None = None
    day_of_week: int
    start_time: str
    end_time: str
    capacity: int | None = None
    category: str | None = None


class CategoryRatings(CamelModel):
    cleanliness: float = 0
    equipment: float = 0
    staff: float = 0
    value_for_money: float = 0


class OpenStatus(CamelModel):
    is_open: bool
    closes_at: str | None = None
    opens_at: str | None = None


class GymCard(CamelModel):
    """Gym summary used by listing, featured, favorites and compare."""

    id: int
    name: str
    slug: str
    description: str | None = None
    address: str
    lat: float | None = None
    lng: float | None = None
    phone: str | None = None
    website: str | None = None
    price_range: str
    type: str
    image_url: str | None = None
    rating: float = 0
    review_count: int = 0
    amenities: list[str] = Field(default_factory=list)
    lowest_price: float | None = None
    hours: list[GymHourOut] = Field(default_factory=list)
    distance_km: float | None = None
    created_at: datetime | None = None


class FavoriteGymCard(GymCard):
    favorite_id: int


class GymListResponse(CamelModel):
    gyms: list[GymCard] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    total_pages: int = 0


class FeaturedGymsResponse(CamelModel):
    gyms: list[GymCard] = Field(default_factory=list)


class GymCompareResponse(CamelModel):
    gyms: list[GymCard] = Field(default_factory=list)
    amenities: list[str] = Field(default_factory=list, description="Union of amenities, sorted")


class GymDetail(CamelModel):
    id: int
    name: str
    slug: str
    description: str | None = None
    address: str
    lat: float | None = None
    lng: float | None = None
    phone: str | None = None
    website: str | None = None
    price_range: str
    type: str
    image_url: str | None = None
    created_at: datetime | None = None
    hours: list[GymHourOut] = Field(default_factory=list)
    amenities: list[GymAmenityOut] = Field(default_factory=list)
    photos: list[GymPhotoOut] = Field(default_factory=list)
    memberships: list[MembershipOut] = Field(default_factory=list)
    classes: list[GymClassOut] = Field(default_factory=list)
    reviews: list[ReviewOut] = Field(default_factory=list)
    rating: float = 0
    review_count: int = 0
    lowest_price: float | None = None
    category_ratings: CategoryRatings = Field(default_factory=CategoryRatings)
    rating_distribution: list[int] = Field(default_factory=lambda: [0, 0, 0, 0, 0])
    open_status: OpenStatus | None = None


def _bad_request() -> HTTPException:
    return HTTPException(status_code=400, detail="Invalid query parameters")


class GymFilterCriteria(CamelModel):
    """Typed filter/sort/paging criteria for the gym listing.

    - Store-level: q (name substring, case-insensitive), type, price_range, amenities (any-of)
    - Post-aggregation: min_rating, sort, page/limit
    - lat/lng set an origin for distance_km and sort=distance
    """

    q: str | None = None
    type: str | None = None
    price_range: str | None = None
    amenities: list[str] = Field(default_factory=list)
    min_rating: float = Field(default=0.0, ge=0.0, le=5.0)
    sort: GymSortKey = "rating"
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=12, ge=1, le=100)
    lat: float | None = Field(default=None, ge=-90.0, le=90.0)
    lng: float | None = Field(default=None, ge=-180.0, le=180.0)

    @field_validator("q")
    @classmethod
    def _strip_q(cls, v: str | None) -> str | None:
        if v is None:
            return None
        s = v.strip()
        return s or None

    @field_validator("type")
    @classmethod
    def _check_type(cls, v: str | None) -> str | None:
        if v and v not in GYM_TYPES:
            raise ValueError(f"unknown gym type: {v}")
        return v or None

    @field_validator("price_range")
    @classmethod
    def _check_price_range(cls, v: str | None) -> str | None:
        if v and v not in PRICE_RANGES:
            raise ValueError(f"unknown price range: {v}")
        return v or None

    @property
    def has_origin(self) -> bool:
        return self.lat is not None and self.lng is not None

    # Build from query params; any validation problem becomes a 400.
    @classmethod
    def as_query(
        cls,
        page: Annotated[int, Query(description="Page number (1-based)")] = 1,
        limit: Annotated[int, Query(description="Page size (1..100)")] = 12,
        sort: Annotated[
            str | None,
            Query(description="rating | name | newest | price_low | price_high | distance"),
        ] = None,
        type: Annotated[str | None, Query(description="Gym type, e.g. crossfit")] = None,
        price_range: Annotated[
            str | None, Query(alias="priceRange", description="budget | mid | premium")
        ] = None,
        q: Annotated[str | None, Query(description="Name contains (case-insensitive)")] = None,
        min_rating: Annotated[
            float, Query(alias="minRating", description="Minimum average rating")
        ] = 0.0,
        amenities: Annotated[
            str | None, Query(description="Amenity names CSV, matches any")
        ] = None,
        lat: Annotated[float | None, Query(description="Origin latitude")] = None,
        lng: Annotated[float | None, Query(description="Origin longitude")] = None,
    ) -> GymFilterCriteria:
        try:
            criteria = cls(
                page=page,
                limit=limit,
                sort=resolve_sort_key(sort),
                type=type,
                price_range=price_range,
                q=q,
                min_rating=min_rating,
                amenities=[a.strip() for a in (amenities or "").split(",") if a.strip()],
                lat=lat,
                lng=lng,
            )
        except ValidationError:
            raise _bad_request()
        if criteria.sort == "distance" and not criteria.has_origin:
            raise _bad_request()
        return criteria
