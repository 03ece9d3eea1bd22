"""Gym listing use cases: filter, aggregate, sort and paginate."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import structlog
from sqlalchemy.exc import SQLAlchemyError

from findmygym.core.exceptions import InfrastructureError
from findmygym.infra.unit_of_work import UnitOfWork
from findmygym.models import Gym
from findmygym.schemas.gym import (
    FeaturedGymsResponse,
    GymCard,
    GymCompareResponse,
    GymFilterCriteria,
    GymHourOut,
    GymListResponse,
)
from findmygym.services.aggregates import average_rating, lowest_price
from findmygym.utils.geo import LatLng, get_distance_km
from findmygym.utils.paging import paginate, total_pages
from findmygym.utils.sort import GymSortKey

logger = structlog.get_logger(__name__)

UnitOfWorkFactory = Callable[[], UnitOfWork]

FEATURED_LIMIT = 6
COMPARE_LIMIT = 3

_PRICE_RANK = {"budget": 0, "mid": 1, "premium": 2}

__all__ = [
    "COMPARE_LIMIT",
    "FEATURED_LIMIT",
    "GymSearchService",
    "apply_criteria",
    "build_gym_card",
    "sort_cards",
]


def build_gym_card(gym: Gym, *, origin: LatLng | None = None) -> GymCard:
    """Flatten an eagerly-loaded gym into a card with its derived stats."""
    ratings = [float(r.rating) for r in gym.reviews]
    distance = None
    if origin is not None and gym.lat is not None and gym.lng is not None:
        distance = get_distance_km(origin[0], origin[1], float(gym.lat), float(gym.lng))
    return GymCard(
        id=int(gym.id),
        name=gym.name,
        slug=gym.slug,
        description=gym.description,
        address=gym.address,
        lat=gym.lat,
        lng=gym.lng,
        phone=gym.phone,
        website=gym.website,
        price_range=gym.price_range,
        type=gym.type,
        image_url=gym.image_url,
        rating=average_rating(ratings),
        review_count=len(ratings),
        amenities=[a.amenity_name for a in gym.amenities],
        lowest_price=lowest_price(m.price for m in gym.memberships),
        hours=[GymHourOut.model_validate(h) for h in gym.hours],
        distance_km=distance,
        created_at=gym.created_at,
    )


def _created_key(card: GymCard) -> float:
    return card.created_at.timestamp() if card.created_at else float("-inf")


def sort_cards(cards: Sequence[GymCard], sort: GymSortKey) -> list[GymCard]:
    """Order cards by a derived or stored key; cards missing the key sort last."""
    items = list(cards)
    if sort == "rating":
        return sorted(items, key=lambda c: -c.rating)
    if sort == "name":
        return sorted(items, key=lambda c: (c.name.lower(), c.id))
    if sort == "newest":
        return sorted(items, key=_created_key, reverse=True)
    if sort in ("price_low", "price_high"):
        priced = [c for c in items if c.lowest_price is not None]
        unpriced = [c for c in items if c.lowest_price is None]
        priced.sort(
            key=lambda c: (c.lowest_price, _PRICE_RANK.get(c.price_range, 1)),
            reverse=sort == "price_high",
        )
        return priced + unpriced
    if sort == "distance":
        located = sorted(
            (c for c in items if c.distance_km is not None), key=lambda c: c.distance_km
        )
        return located + [c for c in items if c.distance_km is None]
    return items


def apply_criteria(
    cards: Sequence[GymCard], criteria: GymFilterCriteria
) -> tuple[list[GymCard], int]:
    """Second pass after aggregation: rating threshold, ordering, then one page.

    Returns the page and the post-filter total.
    """
    kept = [c for c in cards if criteria.min_rating <= 0 or c.rating >= criteria.min_rating]
    ordered = sort_cards(kept, criteria.sort)
    return paginate(ordered, page=criteria.page, limit=criteria.limit), len(ordered)


class GymSearchService:
    """Use cases for gym listing, featured gyms and side-by-side comparison."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def search(self, criteria: GymFilterCriteria) -> GymListResponse:
        origin = (criteria.lat, criteria.lng) if criteria.has_origin else None
        try:
            async with self._uow_factory() as uow:
                gyms = await uow.gyms.list_active(
                    q=criteria.q,
                    gym_type=criteria.type,
                    price_range=criteria.price_range,
                    amenities=criteria.amenities,
                )
                cards = [build_gym_card(g, origin=origin) for g in gyms]
        except SQLAlchemyError:
            logger.exception("gym_search_failed")
            return GymListResponse()

        page_items, total = apply_criteria(cards, criteria)
        logger.info("gym_search", total=total, page=criteria.page, sort=criteria.sort)
        return GymListResponse(
            gyms=page_items,
            total=total,
            page=criteria.page,
            total_pages=total_pages(total, criteria.limit),
        )

    async def featured(self, limit: int = FEATURED_LIMIT) -> FeaturedGymsResponse:
        try:
            async with self._uow_factory() as uow:
                gyms = await uow.gyms.list_active()
                cards = [build_gym_card(g) for g in gyms]
        except SQLAlchemyError as exc:
            logger.exception("featured_gyms_failed")
            raise InfrastructureError("Database unavailable") from exc
        return FeaturedGymsResponse(gyms=sort_cards(cards, "rating")[:limit])

    async def compare(self, slugs: Sequence[str]) -> GymCompareResponse:
        wanted: list[str] = []
        for s in slugs:
            if s and s not in wanted:
                wanted.append(s)
        wanted = wanted[:COMPARE_LIMIT]
        async with self._uow_factory() as uow:
            gyms = await uow.gyms.list_by_slugs(wanted)
            by_slug = {g.slug: build_gym_card(g) for g in gyms}
        cards = [by_slug[s] for s in wanted if s in by_slug]
        amenities = sorted({a for c in cards for a in c.amenities})
        return GymCompareResponse(gyms=cards, amenities=amenities)
