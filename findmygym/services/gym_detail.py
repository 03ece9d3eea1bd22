"""Gym detail use cases backed by repository interfaces."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import structlog
from sqlalchemy.exc import SQLAlchemyError

from findmygym.core.config import get_settings
from findmygym.core.exceptions import InfrastructureError, NotFoundError
from findmygym.infra.unit_of_work import UnitOfWork
from findmygym.models import Gym, Review
from findmygym.schemas.gym import (
    CategoryRatings,
    GymAmenityOut,
    GymClassOut,
    GymDetail,
    GymHourOut,
    GymPhotoOut,
    MembershipOut,
    OpenStatus,
)
from findmygym.schemas.review import ReviewAuthor, ReviewGymRef, ReviewOut
from findmygym.services.aggregates import (
    average_rating,
    category_ratings,
    is_gym_open,
    lowest_price,
    rating_distribution,
)
from findmygym.utils.datetime import local_now

logger = structlog.get_logger(__name__)

UnitOfWorkFactory = Callable[[], UnitOfWork]
Clock = Callable[[], datetime]


def _default_clock() -> datetime:
    return local_now(get_settings().app_timezone)


def review_to_out(review: Review, *, with_user: bool = True, with_gym: bool = False) -> ReviewOut:
    """Copy a review row into its API shape; related rows must already be loaded."""
    author = None
    if with_user and review.user is not None:
        author = ReviewAuthor(id=review.user.id, name=review.user.name, avatar=review.user.avatar)
    gym_ref = None
    if with_gym and review.gym is not None:
        gym_ref = ReviewGymRef(
            name=review.gym.name, slug=review.gym.slug, address=review.gym.address
        )
    return ReviewOut(
        id=review.id,
        gym_id=review.gym_id,
        user_id=review.user_id,
        rating=review.rating,
        cleanliness=review.cleanliness,
        equipment=review.equipment,
        staff=review.staff,
        value_for_money=review.value_for_money,
        text=review.text,
        helpful_count=review.helpful_count or 0,
        is_verified=bool(review.is_verified),
        created_at=review.created_at,
        user=author,
        gym=gym_ref,
    )


class GymDetailService:
    """Use cases for retrieving a single gym with every related section."""

    def __init__(self, uow_factory: UnitOfWorkFactory, clock: Clock | None = None) -> None:
        self._uow_factory = uow_factory
        self._clock = clock or _default_clock

    async def get(self, slug: str) -> GymDetail:
        try:
            async with self._uow_factory() as uow:
                gym = await uow.gyms.get_detail_by_slug(slug)
                if gym is None:
                    raise NotFoundError("Gym not found")
                return self._assemble(gym)
        except SQLAlchemyError as exc:
            logger.exception("gym_detail_failed", slug=slug)
            raise InfrastructureError("Database unavailable") from exc

    def _assemble(self, gym: Gym) -> GymDetail:
        reviews = list(gym.reviews)
        ratings = [float(r.rating) for r in reviews]
        cats = category_ratings(reviews)
        status = is_gym_open(gym.hours, self._clock())
        return GymDetail(
            id=gym.id,
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
            created_at=gym.created_at,
            hours=[GymHourOut.model_validate(h) for h in gym.hours],
            amenities=[GymAmenityOut.model_validate(a) for a in gym.amenities],
            photos=[GymPhotoOut.model_validate(p) for p in gym.photos],
            memberships=[
                MembershipOut(
                    id=m.id,
                    plan_name=m.plan_name,
                    price=m.price,
                    duration_months=m.duration_months,
                    features=list(m.features or []),
                    is_popular=bool(m.is_popular),
                )
                for m in gym.memberships
            ],
            classes=[GymClassOut.model_validate(c) for c in gym.classes],
            reviews=[review_to_out(r) for r in reviews],
            rating=average_rating(ratings),
            review_count=len(reviews),
            lowest_price=lowest_price(m.price for m in gym.memberships),
            category_ratings=CategoryRatings(
                cleanliness=cats.cleanliness,
                equipment=cats.equipment,
                staff=cats.staff,
                value_for_money=cats.value_for_money,
            ),
            rating_distribution=rating_distribution(ratings),
            open_status=OpenStatus(
                is_open=status.is_open, closes_at=status.closes_at, opens_at=status.opens_at
            ),
        )
