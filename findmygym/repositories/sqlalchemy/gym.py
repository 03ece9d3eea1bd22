"""SQLAlchemy implementation of gym repository interfaces."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from findmygym.models import Gym, GymAmenity, Review
from findmygym.repositories.interfaces import GymReadRepository

_CARD_LOADS = (
    selectinload(Gym.amenities),
    selectinload(Gym.reviews),
    selectinload(Gym.memberships),
    selectinload(Gym.hours),
)


class SqlAlchemyGymReadRepository(GymReadRepository):
    """Default SQLAlchemy-backed implementation."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_active(
        self,
        *,
        q: str | None = None,
        gym_type: str | None = None,
        price_range: str | None = None,
        amenities: Sequence[str] = (),
    ) -> list[Gym]:
        stmt = select(Gym).where(Gym.is_active.is_(True)).options(*_CARD_LOADS)
        if gym_type:
            stmt = stmt.where(Gym.type == gym_type)
        if price_range:
            stmt = stmt.where(Gym.price_range == price_range)
        if q:
            stmt = stmt.where(Gym.name.icontains(q, autoescape=True))
        if amenities:
            stmt = stmt.where(Gym.amenities.any(GymAmenity.amenity_name.in_(list(amenities))))
        stmt = stmt.order_by(Gym.created_at.desc(), Gym.id.desc())
        return list((await self._session.scalars(stmt)).all())

    async def list_by_slugs(self, slugs: Sequence[str]) -> list[Gym]:
        if not slugs:
            return []
        stmt = (
            select(Gym)
            .where(Gym.slug.in_(list(slugs)), Gym.is_active.is_(True))
            .options(*_CARD_LOADS)
        )
        return list((await self._session.scalars(stmt)).all())

    async def list_by_ids(self, gym_ids: Sequence[int]) -> list[Gym]:
        if not gym_ids:
            return []
        stmt = (
            select(Gym)
            .where(Gym.id.in_(list(gym_ids)), Gym.is_active.is_(True))
            .options(*_CARD_LOADS)
        )
        return list((await self._session.scalars(stmt)).all())

    async def get_detail_by_slug(self, slug: str) -> Gym | None:
        stmt = (
            select(Gym)
            .where(Gym.slug == slug)
            .options(
                selectinload(Gym.hours),
                selectinload(Gym.amenities),
                selectinload(Gym.photos),
                selectinload(Gym.memberships),
                selectinload(Gym.classes),
                selectinload(Gym.reviews).selectinload(Review.user),
            )
        )
        return (await self._session.scalars(stmt)).first()

    async def get_by_id(self, gym_id: int) -> Gym | None:
        return await self._session.get(Gym, gym_id)
