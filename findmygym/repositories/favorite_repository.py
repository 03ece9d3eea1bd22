from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from findmygym.models import Favorite, Gym


class FavoriteRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, *, user_id: int, gym_id: int) -> Favorite | None:
        stmt = select(Favorite).where(Favorite.user_id == user_id, Favorite.gym_id == gym_id)
        return (await self._session.scalars(stmt)).first()

    async def add(self, *, user_id: int, gym_id: int) -> Favorite:
        fav = Favorite(user_id=user_id, gym_id=int(gym_id))
        self._session.add(fav)
        await self._session.flush()
        await self._session.refresh(fav)
        return fav

    async def list_with_gym(self, *, user_id: int) -> list[tuple[Favorite, Gym]]:
        stmt = (
            select(Favorite, Gym)
            .join(Gym, Gym.id == Favorite.gym_id)
            .where(Favorite.user_id == user_id)
            .options(
                selectinload(Gym.amenities),
                selectinload(Gym.reviews),
                selectinload(Gym.memberships),
                selectinload(Gym.hours),
            )
            .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        )
        rows = (await self._session.execute(stmt)).all()
        return [(fav, gym) for fav, gym in rows]

    async def remove(self, *, user_id: int, gym_id: int) -> int:
        stmt = delete(Favorite).where(Favorite.user_id == user_id, Favorite.gym_id == int(gym_id))
        result = await self._session.execute(stmt)
        return int(result.rowcount or 0)

    async def count_for_user(self, user_id: int) -> int:
        stmt = select(func.count()).select_from(Favorite).where(Favorite.user_id == user_id)
        return int((await self._session.scalar(stmt)) or 0)
