from __future__ import annotations

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from findmygym.models import Deal, Gym


class DealRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_active(self, *, now: datetime, limit: int) -> list[tuple[Deal, Gym]]:
        stmt = (
            select(Deal, Gym)
            .join(Gym, Gym.id == Deal.gym_id)
            .where(
                Deal.is_active.is_(True),
                Deal.valid_from <= now,
                Deal.valid_until >= now,
            )
            .order_by(Deal.discount.desc(), Deal.id.asc())
            .limit(limit)
        )
        rows = (await self._session.execute(stmt)).all()
        return [(d, g) for d, g in rows]
