from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from findmygym.models import RecentView


class HistoryRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def recent_gym_ids(self, *, user_id: int, limit: int) -> list[int]:
        stmt = (
            select(RecentView.gym_id)
            .where(RecentView.user_id == user_id)
            .order_by(RecentView.viewed_at.desc(), RecentView.id.desc())
            .limit(limit)
        )
        return [int(gid) for gid in (await self._session.scalars(stmt)).all()]

    async def touch(self, *, user_id: int, gym_id: int, viewed_at: datetime) -> None:
        """Insert or bump the view timestamp for (user, gym)."""
        stmt = select(RecentView).where(
            RecentView.user_id == user_id, RecentView.gym_id == gym_id
        )
        row = (await self._session.scalars(stmt)).first()
        if row is None:
            self._session.add(RecentView(user_id=user_id, gym_id=gym_id, viewed_at=viewed_at))
        else:
            row.viewed_at = viewed_at
        await self._session.flush()

    async def trim(self, *, user_id: int, keep: int) -> None:
        keep_ids: Sequence[int] = (
            await self._session.scalars(
                select(RecentView.id)
                .where(RecentView.user_id == user_id)
                .order_by(RecentView.viewed_at.desc(), RecentView.id.desc())
                .limit(keep)
            )
        ).all()
        await self._session.execute(
            delete(RecentView).where(
                RecentView.user_id == user_id, RecentView.id.not_in(list(keep_ids))
            )
        )
