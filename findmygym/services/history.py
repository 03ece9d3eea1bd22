"""Server-side list of recently viewed gyms."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import timedelta

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from findmygym.core.exceptions import NotFoundError
from findmygym.repositories.history_repository import HistoryRepository
from findmygym.repositories.sqlalchemy import SqlAlchemyGymReadRepository
from findmygym.repositories.user_repository import UserRepository
from findmygym.schemas.history import HistoryResponse
from findmygym.services.gym_search import build_gym_card
from findmygym.services.users import require_user
from findmygym.utils.datetime import utcnow

logger = structlog.get_logger(__name__)

HISTORY_LIMIT = 10


class HistoryService:
    def __init__(self, session: AsyncSession) -> None:
        self.repo = HistoryRepository(session)
        self.users = UserRepository(session)
        self.gyms = SqlAlchemyGymReadRepository(session)
        self.session = session

    async def list(self, *, email: str) -> HistoryResponse:
        user = await require_user(self.users, email)
        return await self._recent(user.id)

    async def push(self, *, email: str, gym_ids: Sequence[int]) -> HistoryResponse:
        """Record views; ``gym_ids`` is ordered most recent first."""
        user = await require_user(self.users, email)
        known = {g.id for g in await self.gyms.list_by_ids(gym_ids)}
        ordered = [gid for gid in gym_ids if gid in known][:HISTORY_LIMIT]
        if not ordered:
            raise NotFoundError("Gym not found")

        now = utcnow()
        # oldest first so the first id ends up with the latest timestamp
        for offset, gym_id in reversed(list(enumerate(ordered))):
            await self.repo.touch(
                user_id=user.id, gym_id=gym_id, viewed_at=now - timedelta(milliseconds=offset)
            )
        await self.repo.trim(user_id=user.id, keep=HISTORY_LIMIT)
        await self.session.commit()
        logger.info("history_recorded", user_id=user.id, count=len(ordered))
        return await self._recent(user.id)

    async def _recent(self, user_id: int) -> HistoryResponse:
        ids = await self.repo.recent_gym_ids(user_id=user_id, limit=HISTORY_LIMIT)
        by_id = {g.id: g for g in await self.gyms.list_by_ids(ids)}
        return HistoryResponse(gyms=[build_gym_card(by_id[i]) for i in ids if i in by_id])
