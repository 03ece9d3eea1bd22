from __future__ import annotations

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from findmygym.core.exceptions import ConflictError, NotFoundError
from findmygym.repositories.favorite_repository import FavoriteRepository
from findmygym.repositories.sqlalchemy import SqlAlchemyGymReadRepository
from findmygym.repositories.user_repository import UserRepository
from findmygym.schemas.favorite import FavoriteListResponse, FavoriteOut
from findmygym.schemas.gym import FavoriteGymCard
from findmygym.services.gym_search import build_gym_card
from findmygym.services.users import require_user

logger = structlog.get_logger(__name__)


class FavoriteService:
    def __init__(self, session: AsyncSession) -> None:
        self.repo = FavoriteRepository(session)
        self.users = UserRepository(session)
        self.gyms = SqlAlchemyGymReadRepository(session)
        self.session = session

    async def add(self, *, email: str, gym_id: int) -> FavoriteOut:
        user = await require_user(self.users, email)
        gym = await self.gyms.get_by_id(gym_id)
        if gym is None or not gym.is_active:
            raise NotFoundError("Gym not found")
        if await self.repo.get(user_id=user.id, gym_id=gym_id) is not None:
            raise ConflictError("Already favorited")
        try:
            fav = await self.repo.add(user_id=user.id, gym_id=gym_id)
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError("Already favorited") from exc
        logger.info("favorite_added", user_id=user.id, gym_id=gym_id)
        return FavoriteOut.model_validate(fav)

    async def list(self, *, email: str) -> FavoriteListResponse:
        try:
            user = await require_user(self.users, email)
            rows = await self.repo.list_with_gym(user_id=user.id)
        except SQLAlchemyError:
            logger.exception("favorites_list_failed")
            return FavoriteListResponse()
        gyms = [
            FavoriteGymCard(**build_gym_card(gym).model_dump(), favorite_id=fav.id)
            for fav, gym in rows
        ]
        return FavoriteListResponse(gyms=gyms)

    async def remove(self, *, email: str, gym_id: int) -> None:
        user = await require_user(self.users, email)
        removed = await self.repo.remove(user_id=user.id, gym_id=gym_id)
        if not removed:
            raise NotFoundError("Favorite not found")
        await self.session.commit()
        logger.info("favorite_removed", user_id=user.id, gym_id=gym_id)
