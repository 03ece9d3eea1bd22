from __future__ import annotations

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from findmygym.repositories.deal_repository import DealRepository
from findmygym.schemas.deal import DealGymRef, DealListResponse, DealOut
from findmygym.utils.datetime import utcnow

logger = structlog.get_logger(__name__)

DEALS_LIMIT = 6


class DealService:
    def __init__(self, session: AsyncSession) -> None:
        self.repo = DealRepository(session)

    async def active(self, limit: int = DEALS_LIMIT) -> DealListResponse:
        """Deals whose validity window contains now, biggest discount first."""
        try:
            rows = await self.repo.list_active(now=utcnow(), limit=limit)
        except SQLAlchemyError:
            logger.exception("deals_list_failed")
            return DealListResponse()
        return DealListResponse(
            deals=[
                DealOut(
                    id=d.id,
                    gym_id=d.gym_id,
                    title=d.title,
                    description=d.description,
                    discount=d.discount,
                    valid_from=d.valid_from,
                    valid_until=d.valid_until,
                    gym=DealGymRef(
                        name=g.name, slug=g.slug, image_url=g.image_url, address=g.address
                    ),
                )
                for d, g in rows
            ]
        )
