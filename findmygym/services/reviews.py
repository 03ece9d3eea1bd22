"""Review listing, authoring and moderation use cases."""

from __future__ import annotations

from typing import Literal

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from findmygym.core.exceptions import (
    ConflictError,
    ForbiddenError,
    InfrastructureError,
    NotFoundError,
)
from findmygym.models import Review
from findmygym.repositories.review_repository import ReviewRepository
from findmygym.repositories.sqlalchemy import SqlAlchemyGymReadRepository
from findmygym.repositories.user_repository import UserRepository
from findmygym.schemas.review import ReviewCreateRequest, ReviewListResponse, ReviewOut
from findmygym.services.gym_detail import review_to_out
from findmygym.services.users import require_user
from findmygym.utils.paging import total_pages
from findmygym.utils.sort import ReviewSortKey

logger = structlog.get_logger(__name__)

REVIEW_PAGE_SIZE = 10


class ReviewService:
    def __init__(self, session: AsyncSession) -> None:
        self.repo = ReviewRepository(session)
        self.users = UserRepository(session)
        self.gyms = SqlAlchemyGymReadRepository(session)
        self.session = session

    async def list(
        self,
        *,
        gym_id: int | None = None,
        user_id: int | None = None,
        rating: int = 0,
        sort: ReviewSortKey = "recent",
        page: int = 1,
        limit: int = REVIEW_PAGE_SIZE,
    ) -> ReviewListResponse:
        try:
            items, total = await self.repo.list_page(
                gym_id=gym_id,
                user_id=user_id,
                rating=rating,
                sort=sort,
                offset=(page - 1) * limit,
                limit=limit,
            )
        except SQLAlchemyError as exc:
            logger.exception("reviews_list_failed", gym_id=gym_id, user_id=user_id)
            raise InfrastructureError("Database unavailable") from exc
        return ReviewListResponse(
            reviews=[review_to_out(r) for r in items],
            total=total,
            page=page,
            total_pages=total_pages(total, limit),
        )

    async def create(self, *, email: str, payload: ReviewCreateRequest) -> ReviewOut:
        user = await require_user(self.users, email)
        gym = await self.gyms.get_by_id(payload.gym_id)
        if gym is None:
            raise NotFoundError("Gym not found")
        review = await self.repo.create(
            gym_id=gym.id,
            user_id=user.id,
            rating=payload.rating,
            cleanliness=payload.cleanliness,
            equipment=payload.equipment,
            staff=payload.staff,
            value_for_money=payload.value_for_money,
            text=payload.text,
            is_verified=False,
        )
        await self.session.commit()
        logger.info("review_created", review_id=review.id, gym_id=gym.id, rating=review.rating)
        return review_to_out(review)

    async def _get_review(self, review_id: int) -> Review:
        review = await self.repo.get(review_id)
        if review is None:
            raise NotFoundError("Review not found")
        return review

    async def delete(self, *, email: str, review_id: int) -> None:
        user = await require_user(self.users, email)
        review = await self._get_review(review_id)
        if review.user_id != user.id:
            raise ForbiddenError("Not authorized to delete this review")
        await self.repo.delete(review.id)
        await self.session.commit()
        logger.info("review_deleted", review_id=review_id)

    async def toggle_helpful(self, *, email: str, review_id: int) -> Literal["added", "removed"]:
        user = await require_user(self.users, email)
        review = await self._get_review(review_id)
        vote = await self.repo.get_helpful(review_id=review.id, user_id=user.id)
        try:
            if vote is not None:
                await self.repo.remove_helpful(vote)
                action: Literal["added", "removed"] = "removed"
            else:
                await self.repo.add_helpful(review_id=review.id, user_id=user.id)
                action = "added"
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError("Vote already recorded") from exc
        logger.info("review_helpful_toggled", review_id=review_id, action=action)
        return action

    async def report(self, *, email: str, review_id: int, reason: str) -> None:
        user = await require_user(self.users, email)
        review = await self._get_review(review_id)
        if await self.repo.get_report(review_id=review.id, user_id=user.id) is not None:
            raise ConflictError("Already reported")
        try:
            await self.repo.add_report(review_id=review.id, user_id=user.id, reason=reason)
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError("Already reported") from exc
        logger.info("review_reported", review_id=review_id)
