from __future__ import annotations

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from findmygym.models import Review, ReviewHelpful, ReviewReport
from findmygym.utils.sort import ReviewSortKey

_ORDERINGS = {
    "recent": (Review.created_at.desc(), Review.id.desc()),
    "highest": (Review.rating.desc(), Review.id.desc()),
    "lowest": (Review.rating.asc(), Review.id.desc()),
    "helpful": (Review.helpful_count.desc(), Review.id.desc()),
}


class ReviewRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _filtered(self, stmt, *, gym_id: int | None, user_id: int | None, rating: int):
        if gym_id is not None:
            stmt = stmt.where(Review.gym_id == gym_id)
        if user_id is not None:
            stmt = stmt.where(Review.user_id == user_id)
        if rating > 0:
            # star bucket: rating=4 matches 4.0 <= r < 5.0
            stmt = stmt.where(Review.rating >= rating, Review.rating < rating + 1)
        return stmt

    async def list_page(
        self,
        *,
        gym_id: int | None,
        user_id: int | None,
        rating: int,
        sort: ReviewSortKey,
        offset: int,
        limit: int,
    ) -> tuple[list[Review], int]:
        stmt = self._filtered(
            select(Review).options(selectinload(Review.user)),
            gym_id=gym_id,
            user_id=user_id,
            rating=rating,
        )
        stmt = stmt.order_by(*_ORDERINGS[sort]).offset(offset).limit(limit)
        count_stmt = self._filtered(
            select(func.count()).select_from(Review),
            gym_id=gym_id,
            user_id=user_id,
            rating=rating,
        )
        items = list((await self._session.scalars(stmt)).all())
        total = int((await self._session.scalar(count_stmt)) or 0)
        return items, total

    async def list_for_user_with_gym(self, user_id: int) -> list[Review]:
        stmt = (
            select(Review)
            .where(Review.user_id == user_id)
            .options(selectinload(Review.gym))
            .order_by(Review.created_at.desc(), Review.id.desc())
        )
        return list((await self._session.scalars(stmt)).all())

    async def get(self, review_id: int) -> Review | None:
        return await self._session.get(Review, review_id)

    async def create(self, **fields) -> Review:
        review = Review(**fields)
        self._session.add(review)
        await self._session.flush()
        stmt = select(Review).where(Review.id == review.id).options(selectinload(Review.user))
        return (await self._session.scalars(stmt)).one()

    async def delete(self, review_id: int) -> None:
        # votes and reports go first; ON DELETE CASCADE is not assumed
        await self._session.execute(
            delete(ReviewHelpful).where(ReviewHelpful.review_id == review_id)
        )
        await self._session.execute(
            delete(ReviewReport).where(ReviewReport.review_id == review_id)
        )
        await self._session.execute(delete(Review).where(Review.id == review_id))

    async def count_for_user(self, user_id: int) -> int:
        stmt = select(func.count()).select_from(Review).where(Review.user_id == user_id)
        return int((await self._session.scalar(stmt)) or 0)

    async def get_helpful(self, *, review_id: int, user_id: int) -> ReviewHelpful | None:
        stmt = select(ReviewHelpful).where(
            ReviewHelpful.review_id == review_id, ReviewHelpful.user_id == user_id
        )
        return (await self._session.scalars(stmt)).first()

    async def add_helpful(self, *, review_id: int, user_id: int) -> None:
        self._session.add(ReviewHelpful(review_id=review_id, user_id=user_id))
        await self._session.execute(
            update(Review)
            .where(Review.id == review_id)
            .values(helpful_count=Review.helpful_count + 1)
        )

    async def remove_helpful(self, vote: ReviewHelpful) -> None:
        await self._session.execute(delete(ReviewHelpful).where(ReviewHelpful.id == vote.id))
        await self._session.execute(
            update(Review)
            .where(Review.id == vote.review_id, Review.helpful_count > 0)
            .values(helpful_count=Review.helpful_count - 1)
        )

    async def get_report(self, *, review_id: int, user_id: int) -> ReviewReport | None:
        stmt = select(ReviewReport).where(
            ReviewReport.review_id == review_id, ReviewReport.user_id == user_id
        )
        return (await self._session.scalars(stmt)).first()

    async def add_report(self, *, review_id: int, user_id: int, reason: str) -> ReviewReport:
        report = ReviewReport(review_id=review_id, user_id=user_id, reason=reason)
        self._session.add(report)
        await self._session.flush()
        return report
