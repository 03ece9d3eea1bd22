from __future__ import annotations

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from findmygym.core.exceptions import ForbiddenError, NotFoundError, ValidationError
from findmygym.models import BOOKING_STATUSES, Booking, Gym
from findmygym.repositories.booking_repository import BookingRepository
from findmygym.repositories.sqlalchemy import SqlAlchemyGymReadRepository
from findmygym.repositories.user_repository import UserRepository
from findmygym.schemas.booking import (
    BookingCreateRequest,
    BookingGymRef,
    BookingListResponse,
    BookingOut,
)
from findmygym.services.users import require_user

logger = structlog.get_logger(__name__)


def _booking_out(booking: Booking, gym: Gym | None) -> BookingOut:
    ref = None
    if gym is not None:
        ref = BookingGymRef(
            name=gym.name,
            slug=gym.slug,
            address=gym.address,
            image_url=gym.image_url,
            phone=gym.phone,
        )
    return BookingOut(
        id=booking.id,
        user_id=booking.user_id,
        gym_id=booking.gym_id,
        booking_type=booking.booking_type,
        date=booking.date,
        time_slot=booking.time_slot,
        notes=booking.notes,
        status=booking.status,
        created_at=booking.created_at,
        gym=ref,
    )


class BookingService:
    def __init__(self, session: AsyncSession) -> None:
        self.repo = BookingRepository(session)
        self.users = UserRepository(session)
        self.gyms = SqlAlchemyGymReadRepository(session)
        self.session = session

    async def list(self, *, email: str) -> BookingListResponse:
        try:
            user = await require_user(self.users, email)
            rows = await self.repo.list_with_gym(user_id=user.id)
        except SQLAlchemyError:
            logger.exception("bookings_list_failed")
            return BookingListResponse()
        return BookingListResponse(bookings=[_booking_out(b, g) for b, g in rows])

    async def create(self, *, email: str, payload: BookingCreateRequest) -> BookingOut:
        user = await require_user(self.users, email)
        gym = await self.gyms.get_by_id(payload.gym_id)
        if gym is None:
            raise NotFoundError("Gym not found")
        booking = await self.repo.create(
            user_id=user.id,
            gym_id=gym.id,
            booking_type=payload.booking_type,
            on_date=payload.date,
            time_slot=payload.time_slot,
            notes=payload.notes,
        )
        await self.session.commit()
        logger.info(
            "booking_created",
            booking_id=booking.id,
            user_id=user.id,
            gym_id=gym.id,
            booking_type=booking.booking_type,
        )
        return _booking_out(booking, gym)

    async def update_status(self, *, email: str, booking_id: int, status: str | None) -> BookingOut:
        user = await require_user(self.users, email)
        booking = await self.repo.get(booking_id)
        if booking is None:
            raise NotFoundError("Booking not found")
        if booking.user_id != user.id:
            raise ForbiddenError("Not authorized")
        if not status or status not in BOOKING_STATUSES:
            raise ValidationError("Invalid status")

        previous = booking.status
        booking = await self.repo.set_status(booking, status)
        await self.session.commit()
        logger.info(
            "booking_status_changed",
            booking_id=booking.id,
            from_status=previous,
            to_status=status,
        )
        gym = await self.gyms.get_by_id(booking.gym_id)
        return _booking_out(booking, gym)
