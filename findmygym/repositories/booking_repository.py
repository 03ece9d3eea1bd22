from __future__ import annotations

from datetime import date

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from findmygym.models import Booking, Gym


class BookingRepository:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_with_gym(self, *, user_id: int) -> list[tuple[Booking, Gym]]:
        stmt = (
            select(Booking, Gym)
            .join(Gym, Gym.id == Booking.gym_id)
            .where(Booking.user_id == user_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
        )
        rows = (await self._session.execute(stmt)).all()
        return [(b, g) for b, g in rows]

    async def get(self, booking_id: int) -> Booking | None:
        return await self._session.get(Booking, booking_id)

    async def create(
        self,
        *,
        user_id: int,
        gym_id: int,
        booking_type: str,
        on_date: date,
        time_slot: str | None,
        notes: str | None,
    ) -> Booking:
        booking = Booking(
            user_id=user_id,
            gym_id=gym_id,
            booking_type=booking_type,
            date=on_date,
            time_slot=time_slot,
            notes=notes,
            status="pending",
        )
        self._session.add(booking)
        await self._session.flush()
        await self._session.refresh(booking)
        return booking

    async def set_status(self, booking: Booking, status: str) -> Booking:
        booking.status = status
        await self._session.flush()
        await self._session.refresh(booking)
        return booking

    async def count_for_user(self, user_id: int) -> int:
        stmt = select(func.count()).select_from(Booking).where(Booking.user_id == user_id)
        return int((await self._session.scalar(stmt)) or 0)
