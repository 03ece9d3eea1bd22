from __future__ import annotations

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.sql import func

from findmygym.models.base import Base

BOOKING_STATUSES = ("pending", "confirmed", "cancelled", "completed")
BOOKING_TYPES = ("trial", "visit", "inquiry")


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    gym_id = Column(Integer, ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False, index=True)
    booking_type = Column(String(32), nullable=False)
    date = Column(Date, nullable=False)
    time_slot = Column(String(32), nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(String(16), nullable=False, default="pending", server_default="pending")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
