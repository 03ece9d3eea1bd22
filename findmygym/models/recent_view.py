from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.sql import func

from findmygym.models.base import Base


class RecentView(Base):
    """Server-side copy of a user's recently viewed gyms."""

    __tablename__ = "recent_views"
    __table_args__ = (UniqueConstraint("user_id", "gym_id", name="uq_recent_views_user_gym"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    gym_id = Column(Integer, ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False)
    viewed_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
