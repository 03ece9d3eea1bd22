from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, relationship
from sqlalchemy.sql import func

from findmygym.models.base import Base

if TYPE_CHECKING:
    from findmygym.models.gym import Gym
    from findmygym.models.user import User


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True)
    gym_id = Column(Integer, ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    rating = Column(Float, nullable=False)
    # Category ratings are optional; averages only use reviews that carry all four
    cleanliness = Column(Float, nullable=True)
    equipment = Column(Float, nullable=True)
    staff = Column(Float, nullable=True)
    value_for_money = Column(Float, nullable=True)
    text = Column(Text, nullable=False)
    helpful_count = Column(Integer, nullable=False, default=0, server_default="0")
    is_verified = Column(Boolean, nullable=False, default=False, server_default="0")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    gym: Mapped[Gym] = relationship(back_populates="reviews")
    user: Mapped[User] = relationship(back_populates="reviews")


class ReviewHelpful(Base):
    __tablename__ = "review_helpful"
    __table_args__ = (UniqueConstraint("review_id", "user_id", name="uq_review_helpful_user"),)

    id = Column(Integer, primary_key=True)
    review_id = Column(
        Integer, ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class ReviewReport(Base):
    __tablename__ = "review_reports"
    __table_args__ = (UniqueConstraint("review_id", "user_id", name="uq_review_report_user"),)

    id = Column(Integer, primary_key=True)
    review_id = Column(
        Integer, ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    reason = Column(String, nullable=False)
    status = Column(String, nullable=False, default="open", server_default="open", index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
