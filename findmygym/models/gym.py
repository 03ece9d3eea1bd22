from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from findmygym.models.base import Base

if TYPE_CHECKING:
    from findmygym.models.review import Review

GYM_TYPES = ("commercial", "crossfit", "yoga", "women_only", "24x7", "budget")
PRICE_RANGES = ("budget", "mid", "premium")


class Gym(Base):
    __tablename__ = "gyms"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    slug = Column(String, unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    address = Column(String, nullable=False)
    lat = Column(Float, nullable=True)
    lng = Column(Float, nullable=True)
    phone = Column(String, nullable=True)
    website = Column(String, nullable=True)
    # budget / mid / premium
    price_range = Column(String(16), nullable=False, index=True)
    # commercial, crossfit, yoga, women_only, 24x7, budget
    type = Column(String(32), nullable=False, index=True)
    image_url = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True, server_default="1")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    hours: Mapped[list[GymHour]] = relationship(
        back_populates="gym", order_by="GymHour.day_of_week"
    )
    amenities: Mapped[list[GymAmenity]] = relationship(back_populates="gym")
    photos: Mapped[list[GymPhoto]] = relationship(back_populates="gym", order_by="GymPhoto.order")
    memberships: Mapped[list[Membership]] = relationship(
        back_populates="gym", order_by="Membership.price"
    )
    classes: Mapped[list[GymClass]] = relationship(
        back_populates="gym", order_by=lambda: [GymClass.day_of_week, GymClass.start_time]
    )
    reviews: Mapped[list[Review]] = relationship(
        back_populates="gym", order_by="Review.created_at.desc()"
    )


class GymHour(Base):
    __tablename__ = "gym_hours"

    id = Column(Integer, primary_key=True)
    gym_id = Column(Integer, ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False, index=True)
    # 0 = Sunday ... 6 = Saturday
    day_of_week = Column(Integer, nullable=False)
    open_time = Column(String(5), nullable=False)
    close_time = Column(String(5), nullable=False)
    is_closed = Column(Boolean, nullable=False, default=False, server_default="0")

    gym: Mapped[Gym] = relationship(back_populates="hours")


class GymAmenity(Base):
    __tablename__ = "gym_amenities"

    id = Column(Integer, primary_key=True)
    gym_id = Column(Integer, ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False, index=True)
    amenity_name = Column(String, nullable=False, index=True)
    icon = Column(String, nullable=True)

    gym: Mapped[Gym] = relationship(back_populates="amenities")


class GymPhoto(Base):
    __tablename__ = "gym_photos"

    id = Column(Integer, primary_key=True)
    gym_id = Column(Integer, ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String, nullable=False)
    caption = Column(String, nullable=True)
    is_primary = Column(Boolean, nullable=False, default=False, server_default="0")
    order = Column(Integer, nullable=False, default=0, server_default="0")

    gym: Mapped[Gym] = relationship(back_populates="photos")


class Membership(Base):
    __tablename__ = "memberships"

    id = Column(Integer, primary_key=True)
    gym_id = Column(Integer, ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False, index=True)
    plan_name = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    duration_months = Column(Integer, nullable=False, default=1)
    features: Mapped[list | None] = mapped_column(JSON, nullable=True)
    is_popular = Column(Boolean, nullable=False, default=False, server_default="0")

    gym: Mapped[Gym] = relationship(back_populates="memberships")


class GymClass(Base):
    __tablename__ = "gym_classes"

    id = Column(Integer, primary_key=True)
    gym_id = Column(Integer, ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False, index=True)
    class_name = Column(String, nullable=False)
    instructor = Column(String, nullable=True)
    day_of_week = Column(Integer, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    capacity = Column(Integer, nullable=True)
    category = Column(String(32), nullable=True)

    gym: Mapped[Gym] = relationship(back_populates="classes")
