from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from findmygym.models.base import Base

if TYPE_CHECKING:
    from findmygym.models.review import Review


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=True)
    avatar = Column(String, nullable=True)
    fitness_goals: Mapped[list | None] = mapped_column(JSON, nullable=True)
    preferred_workouts: Mapped[list | None] = mapped_column(JSON, nullable=True)
    # low / medium / high
    budget_range = Column(String(16), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    reviews: Mapped[list[Review]] = relationship(back_populates="user")
