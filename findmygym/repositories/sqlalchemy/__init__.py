"""SQLAlchemy implementations of repository interfaces."""

from .gym import SqlAlchemyGymReadRepository

__all__ = ["SqlAlchemyGymReadRepository"]
