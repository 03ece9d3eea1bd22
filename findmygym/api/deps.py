"""API dependency helpers and service providers."""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from findmygym import db
from findmygym.core.config import get_settings
from findmygym.core.exceptions import UnauthorizedError
from findmygym.db import get_async_session
from findmygym.infra.unit_of_work import SqlAlchemyUnitOfWork
from findmygym.services.bookings import BookingService
from findmygym.services.deals import DealService
from findmygym.services.favorites import FavoriteService
from findmygym.services.gym_detail import GymDetailService
from findmygym.services.gym_search import GymSearchService
from findmygym.services.history import HistoryService
from findmygym.services.reviews import ReviewService
from findmygym.services.users import UserService

__all__ = [
    "get_async_session",
    "get_current_email",
    "get_gym_search_service",
    "get_gym_detail_service",
    "get_booking_service",
    "get_deal_service",
    "get_favorite_service",
    "get_history_service",
    "get_review_service",
    "get_user_service",
]


def get_current_email(request: Request) -> str:
    """Email of the caller as forwarded by the upstream auth layer."""
    header = get_settings().auth_email_header
    email = (request.headers.get(header) or "").strip().lower()
    if not email:
        raise UnauthorizedError("Unauthorized")
    return email


# --- Service providers for DI ---


def _uow_factory() -> SqlAlchemyUnitOfWork:
    # looked up per call so a reconfigured engine takes effect
    return SqlAlchemyUnitOfWork(db.SessionLocal)


def get_gym_search_service() -> GymSearchService:
    return GymSearchService(_uow_factory)


def get_gym_detail_service() -> GymDetailService:
    return GymDetailService(_uow_factory)


def get_booking_service(session: AsyncSession = Depends(get_async_session)) -> BookingService:
    return BookingService(session)


def get_deal_service(session: AsyncSession = Depends(get_async_session)) -> DealService:
    return DealService(session)


def get_favorite_service(session: AsyncSession = Depends(get_async_session)) -> FavoriteService:
    return FavoriteService(session)


def get_history_service(session: AsyncSession = Depends(get_async_session)) -> HistoryService:
    return HistoryService(session)


def get_review_service(session: AsyncSession = Depends(get_async_session)) -> ReviewService:
    return ReviewService(session)


def get_user_service(session: AsyncSession = Depends(get_async_session)) -> UserService:
    return UserService(session)
