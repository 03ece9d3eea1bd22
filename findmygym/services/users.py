"""Sign-up, profile and own-review use cases."""

from __future__ import annotations

import bcrypt
import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from findmygym.core.exceptions import ConflictError, NotFoundError, ValidationError
from findmygym.models import User
from findmygym.repositories.booking_repository import BookingRepository
from findmygym.repositories.favorite_repository import FavoriteRepository
from findmygym.repositories.review_repository import ReviewRepository
from findmygym.repositories.user_repository import UserRepository
from findmygym.schemas.review import UserReviewsResponse
from findmygym.schemas.user import (
    MIN_PASSWORD_LENGTH,
    ProfileCounts,
    ProfileOut,
    ProfileUpdateRequest,
    SignupRequest,
    SignupResponse,
)
from findmygym.services.gym_detail import review_to_out

logger = structlog.get_logger(__name__)

BCRYPT_ROUNDS = 12


async def require_user(users: UserRepository, email: str) -> User:
    """Resolve the authenticated caller to a user row."""
    user = await users.get_by_email(email)
    if user is None:
        raise NotFoundError("User not found")
    return user


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))


def _profile(user: User, counts: ProfileCounts | None = None) -> ProfileOut:
    return ProfileOut(
        id=user.id,
        name=user.name,
        email=user.email,
        avatar=user.avatar,
        fitness_goals=list(user.fitness_goals or []),
        preferred_workouts=list(user.preferred_workouts or []),
        budget_range=user.budget_range,
        created_at=user.created_at,
        counts=counts,
    )


class UserService:
    def __init__(self, session: AsyncSession, *, bcrypt_rounds: int = BCRYPT_ROUNDS) -> None:
        self.session = session
        self.users = UserRepository(session)
        self._rounds = bcrypt_rounds

    async def signup(self, payload: SignupRequest) -> SignupResponse:
        if len(payload.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
            )
        if await self.users.get_by_email(payload.email) is not None:
            raise ConflictError("An account with this email already exists")

        try:
            user = await self.users.create(
                name=payload.name,
                email=payload.email,
                password_hash=hash_password(payload.password, self._rounds),
            )
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            raise ConflictError("An account with this email already exists") from exc

        logger.info("user_signed_up", user_id=user.id)
        return SignupResponse(id=user.id, name=user.name, email=user.email)

    async def profile(self, email: str) -> ProfileOut:
        user = await require_user(self.users, email)
        counts = ProfileCounts(
            reviews=await ReviewRepository(self.session).count_for_user(user.id),
            favorites=await FavoriteRepository(self.session).count_for_user(user.id),
            bookings=await BookingRepository(self.session).count_for_user(user.id),
        )
        return _profile(user, counts)

    async def update_profile(self, email: str, payload: ProfileUpdateRequest) -> ProfileOut:
        user = await require_user(self.users, email)
        supplied = payload.model_fields_set
        fields: dict[str, object] = {}
        if payload.name and payload.name.strip():
            fields["name"] = payload.name.strip()
        for key in ("fitness_goals", "preferred_workouts", "budget_range"):
            if key in supplied:
                fields[key] = getattr(payload, key)
        if fields:
            user = await self.users.update(user, **fields)
            await self.session.commit()
            logger.info("profile_updated", user_id=user.id, fields=sorted(fields))
        return _profile(user)

    async def reviews(self, email: str) -> UserReviewsResponse:
        try:
            user = await require_user(self.users, email)
            rows = await ReviewRepository(self.session).list_for_user_with_gym(user.id)
        except SQLAlchemyError:
            logger.exception("user_reviews_failed")
            return UserReviewsResponse()
        return UserReviewsResponse(
            reviews=[review_to_out(r, with_user=False, with_gym=True) for r in rows]
        )
