# tests/fixtures_seed.py
"""Small hand-built rows for tests that need exact values."""

from __future__ import annotations

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from findmygym.models import (
    Booking,
    Gym,
    GymAmenity,
    GymHour,
    Membership,
    Review,
    User,
)

DEMO_EMAIL = "aarav@example.com"
OTHER_EMAIL = "ishita@example.com"


def auth(email: str = DEMO_EMAIL) -> dict[str, str]:
    return {"X-User-Email": email}


async def create_user(session: AsyncSession, *, email: str, name: str = "Test User") -> User:
    user = User(name=name, email=email)
    session.add(user)
    await session.flush()
    return user


async def create_gym(
    session: AsyncSession,
    *,
    slug: str,
    name: str | None = None,
    gym_type: str = "commercial",
    price_range: str = "mid",
    prices: tuple[float, ...] = (1500.0,),
    amenities: tuple[str, ...] = (),
    lat: float | None = 12.97,
    lng: float | None = 77.59,
    is_active: bool = True,
) -> Gym:
    gym = Gym(
        name=name or slug.replace("-", " ").title(),
        slug=slug,
        address=f"{slug}, Bangalore",
        lat=lat,
        lng=lng,
        price_range=price_range,
        type=gym_type,
        is_active=is_active,
    )
    session.add(gym)
    await session.flush()
    for day in range(7):
        session.add(GymHour(gym_id=gym.id, day_of_week=day, open_time="06:00", close_time="22:00"))
    for i, price in enumerate(prices):
        session.add(
            Membership(gym_id=gym.id, plan_name=f"Plan {i + 1}", price=price, duration_months=1)
        )
    for a in amenities:
        session.add(GymAmenity(gym_id=gym.id, amenity_name=a))
    await session.flush()
    return gym


async def create_review(
    session: AsyncSession,
    *,
    gym: Gym,
    user: User,
    rating: float,
    text: str = "Solid gym.",
    helpful_count: int = 0,
) -> Review:
    review = Review(
        gym_id=gym.id,
        user_id=user.id,
        rating=rating,
        text=text,
        helpful_count=helpful_count,
    )
    session.add(review)
    await session.flush()
    return review


async def create_booking(
    session: AsyncSession, *, gym: Gym, user: User, status: str = "pending"
) -> Booking:
    booking = Booking(
        user_id=user.id,
        gym_id=gym.id,
        booking_type="trial",
        date=date(2026, 1, 10),
        status=status,
    )
    session.add(booking)
    await session.flush()
    return booking
