from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy import select

from findmygym.models import User
from findmygym.services.users import verify_password
from tests.fixtures_seed import (
    DEMO_EMAIL,
    auth,
    create_booking,
    create_gym,
    create_review,
    create_user,
)


@pytest_asyncio.fixture
async def world(session):
    me = await create_user(session, email=DEMO_EMAIL, name="Aarav Patel")
    gym = await create_gym(session, slug="powerlift-arena", price_range="premium")
    await create_review(session, gym=gym, user=me, rating=5.0, text="Best platforms in town.")
    await create_booking(session, gym=gym, user=me)
    await create_booking(session, gym=gym, user=me, status="completed")
    await session.commit()
    return {"gym_id": gym.id, "user_id": me.id}


@pytest.mark.asyncio
async def test_signup_creates_account(app_client: AsyncClient, engine, session):
    res = await app_client.post(
        "/auth/signup",
        json={"name": " Rohan Gupta ", "email": "Rohan@Example.com", "password": "hunter22"},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "Rohan Gupta"
    assert body["email"] == "rohan@example.com"
    assert "password" not in body and "passwordHash" not in body

    user = (await session.scalars(select(User).where(User.id == body["id"]))).one()
    assert user.password_hash != "hunter22"
    assert verify_password("hunter22", user.password_hash)


@pytest.mark.asyncio
async def test_signup_duplicate_email_conflicts(app_client: AsyncClient, world):
    res = await app_client.post(
        "/auth/signup", json={"name": "Again", "email": DEMO_EMAIL, "password": "longenough"}
    )
    assert res.status_code == 409
    assert res.json()["detail"] == "An account with this email already exists"


@pytest.mark.asyncio
async def test_signup_short_password(app_client: AsyncClient, engine):
    res = await app_client.post(
        "/auth/signup", json={"name": "Short", "email": "short@example.com", "password": "1234567"}
    )
    assert res.status_code == 400
    assert "8 characters" in res.json()["detail"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"email": "a@example.com", "password": "longenough"},
        {"name": "A", "email": "not-an-email", "password": "longenough"},
        {"name": "A", "email": "a@example.com"},
    ],
)
async def test_signup_missing_or_invalid_fields(app_client: AsyncClient, engine, payload):
    res = await app_client.post("/auth/signup", json=payload)
    assert res.status_code == 400


@pytest.mark.asyncio
async def test_profile_with_counts(app_client: AsyncClient, world):
    res = await app_client.get("/user/profile", headers=auth())
    assert res.status_code == 200
    body = res.json()
    assert body["email"] == DEMO_EMAIL
    assert body["counts"] == {"reviews": 1, "favorites": 0, "bookings": 2}
    assert body["fitnessGoals"] == []


@pytest.mark.asyncio
async def test_profile_unknown_user(app_client: AsyncClient, world):
    res = await app_client.get("/user/profile", headers=auth("nobody@example.com"))
    assert res.status_code == 404
    assert res.json()["detail"] == "User not found"


@pytest.mark.asyncio
async def test_update_profile_partial(app_client: AsyncClient, world):
    res = await app_client.put(
        "/user/profile",
        json={"fitnessGoals": ["strength", "endurance"], "budgetRange": "high"},
        headers=auth(),
    )
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Aarav Patel"
    assert body["fitnessGoals"] == ["strength", "endurance"]
    assert body["budgetRange"] == "high"

    again = await app_client.get("/user/profile", headers=auth())
    assert again.json()["budgetRange"] == "high"


@pytest.mark.asyncio
async def test_update_profile_ignores_blank_name(app_client: AsyncClient, world):
    res = await app_client.put("/user/profile", json={"name": "   "}, headers=auth())
    assert res.json()["name"] == "Aarav Patel"

    renamed = await app_client.put("/user/profile", json={"name": "Aarav P."}, headers=auth())
    assert renamed.json()["name"] == "Aarav P."


@pytest.mark.asyncio
async def test_own_reviews_include_gym(app_client: AsyncClient, world):
    res = await app_client.get("/user/reviews", headers=auth())
    assert res.status_code == 200
    reviews = res.json()["reviews"]
    assert len(reviews) == 1
    assert reviews[0]["gym"]["slug"] == "powerlift-arena"
    assert reviews[0]["text"] == "Best platforms in town."
