from __future__ import annotations

from datetime import timedelta

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy import update

from findmygym.models import Deal, Gym
from findmygym.services.history import HISTORY_LIMIT
from findmygym.utils.datetime import utcnow
from tests.fixtures_seed import DEMO_EMAIL, auth, create_gym, create_user


@pytest_asyncio.fixture
async def gyms(session):
    await create_user(session, email=DEMO_EMAIL)
    ids = []
    for i in range(12):
        gym = await create_gym(session, slug=f"gym-{i:02d}")
        ids.append(gym.id)
    await session.commit()
    return ids


def _deal(gym_id: int, discount: float, *, starts: int, ends: int, active: bool = True) -> Deal:
    now = utcnow()
    return Deal(
        gym_id=gym_id,
        title=f"{int(discount)}% off",
        discount=discount,
        valid_from=now + timedelta(days=starts),
        valid_until=now + timedelta(days=ends),
        is_active=active,
    )


@pytest.mark.asyncio
async def test_deals_only_current_biggest_first(app_client: AsyncClient, session, gyms):
    session.add_all(
        [
            _deal(gyms[0], 10, starts=-1, ends=5),
            _deal(gyms[1], 30, starts=-3, ends=3),
            _deal(gyms[2], 50, starts=-10, ends=-1),
            _deal(gyms[3], 40, starts=2, ends=9),
            _deal(gyms[4], 60, starts=-1, ends=5, active=False),
        ]
    )
    await session.commit()

    res = await app_client.get("/deals")
    assert res.status_code == 200
    deals = res.json()["deals"]
    assert [d["discount"] for d in deals] == [30.0, 10.0]
    assert deals[0]["gym"]["slug"] == "gym-01"


@pytest.mark.asyncio
async def test_deals_capped_at_six(app_client: AsyncClient, session, gyms):
    session.add_all([_deal(gid, 5 + i, starts=-1, ends=1) for i, gid in enumerate(gyms[:8])])
    await session.commit()

    res = await app_client.get("/deals")
    assert len(res.json()["deals"]) == 6


@pytest.mark.asyncio
async def test_seeded_deals_are_listed(app_client: AsyncClient, seeded):
    res = await app_client.get("/deals")
    deals = res.json()["deals"]
    assert deals
    discounts = [d["discount"] for d in deals]
    assert discounts == sorted(discounts, reverse=True)


@pytest.mark.asyncio
async def test_history_starts_empty(app_client: AsyncClient, gyms):
    res = await app_client.get("/me/history", headers=auth())
    assert res.status_code == 200
    assert res.json() == {"gyms": []}


@pytest.mark.asyncio
async def test_history_most_recent_first(app_client: AsyncClient, gyms):
    await app_client.post("/me/history", json={"gymIds": [gyms[1], gyms[0]]}, headers=auth())
    res = await app_client.post("/me/history", json={"gymId": gyms[2]}, headers=auth())
    assert res.status_code == 200
    assert [g["id"] for g in res.json()["gyms"]] == [gyms[2], gyms[1], gyms[0]]

    # viewing an old entry again moves it to the front
    res = await app_client.post("/me/history", json={"gymId": gyms[0]}, headers=auth())
    assert [g["id"] for g in res.json()["gyms"]] == [gyms[0], gyms[2], gyms[1]]


@pytest.mark.asyncio
async def test_history_is_capped(app_client: AsyncClient, gyms):
    res = await app_client.post("/me/history", json={"gymIds": gyms}, headers=auth())
    ids = [g["id"] for g in res.json()["gyms"]]
    assert len(ids) == HISTORY_LIMIT
    assert ids == gyms[:HISTORY_LIMIT]


@pytest.mark.asyncio
async def test_history_ignores_unknown_ids(app_client: AsyncClient, gyms):
    res = await app_client.post("/me/history", json={"gymIds": [9999, gyms[3]]}, headers=auth())
    assert [g["id"] for g in res.json()["gyms"]] == [gyms[3]]

    only_unknown = await app_client.post("/me/history", json={"gymId": 9999}, headers=auth())
    assert only_unknown.status_code == 404


@pytest.mark.asyncio
async def test_history_skips_inactive_gyms(app_client: AsyncClient, session, gyms):
    await app_client.post("/me/history", json={"gymIds": [gyms[1], gyms[0]]}, headers=auth())
    closed = await create_gym(session, slug="closed-gym", is_active=False)
    await session.execute(update(Gym).where(Gym.id == gyms[1]).values(is_active=False))
    await session.commit()

    res = await app_client.get("/me/history", headers=auth())
    assert [g["id"] for g in res.json()["gyms"]] == [gyms[0]]

    rejected = await app_client.post("/me/history", json={"gymId": closed.id}, headers=auth())
    assert rejected.status_code == 404


@pytest.mark.asyncio
async def test_history_payload_needs_an_id(app_client: AsyncClient, gyms):
    res = await app_client.post("/me/history", json={}, headers=auth())
    assert res.status_code == 400
