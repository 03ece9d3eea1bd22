from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import AsyncClient

from tests.fixtures_seed import DEMO_EMAIL, auth, create_gym, create_user


@pytest_asyncio.fixture
async def gyms(session):
    await create_user(session, email=DEMO_EMAIL)
    alpha = await create_gym(session, slug="alpha-gym", amenities=("Sauna",))
    bravo = await create_gym(session, slug="bravo-gym", prices=(900.0, 400.0))
    hidden = await create_gym(session, slug="closed-gym", is_active=False)
    await session.commit()
    return {"alpha": alpha.id, "bravo": bravo.id, "hidden": hidden.id}


@pytest.mark.asyncio
async def test_favorites_require_identity(app_client: AsyncClient, gyms):
    res = await app_client.get("/favorites")
    assert res.status_code == 401
    assert res.json() == {"detail": "Unauthorized"}


@pytest.mark.asyncio
async def test_unknown_user_is_404(app_client: AsyncClient, gyms):
    res = await app_client.post(
        "/favorites", json={"gymId": gyms["alpha"]}, headers=auth("ghost@example.com")
    )
    assert res.status_code == 404
    assert res.json()["detail"] == "User not found"


@pytest.mark.asyncio
async def test_add_list_remove(app_client: AsyncClient, gyms):
    r1 = await app_client.post("/favorites", json={"gymId": gyms["alpha"]}, headers=auth())
    assert r1.status_code == 201
    assert r1.json()["gymId"] == gyms["alpha"]

    r2 = await app_client.post("/favorites", json={"gymId": gyms["bravo"]}, headers=auth())
    assert r2.status_code == 201

    listed = await app_client.get("/favorites", headers=auth())
    assert listed.status_code == 200
    cards = listed.json()["gyms"]
    assert {c["slug"] for c in cards} == {"alpha-gym", "bravo-gym"}
    bravo = next(c for c in cards if c["slug"] == "bravo-gym")
    assert bravo["lowestPrice"] == 400.0
    assert bravo["favoriteId"] == r2.json()["id"]

    removed = await app_client.delete(
        "/favorites", params={"gymId": gyms["alpha"]}, headers=auth()
    )
    assert removed.status_code == 200
    assert removed.json() == {"success": True}

    listed = await app_client.get("/favorites", headers=auth())
    assert [c["slug"] for c in listed.json()["gyms"]] == ["bravo-gym"]


@pytest.mark.asyncio
async def test_duplicate_favorite_conflicts(app_client: AsyncClient, gyms):
    await app_client.post("/favorites", json={"gymId": gyms["alpha"]}, headers=auth())
    res = await app_client.post("/favorites", json={"gymId": gyms["alpha"]}, headers=auth())
    assert res.status_code == 409
    assert res.json()["detail"] == "Already favorited"


@pytest.mark.asyncio
async def test_cannot_favorite_missing_or_inactive_gym(app_client: AsyncClient, gyms):
    missing = await app_client.post("/favorites", json={"gymId": 9999}, headers=auth())
    inactive = await app_client.post("/favorites", json={"gymId": gyms["hidden"]}, headers=auth())
    assert missing.status_code == 404
    assert inactive.status_code == 404
    assert missing.json()["detail"] == "Gym not found"


@pytest.mark.asyncio
async def test_remove_missing_favorite_is_404(app_client: AsyncClient, gyms):
    res = await app_client.delete("/favorites", params={"gymId": gyms["alpha"]}, headers=auth())
    assert res.status_code == 404
    assert res.json()["detail"] == "Favorite not found"


@pytest.mark.asyncio
async def test_add_requires_gym_id(app_client: AsyncClient, gyms):
    res = await app_client.post("/favorites", json={}, headers=auth())
    assert res.status_code == 400
    assert res.json()["detail"].startswith("Invalid request")
