from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import AsyncClient

from tests.fixtures_seed import (
    DEMO_EMAIL,
    OTHER_EMAIL,
    auth,
    create_booking,
    create_gym,
    create_user,
)


@pytest_asyncio.fixture
async def world(session):
    owner = await create_user(session, email=DEMO_EMAIL)
    other = await create_user(session, email=OTHER_EMAIL)
    gym = await create_gym(session, slug="flexzone-crossfit", gym_type="crossfit")
    others_booking = await create_booking(session, gym=gym, user=other)
    await session.commit()
    return {"gym_id": gym.id, "owner_id": owner.id, "others_booking": others_booking.id}


async def _book(client: AsyncClient, gym_id: int, **extra):
    payload = {"gymId": gym_id, "bookingType": "trial", "date": "2026-11-02", **extra}
    return await client.post("/bookings", json=payload, headers=auth())


@pytest.mark.asyncio
async def test_create_booking_is_pending(app_client: AsyncClient, world):
    res = await _book(app_client, world["gym_id"], timeSlot=" 18:00 ", notes="   ")
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == "pending"
    assert body["bookingType"] == "trial"
    assert body["date"] == "2026-11-02"
    assert body["timeSlot"] == "18:00"
    assert body["notes"] is None
    assert body["userId"] == world["owner_id"]
    assert body["gym"]["slug"] == "flexzone-crossfit"


@pytest.mark.asyncio
async def test_create_booking_validates_payload(app_client: AsyncClient, world):
    bad_type = await _book(app_client, world["gym_id"], bookingType="massage")
    bad_date = await _book(app_client, world["gym_id"], date="next week")
    assert bad_type.status_code == 400
    assert bad_date.status_code == 400


@pytest.mark.asyncio
async def test_create_booking_for_unknown_gym(app_client: AsyncClient, world):
    res = await _book(app_client, 9999)
    assert res.status_code == 404
    assert res.json()["detail"] == "Gym not found"


@pytest.mark.asyncio
async def test_bookings_need_identity(app_client: AsyncClient, world):
    res = await app_client.get("/bookings")
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_list_only_own_bookings_newest_first(app_client: AsyncClient, world):
    first = await _book(app_client, world["gym_id"])
    second = await _book(app_client, world["gym_id"], bookingType="visit")

    res = await app_client.get("/bookings", headers=auth())
    assert res.status_code == 200
    ids = [b["id"] for b in res.json()["bookings"]]
    assert ids == [second.json()["id"], first.json()["id"]]


@pytest.mark.asyncio
async def test_owner_can_change_status(app_client: AsyncClient, world):
    booking = (await _book(app_client, world["gym_id"])).json()

    res = await app_client.patch(
        f"/bookings/{booking['id']}", json={"status": "cancelled"}, headers=auth()
    )
    assert res.status_code == 200
    assert res.json()["status"] == "cancelled"
    assert res.json()["gym"]["slug"] == "flexzone-crossfit"


@pytest.mark.asyncio
async def test_cannot_change_someone_elses_booking(app_client: AsyncClient, world):
    res = await app_client.patch(
        f"/bookings/{world['others_booking']}", json={"status": "cancelled"}, headers=auth()
    )
    assert res.status_code == 403
    assert res.json()["detail"] == "Not authorized"


@pytest.mark.asyncio
async def test_ownership_is_checked_before_status(app_client: AsyncClient, world):
    res = await app_client.patch(
        f"/bookings/{world['others_booking']}", json={"status": "bogus"}, headers=auth()
    )
    assert res.status_code == 403


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"status": "bogus"}, {}])
async def test_invalid_status_is_400(app_client: AsyncClient, world, payload):
    booking = (await _book(app_client, world["gym_id"])).json()
    res = await app_client.patch(f"/bookings/{booking['id']}", json=payload, headers=auth())
    assert res.status_code == 400
    assert res.json()["detail"] == "Invalid status"


@pytest.mark.asyncio
async def test_missing_booking_is_404(app_client: AsyncClient, world):
    res = await app_client.patch("/bookings/9999", json={"status": "confirmed"}, headers=auth())
    assert res.status_code == 404
    assert res.json()["detail"] == "Booking not found"
