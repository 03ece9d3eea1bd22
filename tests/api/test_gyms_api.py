from __future__ import annotations

import pytest
from httpx import AsyncClient
from sqlalchemy import update

from findmygym.models import Gym


@pytest.mark.asyncio
async def test_list_first_page_defaults(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms")
    assert res.status_code == 200
    body = res.json()
    assert body["total"] == 20
    assert body["page"] == 1
    assert body["totalPages"] == 2
    assert len(body["gyms"]) == 12

    ratings = [g["rating"] for g in body["gyms"]]
    assert ratings == sorted(ratings, reverse=True)
    card = body["gyms"][0]
    for key in ("id", "slug", "name", "priceRange", "type", "reviewCount", "lowestPrice", "hours"):
        assert key in card


@pytest.mark.asyncio
async def test_list_second_page_has_remainder(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms", params={"page": 2, "limit": 12})
    assert res.status_code == 200
    body = res.json()
    assert len(body["gyms"]) == 8
    assert body["totalPages"] == 2


@pytest.mark.asyncio
async def test_list_page_past_end_is_empty(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms", params={"page": 9})
    assert res.status_code == 200
    assert res.json()["gyms"] == []
    assert res.json()["total"] == 20


@pytest.mark.asyncio
async def test_filter_by_type(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms", params={"type": "crossfit"})
    slugs = {g["slug"] for g in res.json()["gyms"]}
    assert slugs == {"flexzone-crossfit", "crossfit-inferno"}


@pytest.mark.asyncio
async def test_filter_by_price_range(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms", params={"priceRange": "budget"})
    gyms = res.json()["gyms"]
    assert len(gyms) == 4
    assert all(g["priceRange"] == "budget" for g in gyms)


@pytest.mark.asyncio
async def test_search_by_name_is_case_insensitive(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms", params={"q": "YOGA"})
    names = sorted(g["name"] for g in res.json()["gyms"])
    assert names == ["Sunrise Yoga Shala", "Zen Yoga Studio"]


@pytest.mark.asyncio
@pytest.mark.parametrize("q", ["%", "_", "I_on", "%Paradise"])
async def test_search_treats_wildcards_literally(app_client: AsyncClient, seeded, q):
    res = await app_client.get("/gyms", params={"q": q})
    assert res.status_code == 200
    assert res.json()["total"] == 0


@pytest.mark.asyncio
async def test_search_matches_literal_punctuation(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms", params={"q": "24/7"})
    assert [g["name"] for g in res.json()["gyms"]] == ["24/7 Fitness Hub"]


@pytest.mark.asyncio
async def test_filter_by_amenity(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms", params={"amenities": "Sauna", "limit": 100})
    gyms = res.json()["gyms"]
    assert gyms
    assert all("Sauna" in g["amenities"] for g in gyms)


@pytest.mark.asyncio
async def test_min_rating_applies_after_aggregation(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms", params={"minRating": 4, "limit": 100})
    body = res.json()
    assert all(g["rating"] >= 4 for g in body["gyms"])
    assert body["total"] == len(body["gyms"])


@pytest.mark.asyncio
async def test_sort_by_name(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms", params={"sort": "name", "limit": 3})
    assert res.json()["gyms"][0]["name"] == "24/7 Fitness Hub"


@pytest.mark.asyncio
async def test_sort_by_price_low(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms", params={"sort": "price_low", "limit": 100})
    prices = [g["lowestPrice"] for g in res.json()["gyms"]]
    assert prices == sorted(prices)
    assert prices[0] == 100.0


@pytest.mark.asyncio
async def test_sort_by_distance_from_origin(app_client: AsyncClient, seeded):
    res = await app_client.get(
        "/gyms", params={"sort": "distance", "lat": 12.9716, "lng": 77.5946, "limit": 5}
    )
    assert res.status_code == 200
    gyms = res.json()["gyms"]
    assert gyms[0]["slug"] == "iron-paradise-fitness"
    assert gyms[0]["distanceKm"] == 0.0
    distances = [g["distanceKm"] for g in gyms]
    assert distances == sorted(distances)


@pytest.mark.asyncio
async def test_sort_by_distance_requires_origin(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms", params={"sort": "distance"})
    assert res.status_code == 400


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [{"limit": 0}, {"limit": 101}, {"page": 0}, {"type": "spa"}, {"minRating": 6}],
)
async def test_list_rejects_invalid_query(app_client: AsyncClient, seeded, params):
    res = await app_client.get("/gyms", params=params)
    assert res.status_code == 400


@pytest.mark.asyncio
async def test_inactive_gyms_are_hidden(app_client: AsyncClient, seeded, session):
    await session.execute(
        update(Gym).where(Gym.slug == "musclefactory").values(is_active=False)
    )
    await session.commit()

    res = await app_client.get("/gyms", params={"limit": 100})
    assert res.json()["total"] == 19
    assert "musclefactory" not in {g["slug"] for g in res.json()["gyms"]}


@pytest.mark.asyncio
async def test_detail_returns_every_section(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms/iron-paradise-fitness")
    assert res.status_code == 200
    body = res.json()
    assert body["name"] == "Iron Paradise Fitness"
    assert len(body["hours"]) == 7
    assert [m["planName"] for m in body["memberships"]] == [
        "Day Pass",
        "Monthly",
        "Quarterly",
        "Annual",
    ]
    assert body["lowestPrice"] == 400.0
    assert body["photos"][0]["isPrimary"] is True
    assert body["classes"]
    assert 3 <= body["reviewCount"] <= 7
    assert sum(body["ratingDistribution"]) == body["reviewCount"]
    assert set(body["categoryRatings"]) == {"cleanliness", "equipment", "staff", "valueForMoney"}
    assert "isOpen" in body["openStatus"]
    assert body["reviews"][0]["user"]["name"]


@pytest.mark.asyncio
async def test_budget_gym_has_no_classes(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms/fitbudget-gym")
    body = res.json()
    assert body["classes"] == []
    assert body["lowestPrice"] == 100.0
    assert 4 <= len(body["amenities"]) <= 6


@pytest.mark.asyncio
async def test_detail_unknown_slug_is_404(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms/no-such-gym")
    assert res.status_code == 404
    assert res.json() == {"detail": "Gym not found"}


@pytest.mark.asyncio
async def test_featured_is_six_top_rated(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms/featured")
    assert res.status_code == 200
    gyms = res.json()["gyms"]
    assert len(gyms) == 6
    ratings = [g["rating"] for g in gyms]
    assert ratings == sorted(ratings, reverse=True)


@pytest.mark.asyncio
async def test_compare_takes_first_three_slugs(app_client: AsyncClient, seeded):
    res = await app_client.get(
        "/gyms/compare",
        params={"slugs": "zen-yoga-studio,fitbudget-gym,powerlift-arena,musclefactory"},
    )
    assert res.status_code == 200
    body = res.json()
    assert [g["slug"] for g in body["gyms"]] == [
        "zen-yoga-studio",
        "fitbudget-gym",
        "powerlift-arena",
    ]
    union = {a for g in body["gyms"] for a in g["amenities"]}
    assert body["amenities"] == sorted(union)


@pytest.mark.asyncio
async def test_compare_requires_slugs(app_client: AsyncClient, seeded):
    res = await app_client.get("/gyms/compare")
    assert res.status_code == 400
