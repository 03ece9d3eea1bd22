"""/gyms routers that delegate to services via DI."""

from fastapi import APIRouter, Depends, Query

from findmygym.api.deps import get_gym_detail_service, get_gym_search_service
from findmygym.schemas.common import ErrorResponse
from findmygym.schemas.gym import (
    FeaturedGymsResponse,
    GymCompareResponse,
    GymDetail,
    GymFilterCriteria,
    GymListResponse,
)
from findmygym.services.gym_detail import GymDetailService
from findmygym.services.gym_search import GymSearchService

router = APIRouter(prefix="/gyms", tags=["gyms"])


_DESC = (
    "Filters by name substring, type, price range and amenities (any-of).\n"
    "- minRating, sort and paging apply after ratings are aggregated\n"
    "- sort=rating: average rating DESC (default)\n"
    "- sort=name: name ASC\n"
    "- sort=newest: created_at DESC\n"
    "- sort=price_low / price_high: lowest membership price; gyms without plans last\n"
    "- sort=distance: haversine distance from lat/lng ASC (lat/lng required)\n"
)


@router.get(
    "",
    response_model=GymListResponse,
    summary="List gyms",
    description=_DESC,
    responses={400: {"model": ErrorResponse, "description": "invalid query"}},
)
async def list_gyms(
    criteria: GymFilterCriteria = Depends(GymFilterCriteria.as_query),
    svc: GymSearchService = Depends(get_gym_search_service),
):
    return await svc.search(criteria)


@router.get(
    "/featured",
    response_model=FeaturedGymsResponse,
    summary="Top rated gyms",
    responses={503: {"model": ErrorResponse, "description": "database unavailable"}},
)
async def featured_gyms(svc: GymSearchService = Depends(get_gym_search_service)):
    return await svc.featured()


@router.get(
    "/compare",
    response_model=GymCompareResponse,
    summary="Compare up to three gyms side by side",
    responses={400: {"model": ErrorResponse, "description": "invalid query"}},
)
async def compare_gyms(
    slugs: str = Query(..., min_length=1, description="Gym slugs CSV (first three are used)"),
    svc: GymSearchService = Depends(get_gym_search_service),
):
    return await svc.compare([s.strip() for s in slugs.split(",") if s.strip()])


@router.get(
    "/{slug}",
    response_model=GymDetail,
    summary="Gym detail",
    description="Full gym record with hours, amenities, photos, plans, classes and reviews.",
    responses={
        404: {"model": ErrorResponse, "description": "Gym not found"},
        503: {"model": ErrorResponse, "description": "database unavailable"},
    },
)
async def get_gym_detail(
    slug: str,
    svc: GymDetailService = Depends(get_gym_detail_service),
):
    return await svc.get(slug)
