from fastapi import APIRouter, Depends, Query, status

from findmygym.api.deps import get_current_email, get_review_service
from findmygym.schemas.common import ErrorResponse, SuccessResponse
from findmygym.schemas.review import (
    HelpfulToggleResponse,
    ReviewCreateRequest,
    ReviewListResponse,
    ReviewOut,
    ReviewReportRequest,
)
from findmygym.services.reviews import REVIEW_PAGE_SIZE, ReviewService
from findmygym.utils.sort import resolve_review_sort

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get(
    "",
    response_model=ReviewListResponse,
    summary="List reviews",
    description=(
        "rating=N keeps reviews with N <= rating < N+1. "
        "sort: recent (default) | highest | lowest | helpful."
    ),
)
async def list_reviews(
    gym_id: int | None = Query(None, alias="gymId"),
    user_id: int | None = Query(None, alias="userId"),
    rating: int = Query(0, ge=0, le=5, description="Star bucket, 0 = all"),
    sort: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(REVIEW_PAGE_SIZE, ge=1, le=100),
    svc: ReviewService = Depends(get_review_service),
):
    return await svc.list(
        gym_id=gym_id,
        user_id=user_id,
        rating=rating,
        sort=resolve_review_sort(sort),
        page=page,
        limit=limit,
    )


@router.post(
    "",
    response_model=ReviewOut,
    status_code=status.HTTP_201_CREATED,
    summary="Write a review",
    responses={
        400: {"model": ErrorResponse, "description": "invalid payload"},
        404: {"model": ErrorResponse, "description": "user or gym not found"},
    },
)
async def create_review(
    payload: ReviewCreateRequest,
    email: str = Depends(get_current_email),
    svc: ReviewService = Depends(get_review_service),
):
    return await svc.create(email=email, payload=payload)


@router.delete(
    "/{review_id}",
    response_model=SuccessResponse,
    summary="Delete own review",
    responses={
        403: {"model": ErrorResponse, "description": "not the author"},
        404: {"model": ErrorResponse, "description": "Review not found"},
    },
)
async def delete_review(
    review_id: int,
    email: str = Depends(get_current_email),
    svc: ReviewService = Depends(get_review_service),
):
    await svc.delete(email=email, review_id=review_id)
    return SuccessResponse()


@router.post(
    "/{review_id}/helpful",
    response_model=HelpfulToggleResponse,
    summary="Toggle the caller's helpful vote",
)
async def toggle_helpful(
    review_id: int,
    email: str = Depends(get_current_email),
    svc: ReviewService = Depends(get_review_service),
):
    action = await svc.toggle_helpful(email=email, review_id=review_id)
    return HelpfulToggleResponse(action=action)


@router.post(
    "/{review_id}/report",
    response_model=SuccessResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Report a review",
    responses={409: {"model": ErrorResponse, "description": "Already reported"}},
)
async def report_review(
    review_id: int,
    payload: ReviewReportRequest,
    email: str = Depends(get_current_email),
    svc: ReviewService = Depends(get_review_service),
):
    await svc.report(email=email, review_id=review_id, reason=payload.reason)
    return SuccessResponse()
