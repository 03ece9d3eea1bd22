from fastapi import APIRouter, Depends

from findmygym.api.deps import get_current_email, get_user_service
from findmygym.schemas.common import ErrorResponse
from findmygym.schemas.review import UserReviewsResponse
from findmygym.schemas.user import ProfileOut, ProfileUpdateRequest
from findmygym.services.users import UserService

router = APIRouter(prefix="/user", tags=["user"])


@router.get(
    "/profile",
    response_model=ProfileOut,
    summary="Caller's profile with activity counts",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
)
async def get_profile(
    email: str = Depends(get_current_email),
    svc: UserService = Depends(get_user_service),
):
    return await svc.profile(email)


@router.put(
    "/profile",
    response_model=ProfileOut,
    summary="Update profile preferences",
)
async def update_profile(
    payload: ProfileUpdateRequest,
    email: str = Depends(get_current_email),
    svc: UserService = Depends(get_user_service),
):
    return await svc.update_profile(email, payload)


@router.get("/reviews", response_model=UserReviewsResponse, summary="Caller's own reviews")
async def list_own_reviews(
    email: str = Depends(get_current_email),
    svc: UserService = Depends(get_user_service),
):
    return await svc.reviews(email)
