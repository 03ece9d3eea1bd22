from fastapi import APIRouter, Depends, Query, status

from findmygym.api.deps import get_current_email, get_favorite_service
from findmygym.schemas.common import ErrorResponse, SuccessResponse
from findmygym.schemas.favorite import FavoriteCreateRequest, FavoriteListResponse, FavoriteOut
from findmygym.services.favorites import FavoriteService

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=FavoriteListResponse, summary="Caller's favorite gyms")
async def list_favorites(
    email: str = Depends(get_current_email),
    svc: FavoriteService = Depends(get_favorite_service),
):
    return await svc.list(email=email)


@router.post(
    "",
    response_model=FavoriteOut,
    status_code=status.HTTP_201_CREATED,
    summary="Add a favorite",
    responses={
        404: {"model": ErrorResponse, "description": "user or gym not found"},
        409: {"model": ErrorResponse, "description": "Already favorited"},
    },
)
async def add_favorite(
    payload: FavoriteCreateRequest,
    email: str = Depends(get_current_email),
    svc: FavoriteService = Depends(get_favorite_service),
):
    return await svc.add(email=email, gym_id=payload.gym_id)


@router.delete(
    "",
    response_model=SuccessResponse,
    summary="Remove a favorite",
    responses={404: {"model": ErrorResponse, "description": "Favorite not found"}},
)
async def delete_favorite(
    gym_id: int = Query(..., alias="gymId", description="Gym ID"),
    email: str = Depends(get_current_email),
    svc: FavoriteService = Depends(get_favorite_service),
):
    await svc.remove(email=email, gym_id=gym_id)
    return SuccessResponse()
