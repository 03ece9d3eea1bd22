from fastapi import APIRouter, Depends, status

from findmygym.api.deps import get_user_service
from findmygym.schemas.common import ErrorResponse
from findmygym.schemas.user import SignupRequest, SignupResponse
from findmygym.services.users import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup",
    response_model=SignupResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    responses={
        400: {"model": ErrorResponse, "description": "missing field or short password"},
        409: {"model": ErrorResponse, "description": "email already registered"},
    },
)
async def signup(payload: SignupRequest, svc: UserService = Depends(get_user_service)):
    return await svc.signup(payload)
