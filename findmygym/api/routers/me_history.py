from fastapi import APIRouter, Depends

from findmygym.api.deps import get_current_email, get_history_service
from findmygym.schemas.common import ErrorResponse
from findmygym.schemas.history import HistoryPushRequest, HistoryResponse
from findmygym.services.history import HistoryService

router = APIRouter(prefix="/me", tags=["me"])


@router.get("/history", response_model=HistoryResponse, summary="Recently viewed gyms")
async def get_history(
    email: str = Depends(get_current_email),
    svc: HistoryService = Depends(get_history_service),
):
    return await svc.list(email=email)


@router.post(
    "/history",
    response_model=HistoryResponse,
    summary="Record viewed gyms",
    description="Send `gymId` for one view or `gymIds` (most recent first) to sync a backlog.",
    responses={404: {"model": ErrorResponse, "description": "no known gym in payload"}},
)
async def add_history(
    payload: HistoryPushRequest,
    email: str = Depends(get_current_email),
    svc: HistoryService = Depends(get_history_service),
):
    return await svc.push(email=email, gym_ids=payload.ordered_ids())
