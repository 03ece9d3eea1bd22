from fastapi import APIRouter, Depends

from findmygym.api.deps import get_deal_service
from findmygym.schemas.deal import DealListResponse
from findmygym.services.deals import DealService

router = APIRouter(prefix="/deals", tags=["deals"])


@router.get(
    "",
    response_model=DealListResponse,
    summary="Currently running deals",
    description="Active deals valid right now, biggest discount first (max 6).",
)
async def list_deals(svc: DealService = Depends(get_deal_service)):
    return await svc.active()
