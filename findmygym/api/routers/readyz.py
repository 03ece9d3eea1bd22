from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from findmygym.api.deps import get_async_session
from findmygym.schemas.common import ErrorResponse, OkResponse
from findmygym.services.health import HealthService

router = APIRouter(prefix="/readyz", tags=["health"])


@router.get(
    "",
    response_model=OkResponse,
    summary="Readiness probe",
    description="Runs SELECT 1 against the database; 503 when it cannot be reached.",
    responses={503: {"model": ErrorResponse, "description": "Database unavailable"}},
)
async def readyz(session: AsyncSession = Depends(get_async_session)):
    return await HealthService(session).ok()
