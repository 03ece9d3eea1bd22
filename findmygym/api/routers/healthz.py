# findmygym/api/routers/healthz.py
from fastapi import APIRouter

from findmygym.schemas.common import OkResponse

router = APIRouter(prefix="/healthz", tags=["health"])


@router.get(
    "",
    response_model=OkResponse,
    summary="Liveness probe",
    description="Always 200; does not touch the database.",
)
async def healthz():
    return {"ok": True}
