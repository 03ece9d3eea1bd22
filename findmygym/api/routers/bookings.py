from fastapi import APIRouter, Depends, status

from findmygym.api.deps import get_booking_service, get_current_email
from findmygym.schemas.booking import (
    BookingCreateRequest,
    BookingListResponse,
    BookingOut,
    BookingStatusUpdate,
)
from findmygym.schemas.common import ErrorResponse
from findmygym.services.bookings import BookingService

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.get("", response_model=BookingListResponse, summary="Caller's bookings, newest first")
async def list_bookings(
    email: str = Depends(get_current_email),
    svc: BookingService = Depends(get_booking_service),
):
    return await svc.list(email=email)


@router.post(
    "",
    response_model=BookingOut,
    status_code=status.HTTP_201_CREATED,
    summary="Request a trial, visit or inquiry",
    responses={
        400: {"model": ErrorResponse, "description": "invalid payload"},
        404: {"model": ErrorResponse, "description": "user or gym not found"},
    },
)
async def create_booking(
    payload: BookingCreateRequest,
    email: str = Depends(get_current_email),
    svc: BookingService = Depends(get_booking_service),
):
    return await svc.create(email=email, payload=payload)


@router.patch(
    "/{booking_id}",
    response_model=BookingOut,
    summary="Change booking status",
    responses={
        400: {"model": ErrorResponse, "description": "Invalid status"},
        403: {"model": ErrorResponse, "description": "not the booking owner"},
        404: {"model": ErrorResponse, "description": "Booking not found"},
    },
)
async def update_booking(
    booking_id: int,
    payload: BookingStatusUpdate,
    email: str = Depends(get_current_email),
    svc: BookingService = Depends(get_booking_service),
):
    return await svc.update_status(email=email, booking_id=booking_id, status=payload.status)
