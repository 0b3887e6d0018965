"""Booking router - FastAPI endpoints for booking operations"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import (
    BookingCreate,
    BookingCreateResponse,
    BookingResponse,
    CancelBookingRequest,
    CancelResponse,
    CancelSessionRequest,
    OngoingBookingsResponse,
    SendConfirmationRequest,
    SendConfirmationResponse,
    UpcomingBookingResponse,
)
from .service import BookingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["Bookings"])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    """Dependency injection for BookingService"""
    return BookingService(db)


@router.get("", response_model=list[BookingResponse])
async def get_bookings(
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Get all bookings of the current user with their service codes"""
    return service.get_bookings(current_user)


@router.post("", response_model=BookingCreateResponse, response_model_exclude_none=True)
async def create_booking(
    data: BookingCreate,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    """Create a single booking or a recurring plan"""
    return service.create_booking(data, current_user)


@router.get("/upcoming", response_model=UpcomingBookingResponse)
async def get_upcoming_booking(
    userId: Optional[str] = Query(None),
    service: BookingService = Depends(get_booking_service),
):
    """Next open booking of a user"""
    return service.get_upcoming_booking(userId)


@router.get("/ongoing", response_model=OngoingBookingsResponse)
async def get_ongoing_bookings(
    ownerId: Optional[str] = Query(None),
    service: BookingService = Depends(get_booking_service),
):
    """Bookings and recurring sessions of an owner that are in progress"""
    return service.get_ongoing_bookings(ownerId)


@router.post("/cancel", response_model=CancelResponse, response_model_exclude_none=True)
async def cancel_booking(
    data: CancelBookingRequest,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.cancel_booking(data, current_user)


@router.post(
    "/recurring/cancel-session", response_model=CancelResponse, response_model_exclude_none=True
)
async def cancel_recurring_session(
    data: CancelSessionRequest,
    current_user: User = Depends(get_current_user),
    service: BookingService = Depends(get_booking_service),
):
    return service.cancel_session(data, current_user)


@router.post("/send-confirmation", response_model=SendConfirmationResponse)
async def send_confirmation(
    data: SendConfirmationRequest,
    service: BookingService = Depends(get_booking_service),
):
    """Send the confirmation message for a booking or recurring session"""
    return await service.send_confirmation(data)
