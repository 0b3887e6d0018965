"""Booking domain schemas - Pydantic models for validation"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel


class BookingCreate(BaseModel):
    """Schema for creating a single or recurring booking"""

    petId: Optional[str] = None
    serviceId: Optional[str] = None
    addressId: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    duration: Optional[int] = None
    totalPrice: Optional[float] = None
    paymentOption: Optional[str] = None  # pay-now or pay-later
    paymentId: Optional[str] = None
    notes: Optional[str] = None
    recurring: bool = False
    recurringPattern: Optional[str] = None
    recurringEndDate: Optional[dt.date] = None


class BookingCreateResponse(BaseModel):
    success: bool
    message: str
    bookingId: str
    paymentStatus: str
    # Single booking
    startOtp: Optional[str] = None
    endOtp: Optional[str] = None
    # Recurring plan
    sessionsCreated: Optional[int] = None
    totalAmount: Optional[float] = None


class BookingResponse(BaseModel):
    """Booking as shown to its owner, with pet, service and sitter details"""

    id: str
    userId: str
    petId: str
    serviceId: str
    sitterId: Optional[str] = None
    addressId: Optional[str] = None
    date: dt.date
    time: str
    duration: Optional[int] = None
    status: str
    totalPrice: float
    paymentStatus: Optional[str] = None
    paymentId: Optional[str] = None
    notes: Optional[str] = None
    recurring: bool
    recurringPattern: Optional[str] = None
    recurringEndDate: Optional[dt.date] = None
    actualStartTime: Optional[dt.datetime] = None
    actualEndTime: Optional[dt.datetime] = None
    actualDuration: Optional[int] = None
    createdAt: Optional[dt.datetime] = None
    updatedAt: Optional[dt.datetime] = None
    petName: Optional[str] = None
    petType: Optional[str] = None
    petBreed: Optional[str] = None
    serviceName: Optional[str] = None
    serviceDescription: Optional[str] = None
    servicePrice: float = 0.0
    serviceDuration: Optional[int] = None
    sitterName: Optional[str] = None
    sitterPhone: Optional[str] = None
    sitterEmail: Optional[str] = None
    sitterRating: float = 0.0
    sitterImage: Optional[str] = None
    startOtp: Optional[str] = None
    endOtp: Optional[str] = None


class UpcomingBookingResponse(BaseModel):
    id: str
    date: dt.date
    time: str
    status: str
    totalPrice: float
    notes: Optional[str] = None
    serviceName: Optional[str] = None
    petName: Optional[str] = None
    petType: Optional[str] = None
    sitterName: str
    sitterRating: Optional[float] = None


class OngoingBooking(BaseModel):
    id: str
    bookingType: str
    date: dt.date
    time: str
    duration: Optional[int] = None
    status: str
    amount: float
    notes: Optional[str] = None
    startedAt: Optional[dt.datetime] = None
    sitterName: str
    sitterPhone: Optional[str] = None
    petName: str
    sequenceNumber: Optional[int] = None


class OngoingBookingsResponse(BaseModel):
    success: bool
    bookings: list[OngoingBooking]


class CancelBookingRequest(BaseModel):
    bookingId: Optional[str] = None
    reason: Optional[str] = None


class CancelSessionRequest(BaseModel):
    sessionId: Optional[str] = None
    reason: Optional[str] = None


class CancelResponse(BaseModel):
    success: bool
    message: str
    bookingId: Optional[str] = None
    sessionId: Optional[str] = None
    sequenceNumber: Optional[int] = None


class SendConfirmationRequest(BaseModel):
    bookingId: Optional[str] = None
    startOtp: Optional[str] = None
    endOtp: Optional[str] = None
    isRecurring: bool = False
    phone: Optional[str] = None


class SendConfirmationResponse(BaseModel):
    success: bool
    message: str
    bookingId: str
    whatsappSent: bool
    emailSent: bool
