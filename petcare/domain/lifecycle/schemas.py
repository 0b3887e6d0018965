"""Lifecycle schemas - Pydantic models for service start/end"""

from typing import Optional

from pydantic import BaseModel


class ServiceCodeRequest(BaseModel):
    """Booking or session id plus the START/END code presented by the owner"""

    bookingId: Optional[str] = None
    otp: Optional[str] = None


class StartServiceResponse(BaseModel):
    success: bool
    message: str
    bookingType: str  # regular or recurring_session


class EarningsInfo(BaseModel):
    amount: float
    availableAt: str


class EndServiceResponse(StartServiceResponse):
    earnings: Optional[EarningsInfo] = None
