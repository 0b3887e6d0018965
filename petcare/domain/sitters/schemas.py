"""Sitter domain schemas"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel


class SitterBooking(BaseModel):
    """A booking or recurring session as shown on the sitter's schedule"""

    id: str
    date: dt.date
    time: str
    service: str
    breed: Optional[str] = None
    petName: str
    petType: str
    ownerName: str
    ownerPhone: str
    location: str
    status: str
    duration: int
    amount: float
    notes: Optional[str] = None
    recurring: bool
    recurringPattern: Optional[str] = None
    bookingType: str
    sequenceNumber: Optional[int] = None
    paymentStatus: Optional[str] = None
