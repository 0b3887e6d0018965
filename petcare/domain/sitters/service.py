"""Sitter service - A sitter's combined schedule of bookings and recurring sessions"""

import logging
from typing import Optional, Union

from sqlalchemy.orm import Session

from ...config import DEFAULT_BOOKING_DURATION
from ...models import Address, Booking, RecurringBooking
from ..lifecycle.targets import BookingKind
from .repository import SitterRepository
from .schemas import SitterBooking

logger = logging.getLogger(__name__)


def format_location(address: Optional[Address]) -> str:
    if not address:
        return "Location not specified"
    parts = [part for part in (address.line1, address.city, address.state) if part]
    return ", ".join(parts) or "Location not specified"


class SitterService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = SitterRepository()

    def _format(
        self,
        record: Union[Booking, RecurringBooking],
        kind: BookingKind,
        addresses: dict[str, Address],
    ) -> SitterBooking:
        is_session = kind is BookingKind.RECURRING_SESSION
        owner = record.user
        price = record.session_price if is_session else record.total_price
        return SitterBooking(
            id=record.id,
            date=record.session_date if is_session else record.date,
            time=record.session_time if is_session else record.time,
            service=record.service.name if record.service and record.service.name else "Service",
            breed=record.pet.breed if record.pet else None,
            petName=record.pet.name if record.pet and record.pet.name else "Pet",
            petType=record.pet.type if record.pet and record.pet.type else "Unknown",
            ownerName=owner.name if owner and owner.name else "Owner",
            ownerPhone=owner.phone if owner and owner.phone else "",
            location=format_location(addresses.get(record.user_id)),
            status=record.status.lower() if record.status else "pending",
            duration=record.duration or DEFAULT_BOOKING_DURATION,
            amount=float(price or 0),
            notes=record.notes,
            recurring=False if is_session else bool(record.is_recurring),
            recurringPattern=None if is_session else record.recurring_pattern,
            bookingType=kind.value,
            sequenceNumber=record.sequence_number if is_session else None,
            paymentStatus=record.payment_status if is_session else None,
        )

    def get_bookings(self, user_id: str) -> list[SitterBooking]:
        """
        Every booking and recurring session assigned to the sitter behind a user id,
        newest first. Returns an empty list when the user is not a sitter.
        """
        sitter = self.repo.get_sitter_by_user(self.db, user_id)
        if not sitter:
            logger.info(f"No sitter found for user ID: {user_id}")
            return []

        bookings = self.repo.get_regular_bookings(self.db, sitter.id)
        sessions = self.repo.get_sessions(self.db, sitter.id)
        owner_ids = {b.user_id for b in bookings} | {s.user_id for s in sessions}
        addresses = self.repo.get_default_addresses(self.db, owner_ids)

        results = [self._format(b, BookingKind.REGULAR, addresses) for b in bookings]
        results += [self._format(s, BookingKind.RECURRING_SESSION, addresses) for s in sessions]
        results.sort(key=lambda r: (r.date, r.time), reverse=True)

        logger.info(f"📋 Sitter {sitter.id}: {len(bookings)} bookings, {len(sessions)} sessions")
        return results
