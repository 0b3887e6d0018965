"""
Service targets

A start/end code can belong to a regular booking or to one session of a
recurring plan. The two live in separate tables, so the kind is resolved once
per request into a ServiceTarget and the rest of the flow works on that.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from ...models import (
    CLOSED_STATUSES,
    STATUS_COMPLETED,
    STATUS_ONGOING,
    Booking,
    RecurringBooking,
    ServiceOtp,
)


class BookingKind(str, Enum):
    REGULAR = "regular"
    RECURRING_SESSION = "recurring_session"


@dataclass
class ServiceTarget:
    kind: BookingKind
    record: Union[Booking, RecurringBooking]

    @classmethod
    def regular(cls, booking: Booking) -> "ServiceTarget":
        return cls(BookingKind.REGULAR, booking)

    @classmethod
    def recurring_session(cls, session: RecurringBooking) -> "ServiceTarget":
        return cls(BookingKind.RECURRING_SESSION, session)

    @property
    def id(self) -> str:
        return self.record.id

    @property
    def owner_user_id(self) -> Optional[str]:
        return self.record.user_id

    @property
    def sitter_id(self) -> Optional[str]:
        return self.record.sitter_id

    @property
    def status(self) -> str:
        return self.record.status

    @property
    def is_closed(self) -> bool:
        """Completed and cancelled targets accept no further transitions"""
        return (self.status or "").upper() in CLOSED_STATUSES

    @property
    def price(self) -> float:
        if self.kind is BookingKind.RECURRING_SESSION:
            return float(self.record.session_price or 0)
        return float(self.record.total_price or 0)

    @property
    def scheduled_date(self):
        if self.kind is BookingKind.RECURRING_SESSION:
            return self.record.session_date
        return self.record.date

    @property
    def scheduled_time(self) -> str:
        if self.kind is BookingKind.RECURRING_SESSION:
            return self.record.session_time
        return self.record.time

    @property
    def started_at(self) -> Optional[datetime]:
        if self.kind is BookingKind.RECURRING_SESSION:
            return self.record.service_started_at
        return self.record.actual_start_time

    @property
    def otp_column(self):
        """service_otps column that points at this target"""
        if self.kind is BookingKind.RECURRING_SESSION:
            return ServiceOtp.recurring_booking_id
        return ServiceOtp.booking_id

    def mark_started(self, now: datetime) -> None:
        self.record.status = STATUS_ONGOING
        self.record.updated_at = now
        if self.kind is BookingKind.RECURRING_SESSION:
            self.record.service_started_at = now
        else:
            self.record.actual_start_time = now

    def mark_completed(self, now: datetime) -> Optional[int]:
        """Complete the target; returns the actual duration in minutes when a start was recorded"""
        started_at = self.started_at
        actual_duration = round((now - started_at).total_seconds() / 60) if started_at else None

        self.record.status = STATUS_COMPLETED
        self.record.actual_duration = actual_duration
        self.record.updated_at = now
        if self.kind is BookingKind.RECURRING_SESSION:
            self.record.service_ended_at = now
        else:
            self.record.completed_at = now
            self.record.actual_end_time = now
            self.record.earnings_processed = True
            self.record.sitter_earnings = self.price
            self.record.platform_fee = 0.0
        return actual_duration
