"""Booking repository - Database operations for bookings and recurring sessions"""

from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import (
    OPEN_STATUSES,
    STATUS_ONGOING,
    Booking,
    Pet,
    RecurringBooking,
    Service,
    ServiceOtp,
    Sitter,
)


class BookingRepository:
    """Repository for booking data access. Callers own the commit."""

    @staticmethod
    def get_owned_pet(db: Session, pet_id: str, user_id: str) -> Optional[Pet]:
        return db.query(Pet).filter(Pet.id == pet_id, Pet.user_id == user_id).first()

    @staticmethod
    def get_active_service(db: Session, service_id: str) -> Optional[Service]:
        return db.query(Service).filter(Service.id == service_id, Service.is_active.is_(True)).first()

    @staticmethod
    def get_booking(db: Session, booking_id: str) -> Optional[Booking]:
        return (
            db.query(Booking)
            .options(joinedload(Booking.user))
            .filter(Booking.id == booking_id)
            .first()
        )

    @staticmethod
    def get_session(db: Session, session_id: str) -> Optional[RecurringBooking]:
        return (
            db.query(RecurringBooking)
            .options(joinedload(RecurringBooking.user))
            .filter(RecurringBooking.id == session_id)
            .first()
        )

    @staticmethod
    def get_user_booking(db: Session, booking_id: str, user_id: str) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_id, Booking.user_id == user_id).first()

    @staticmethod
    def get_user_session(db: Session, session_id: str, user_id: str) -> Optional[RecurringBooking]:
        return (
            db.query(RecurringBooking)
            .filter(RecurringBooking.id == session_id, RecurringBooking.user_id == user_id)
            .first()
        )

    @staticmethod
    def create_booking(db: Session, **booking_data) -> Booking:
        booking = Booking(**booking_data)
        db.add(booking)
        db.flush()
        return booking

    @staticmethod
    def create_session(db: Session, **session_data) -> RecurringBooking:
        session = RecurringBooking(**session_data)
        db.add(session)
        db.flush()
        return session

    @staticmethod
    def create_service_otp(db: Session, **otp_data) -> ServiceOtp:
        otp = ServiceOtp(**otp_data)
        db.add(otp)
        return otp

    @staticmethod
    def get_user_bookings(db: Session, user_id: str) -> list[Booking]:
        return (
            db.query(Booking)
            .options(
                joinedload(Booking.pet),
                joinedload(Booking.service),
                joinedload(Booking.sitter).joinedload(Sitter.user),
            )
            .filter(Booking.user_id == user_id)
            .order_by(Booking.created_at.desc())
            .all()
        )

    @staticmethod
    def get_booking_otps(db: Session, booking_ids: list[str]) -> dict[tuple[str, str], str]:
        """Latest code per (booking id, type) for the given bookings"""
        if not booking_ids:
            return {}
        rows = (
            db.query(ServiceOtp)
            .filter(ServiceOtp.booking_id.in_(booking_ids))
            .order_by(ServiceOtp.created_at.asc(), ServiceOtp.id.asc())
            .all()
        )
        return {(row.booking_id, row.type): row.otp for row in rows}

    @staticmethod
    def get_next_open_booking(db: Session, user_id: str, today: date) -> Optional[Booking]:
        return (
            db.query(Booking)
            .options(
                joinedload(Booking.pet),
                joinedload(Booking.service),
                joinedload(Booking.sitter).joinedload(Sitter.user),
            )
            .filter(
                Booking.user_id == user_id,
                func.upper(Booking.status).in_(OPEN_STATUSES),
                Booking.date >= today,
            )
            .order_by(Booking.date.asc(), Booking.time.asc())
            .first()
        )

    @staticmethod
    def get_ongoing_bookings(db: Session, owner_id: str) -> list[Booking]:
        return (
            db.query(Booking)
            .options(joinedload(Booking.pet), joinedload(Booking.sitter).joinedload(Sitter.user))
            .filter(Booking.user_id == owner_id, func.lower(Booking.status) == STATUS_ONGOING.lower())
            .all()
        )

    @staticmethod
    def get_ongoing_sessions(db: Session, owner_id: str) -> list[RecurringBooking]:
        return (
            db.query(RecurringBooking)
            .options(
                joinedload(RecurringBooking.pet),
                joinedload(RecurringBooking.sitter).joinedload(Sitter.user),
            )
            .filter(
                RecurringBooking.user_id == owner_id,
                func.lower(RecurringBooking.status) == STATUS_ONGOING.lower(),
            )
            .all()
        )
