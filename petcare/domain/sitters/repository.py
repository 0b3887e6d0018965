"""Sitter repository - Database operations for a sitter's assigned work"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from ...models import Address, Booking, RecurringBooking, Sitter


class SitterRepository:
    @staticmethod
    def get_sitter_by_user(db: Session, user_id: str) -> Optional[Sitter]:
        return db.query(Sitter).filter(Sitter.user_id == user_id).first()

    @staticmethod
    def get_regular_bookings(db: Session, sitter_id: str) -> list[Booking]:
        """Non-recurring bookings assigned to the sitter"""
        return (
            db.query(Booking)
            .options(joinedload(Booking.service), joinedload(Booking.pet), joinedload(Booking.user))
            .filter(
                Booking.sitter_id == sitter_id,
                or_(Booking.is_recurring.is_(False), Booking.is_recurring.is_(None)),
            )
            .all()
        )

    @staticmethod
    def get_sessions(db: Session, sitter_id: str) -> list[RecurringBooking]:
        return (
            db.query(RecurringBooking)
            .options(
                joinedload(RecurringBooking.service),
                joinedload(RecurringBooking.pet),
                joinedload(RecurringBooking.user),
            )
            .filter(RecurringBooking.sitter_id == sitter_id)
            .all()
        )

    @staticmethod
    def get_default_addresses(db: Session, user_ids: set[str]) -> dict[str, Address]:
        """Default address per owner, falling back to any address on file"""
        if not user_ids:
            return {}
        addresses = (
            db.query(Address)
            .filter(Address.user_id.in_(user_ids))
            .order_by(Address.is_default.asc())
            .all()
        )
        # Defaults sort last and overwrite
        return {address.user_id: address for address in addresses}
