"""Lifecycle repository - Database operations for service start/end"""

from datetime import datetime
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Booking, RecurringBooking, ServiceOtp, SitterWallet, WalletTransaction
from .targets import ServiceTarget


class LifecycleRepository:
    """Repository for lifecycle transitions. Callers own the commit."""

    @staticmethod
    def get_booking(db: Session, booking_id: str) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_id).first()

    @staticmethod
    def get_session(db: Session, session_id: str) -> Optional[RecurringBooking]:
        return db.query(RecurringBooking).filter(RecurringBooking.id == session_id).first()

    @staticmethod
    def find_service_otp(
        db: Session, target: ServiceTarget, otp_type: str, otp_value: str, now: datetime
    ) -> Optional[ServiceOtp]:
        """Unused, unexpired code of the given type issued for this target"""
        return (
            db.query(ServiceOtp)
            .filter(
                target.otp_column == target.id,
                ServiceOtp.type == otp_type,
                ServiceOtp.otp == otp_value,
                ServiceOtp.is_used.is_(False),
                or_(ServiceOtp.expires_at.is_(None), ServiceOtp.expires_at > now),
            )
            .first()
        )

    @staticmethod
    def consume_service_otp(db: Session, otp_id: str, now: datetime) -> int:
        """Mark a code used only if it is still unused; returns affected rows"""
        return (
            db.query(ServiceOtp)
            .filter(ServiceOtp.id == otp_id, ServiceOtp.is_used.is_(False))
            .update({ServiceOtp.is_used: True, ServiceOtp.used_at: now}, synchronize_session=False)
        )

    @staticmethod
    def get_or_create_wallet(db: Session, sitter_id: str) -> SitterWallet:
        wallet = db.query(SitterWallet).filter(SitterWallet.sitter_id == sitter_id).first()
        if not wallet:
            wallet = SitterWallet(
                sitter_id=sitter_id, balance=0.0, pending_amount=0.0, total_earnings=0.0
            )
            db.add(wallet)
            db.flush()
        return wallet

    @staticmethod
    def add_wallet_transaction(db: Session, **transaction_data) -> WalletTransaction:
        transaction = WalletTransaction(**transaction_data)
        db.add(transaction)
        return transaction
