"""Lifecycle service - Code-gated start and end of a booking or recurring session"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import EARNINGS_HOLD_DAYS
from ...models import OTP_TYPE_END, OTP_TYPE_START
from ...services import notification_service
from .repository import LifecycleRepository
from .schemas import EarningsInfo, EndServiceResponse, ServiceCodeRequest, StartServiceResponse
from .targets import ServiceTarget

logger = logging.getLogger(__name__)


class LifecycleService:
    """
    Service layer for the service-session lifecycle.

    A transition consumes the submitted code with a conditional update and
    applies the status change in the same transaction, so a code can move a
    booking at most once and a failure leaves neither change behind.
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = LifecycleRepository()

    def resolve_target(self, booking_id: str) -> ServiceTarget:
        """Find which table owns an id; regular bookings take precedence"""
        booking = self.repo.get_booking(self.db, booking_id)
        if booking:
            return ServiceTarget.regular(booking)

        session = self.repo.get_session(self.db, booking_id)
        if session:
            return ServiceTarget.recurring_session(session)

        raise HTTPException(status_code=404, detail="Booking not found")

    def _ensure_open(self, target: ServiceTarget) -> None:
        if target.is_closed:
            logger.warning(f"⚠️ Transition refused for {target.kind.value} {target.id} in status {target.status}")
            raise HTTPException(status_code=400, detail="This booking is no longer active")

    def _consume_code(self, target: ServiceTarget, otp_type: str, otp_value: str, now: datetime) -> None:
        otp_row = self.repo.find_service_otp(self.db, target, otp_type, otp_value, now)
        if not otp_row:
            logger.warning(f"⚠️ Invalid {otp_type} OTP for {target.kind.value} {target.id}")
            raise HTTPException(status_code=400, detail="Invalid or expired OTP")

        # Another request may have consumed the code since it was read
        if self.repo.consume_service_otp(self.db, otp_row.id, now) == 0:
            logger.warning(f"⚠️ {otp_type} OTP for {target.id} was consumed concurrently")
            raise HTTPException(status_code=400, detail="Invalid or expired OTP")

    def _validate_request(self, data: ServiceCodeRequest) -> tuple[str, str]:
        booking_id = (data.bookingId or "").strip()
        otp = (data.otp or "").strip()
        if not booking_id or not otp:
            raise HTTPException(status_code=400, detail="Booking ID and OTP are required")
        return booking_id, otp

    def start_service(self, data: ServiceCodeRequest) -> StartServiceResponse:
        """Verify a START code and move the booking or session to ONGOING"""
        booking_id, otp = self._validate_request(data)
        logger.info(f"🔐 Start service requested for {booking_id}")

        try:
            target = self.resolve_target(booking_id)
            self._ensure_open(target)
            if target.owner_user_id:
                notification_service.notify_service_started(self.db, target.owner_user_id, target.id)

            now = datetime.utcnow()
            self._consume_code(target, OTP_TYPE_START, otp, now)
            target.mark_started(now)
            kind = target.kind
            self.db.commit()
        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error starting service for {booking_id}: {str(e)}")
            logger.exception("Full error traceback:")
            raise HTTPException(status_code=500, detail="Failed to start service") from e

        logger.info(f"✅ Service started for {kind.value} {booking_id}")
        return StartServiceResponse(
            success=True,
            message="Service started successfully",
            bookingType=kind.value,
        )

    def end_service(self, data: ServiceCodeRequest) -> EndServiceResponse:
        """Verify an END code, complete the booking or session and credit the sitter"""
        booking_id, otp = self._validate_request(data)
        logger.info(f"🏁 End service requested for {booking_id}")

        try:
            target = self.resolve_target(booking_id)
            self._ensure_open(target)
            if target.owner_user_id:
                notification_service.notify_service_completed(self.db, target.owner_user_id, target.id)

            now = datetime.utcnow()
            self._consume_code(target, OTP_TYPE_END, otp, now)
            target.mark_completed(now)
            earnings = self._credit_sitter(target, now)
            kind = target.kind
            self.db.commit()
        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error ending service for {booking_id}: {str(e)}")
            logger.exception("Full error traceback:")
            raise HTTPException(status_code=500, detail="Failed to end service") from e

        logger.info(f"✅ Service completed for {kind.value} {booking_id}")
        return EndServiceResponse(
            success=True,
            message="Service completed and earnings credited",
            bookingType=kind.value,
            earnings=earnings,
        )

    def _credit_sitter(self, target: ServiceTarget, now: datetime) -> Optional[EarningsInfo]:
        """Add the service price to the sitter's pending wallet balance"""
        if not target.sitter_id:
            logger.debug(f"No sitter assigned to {target.id}, skipping earnings")
            return None

        amount = target.price
        available_at = now + timedelta(days=EARNINGS_HOLD_DAYS)

        wallet = self.repo.get_or_create_wallet(self.db, target.sitter_id)
        wallet.pending_amount = (wallet.pending_amount or 0) + amount
        wallet.total_earnings = (wallet.total_earnings or 0) + amount
        wallet.updated_at = now

        scheduled_date = target.scheduled_date
        self.repo.add_wallet_transaction(
            self.db,
            wallet_id=wallet.id,
            booking_id=target.id,
            amount=amount,
            type="earning",
            status="pending",
            description="Service completion earnings",
            available_at=available_at,
            meta={
                "service_date": scheduled_date.isoformat() if scheduled_date else None,
                "service_time": target.scheduled_time,
                "total_price": amount,
                "commission_rate": 1,
            },
        )
        logger.info(f"💰 Credited {amount:.2f} to wallet of sitter {target.sitter_id}")
        return EarningsInfo(amount=amount, availableAt=available_at.isoformat() + "Z")
