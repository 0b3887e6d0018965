"""Booking service - Business logic for booking creation, listing and cancellation"""

import logging
from datetime import date, datetime
from typing import Optional, Union

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import DEFAULT_BOOKING_DURATION
from ...models import (
    OPEN_STATUSES,
    OTP_TYPE_END,
    OTP_TYPE_START,
    STATUS_CANCELLED,
    STATUS_PENDING,
    Booking,
    RecurringBooking,
    User,
)
from ...services import notification_service
from ...shared.validators import generate_numeric_otp
from ..lifecycle.targets import BookingKind
from .recurrence import expand_recurring_pattern
from .repository import BookingRepository
from .schemas import (
    BookingCreate,
    BookingCreateResponse,
    BookingResponse,
    CancelBookingRequest,
    CancelResponse,
    CancelSessionRequest,
    OngoingBooking,
    OngoingBookingsResponse,
    SendConfirmationRequest,
    SendConfirmationResponse,
    UpcomingBookingResponse,
)

logger = logging.getLogger(__name__)

SITTER_NOT_ASSIGNED = "Sitter not assigned"
PAYMENT_PAID = "PAID"
PAYMENT_PENDING = "PENDING"


def _sitter_user(record: Union[Booking, RecurringBooking]) -> Optional[User]:
    return record.sitter.user if record.sitter else None


def _is_open(status: Optional[str]) -> bool:
    return (status or "").upper() in OPEN_STATUSES


class BookingService:
    """Service layer for booking operations"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------

    def _issue_service_otps(self, booking_id=None, session_id=None) -> tuple[str, str]:
        """Create the START and END codes for one booking or one session"""
        start_otp = generate_numeric_otp(6)
        end_otp = generate_numeric_otp(6)
        for otp_type, value in ((OTP_TYPE_START, start_otp), (OTP_TYPE_END, end_otp)):
            self.repo.create_service_otp(
                self.db,
                booking_id=booking_id,
                recurring_booking_id=session_id,
                type=otp_type,
                otp=value,
                is_used=False,
            )
        return start_otp, end_otp

    def create_booking(self, data: BookingCreate, current_user: User) -> BookingCreateResponse:
        """
        Create a booking for the current user.

        A recurring request with a pattern and an end date becomes a plan row
        plus one session per generated date, each with its own START/END
        codes. Anything else is a single booking with one pair of codes.
        Everything is committed together.
        """
        if not data.petId or not data.serviceId or not data.date or not data.time:
            raise HTTPException(status_code=400, detail="Missing required fields")

        is_recurring = bool(data.recurring and data.recurringPattern and data.recurringEndDate)
        slots = []
        if is_recurring:
            try:
                slots = expand_recurring_pattern(
                    data.date, data.recurringEndDate, data.recurringPattern, data.time
                )
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e)) from e

        try:
            if not self.repo.get_owned_pet(self.db, data.petId, current_user.id):
                raise HTTPException(status_code=404, detail="Pet not found or access denied")

            service = self.repo.get_active_service(self.db, data.serviceId)
            if not service:
                raise HTTPException(status_code=404, detail="Service not found")

            service_price = float(service.price or 0)
            duration = data.duration or DEFAULT_BOOKING_DURATION
            payment_status = PAYMENT_PAID if data.paymentOption == "pay-now" else PAYMENT_PENDING
            logger.info(
                f"📝 Creating {'recurring' if is_recurring else 'single'} booking for user "
                f"{current_user.id} (payment: {payment_status})"
            )

            booking = self.repo.create_booking(
                self.db,
                user_id=current_user.id,
                pet_id=data.petId,
                service_id=data.serviceId,
                address_id=data.addressId,
                date=data.date,
                time=data.time,
                duration=duration,
                status=STATUS_PENDING,
                total_price=data.totalPrice or service_price,
                payment_status=payment_status,
                payment_id=data.paymentId,
                notes=data.notes or "Booking created",
                is_recurring=is_recurring,
                recurring_pattern=data.recurringPattern if is_recurring else None,
                recurring_end_date=data.recurringEndDate if is_recurring else None,
            )

            if is_recurring:
                for slot in slots:
                    session = self.repo.create_session(
                        self.db,
                        booking_id=booking.id,
                        user_id=current_user.id,
                        pet_id=data.petId,
                        service_id=data.serviceId,
                        sequence_number=slot.sequence_number,
                        session_date=slot.date,
                        session_time=slot.time,
                        duration=duration,
                        session_price=service_price,
                        status=STATUS_PENDING,
                        payment_status=payment_status,
                        notes=f"Session {slot.sequence_number} of recurring booking",
                    )
                    self._issue_service_otps(session_id=session.id)
                booking_id = booking.id
                self.db.commit()

                logger.info(f"✅ Recurring booking {booking_id} created with {len(slots)} sessions")
                return BookingCreateResponse(
                    success=True,
                    message=f"Recurring booking created successfully with {len(slots)} sessions",
                    bookingId=booking_id,
                    paymentStatus=payment_status,
                    sessionsCreated=len(slots),
                    totalAmount=data.totalPrice or service_price * len(slots),
                )

            start_otp, end_otp = self._issue_service_otps(booking_id=booking.id)
            booking_id = booking.id
            self.db.commit()
        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error creating booking for user {current_user.id}: {str(e)}")
            logger.exception("Full error traceback:")
            raise HTTPException(status_code=500, detail="Failed to create booking") from e

        logger.info(f"✅ Booking {booking_id} created")
        return BookingCreateResponse(
            success=True,
            message=(
                "Booking created successfully"
                if payment_status == PAYMENT_PAID
                else "Booking created successfully - payment pending"
            ),
            bookingId=booking_id,
            paymentStatus=payment_status,
            startOtp=start_otp,
            endOtp=end_otp,
        )

    # ------------------------------------------------------------------
    # Read APIs
    # ------------------------------------------------------------------

    def get_bookings(self, current_user: User) -> list[BookingResponse]:
        """All bookings of the current user, newest first"""
        try:
            bookings = self.repo.get_user_bookings(self.db, current_user.id)
            otps = self.repo.get_booking_otps(self.db, [b.id for b in bookings])
        except Exception as e:
            logger.error(f"❌ Error fetching bookings for user {current_user.id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to fetch bookings") from e

        logger.info(f"✅ Found {len(bookings)} bookings for user {current_user.id}")
        results = []
        for b in bookings:
            sitter_user = _sitter_user(b)
            results.append(
                BookingResponse(
                    id=b.id,
                    userId=b.user_id,
                    petId=b.pet_id,
                    serviceId=b.service_id,
                    sitterId=b.sitter_id,
                    addressId=b.address_id,
                    date=b.date,
                    time=b.time,
                    duration=b.duration,
                    status=b.status,
                    totalPrice=float(b.total_price or 0),
                    paymentStatus=b.payment_status,
                    paymentId=b.payment_id,
                    notes=b.notes,
                    recurring=bool(b.is_recurring),
                    recurringPattern=b.recurring_pattern,
                    recurringEndDate=b.recurring_end_date,
                    actualStartTime=b.actual_start_time,
                    actualEndTime=b.actual_end_time,
                    actualDuration=b.actual_duration,
                    createdAt=b.created_at,
                    updatedAt=b.updated_at,
                    petName=b.pet.name if b.pet else None,
                    petType=b.pet.type if b.pet else None,
                    petBreed=b.pet.breed if b.pet else None,
                    serviceName=b.service.name if b.service else None,
                    serviceDescription=b.service.description if b.service else None,
                    servicePrice=float(b.service.price or 0) if b.service else 0.0,
                    serviceDuration=b.service.duration if b.service else None,
                    sitterName=sitter_user.name if sitter_user else None,
                    sitterPhone=sitter_user.phone if sitter_user else None,
                    sitterEmail=sitter_user.email if sitter_user else None,
                    sitterRating=float(b.sitter.rating or 0) if b.sitter else 0.0,
                    sitterImage=b.sitter.profile_picture if b.sitter else None,
                    startOtp=otps.get((b.id, OTP_TYPE_START)),
                    endOtp=otps.get((b.id, OTP_TYPE_END)),
                )
            )
        return results

    def get_upcoming_booking(self, user_id: Optional[str]) -> UpcomingBookingResponse:
        """Earliest open booking of a user dated today or later"""
        if not user_id:
            raise HTTPException(status_code=400, detail="User ID is required")

        logger.info(f"🔍 Fetching upcoming booking for user: {user_id}")
        try:
            booking = self.repo.get_next_open_booking(self.db, user_id, date.today())
        except Exception as e:
            logger.error(f"❌ Error fetching upcoming booking for {user_id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to fetch upcoming booking") from e

        if not booking:
            raise HTTPException(status_code=404, detail="No upcoming booking found")

        sitter_user = _sitter_user(booking)
        return UpcomingBookingResponse(
            id=booking.id,
            date=booking.date,
            time=booking.time,
            status=booking.status,
            totalPrice=float(booking.total_price or 0),
            notes=booking.notes,
            serviceName=booking.service.name if booking.service else None,
            petName=booking.pet.name if booking.pet else None,
            petType=booking.pet.type if booking.pet else None,
            sitterName=(sitter_user.name if sitter_user and sitter_user.name else SITTER_NOT_ASSIGNED),
            sitterRating=booking.sitter.rating if booking.sitter else None,
        )

    def get_ongoing_bookings(self, owner_id: Optional[str]) -> OngoingBookingsResponse:
        """Bookings and recurring sessions of an owner that are in progress"""
        if not owner_id:
            raise HTTPException(status_code=400, detail="Owner ID is required")

        try:
            bookings = self.repo.get_ongoing_bookings(self.db, owner_id)
            sessions = self.repo.get_ongoing_sessions(self.db, owner_id)
        except Exception as e:
            logger.error(f"❌ Error fetching ongoing bookings for {owner_id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to fetch ongoing bookings") from e

        results = []
        for b in bookings:
            sitter_user = _sitter_user(b)
            results.append(
                OngoingBooking(
                    id=b.id,
                    bookingType=BookingKind.REGULAR.value,
                    date=b.date,
                    time=b.time,
                    duration=b.duration,
                    status=b.status,
                    amount=float(b.total_price or 0),
                    notes=b.notes,
                    startedAt=b.actual_start_time,
                    sitterName=sitter_user.name if sitter_user and sitter_user.name else SITTER_NOT_ASSIGNED,
                    sitterPhone=sitter_user.phone if sitter_user else None,
                    petName=b.pet.name if b.pet else "Pet",
                )
            )
        for s in sessions:
            sitter_user = _sitter_user(s)
            results.append(
                OngoingBooking(
                    id=s.id,
                    bookingType=BookingKind.RECURRING_SESSION.value,
                    date=s.session_date,
                    time=s.session_time,
                    duration=s.duration,
                    status=s.status,
                    amount=float(s.session_price or 0),
                    notes=s.notes,
                    startedAt=s.service_started_at,
                    sitterName=sitter_user.name if sitter_user and sitter_user.name else SITTER_NOT_ASSIGNED,
                    sitterPhone=sitter_user.phone if sitter_user else None,
                    petName=s.pet.name if s.pet else "Pet",
                    sequenceNumber=s.sequence_number,
                )
            )

        results.sort(key=lambda r: (r.date, r.time), reverse=True)
        logger.info(f"✅ Found {len(results)} ongoing bookings for owner {owner_id}")
        return OngoingBookingsResponse(success=True, bookings=results)

    # ------------------------------------------------------------------
    # Cancellation
    # ------------------------------------------------------------------

    def cancel_booking(self, data: CancelBookingRequest, current_user: User) -> CancelResponse:
        if not data.bookingId:
            raise HTTPException(status_code=400, detail="Booking ID is required")

        try:
            booking = self.repo.get_user_booking(self.db, data.bookingId, current_user.id)
            if not booking:
                raise HTTPException(status_code=404, detail="Booking not found")

            if booking.is_recurring:
                raise HTTPException(
                    status_code=400,
                    detail="Cannot cancel entire recurring booking. Please cancel individual sessions instead.",
                )

            if not _is_open(booking.status):
                raise HTTPException(status_code=400, detail="This booking cannot be cancelled")

            booking.status = STATUS_CANCELLED
            booking.cancellation_reason = data.reason
            booking.updated_at = datetime.utcnow()
            booking_id = booking.id
            self.db.commit()
        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error cancelling booking {data.bookingId}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to cancel booking") from e

        logger.info(f"🚫 Booking {booking_id} cancelled by user {current_user.id}")
        return CancelResponse(success=True, message="Booking cancelled successfully", bookingId=booking_id)

    def cancel_session(self, data: CancelSessionRequest, current_user: User) -> CancelResponse:
        if not data.sessionId or not data.reason:
            raise HTTPException(status_code=400, detail="Missing required fields")

        try:
            session = self.repo.get_user_session(self.db, data.sessionId, current_user.id)
            if not session:
                raise HTTPException(status_code=404, detail="Session not found")

            if not _is_open(session.status):
                raise HTTPException(
                    status_code=400,
                    detail=f"This session cannot be cancelled. Current status: {session.status}",
                )

            session.status = STATUS_CANCELLED
            session.cancellation_reason = data.reason
            session.updated_at = datetime.utcnow()
            session_id = session.id
            sequence_number = session.sequence_number
            self.db.commit()
        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error cancelling session {data.sessionId}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to cancel session") from e

        logger.info(f"🚫 Session {session_id} (#{sequence_number}) cancelled by user {current_user.id}")
        return CancelResponse(
            success=True,
            message="Session cancelled successfully",
            sessionId=session_id,
            sequenceNumber=sequence_number,
        )

    # ------------------------------------------------------------------
    # Confirmation
    # ------------------------------------------------------------------

    async def send_confirmation(self, data: SendConfirmationRequest) -> SendConfirmationResponse:
        """Send the booking confirmation (or payment receipt) over WhatsApp and email"""
        if not data.bookingId:
            raise HTTPException(status_code=400, detail="Booking ID is required")

        try:
            if data.isRecurring:
                record = self.repo.get_session(self.db, data.bookingId)
            else:
                record = self.repo.get_booking(self.db, data.bookingId)
            if not record:
                raise HTTPException(status_code=404, detail="Booking not found")

            if isinstance(record, RecurringBooking):
                booking_date, booking_time, price = record.session_date, record.session_time, record.session_price
            else:
                booking_date, booking_time, price = record.date, record.time, record.total_price

            owner = record.user
            phone = data.phone or (owner.phone if owner else None)
            logger.info(f"📩 Sending booking confirmation for {record.id} to {phone}")

            result = await notification_service.send_booking_confirmation(
                phone=phone,
                email=owner.email if owner else None,
                user_name=owner.name if owner else None,
                booking_id=record.id,
                booking_date=booking_date,
                booking_time=booking_time,
                price=float(price or 0),
                start_otp=data.startOtp,
                end_otp=data.endOtp,
            )
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"❌ Error sending confirmation for {data.bookingId}: {str(e)}")
            logger.exception("Full error traceback:")
            raise HTTPException(status_code=500, detail="Failed to send confirmation") from e

        return SendConfirmationResponse(
            success=True,
            message="Confirmation dispatched",
            bookingId=record.id,
            whatsappSent=result["whatsapp_sent"],
            emailSent=result["email_sent"],
        )
