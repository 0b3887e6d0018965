import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base

# Booking / session status values (stored upper-case, compared case-insensitively)
STATUS_PENDING = "PENDING"
STATUS_CONFIRMED = "CONFIRMED"
STATUS_ASSIGNED = "ASSIGNED"
STATUS_UPCOMING = "UPCOMING"
STATUS_ONGOING = "ONGOING"
STATUS_COMPLETED = "COMPLETED"
STATUS_CANCELLED = "CANCELLED"

OPEN_STATUSES = (STATUS_PENDING, STATUS_CONFIRMED, STATUS_ASSIGNED, STATUS_UPCOMING)
CLOSED_STATUSES = (STATUS_COMPLETED, STATUS_CANCELLED)

USER_TYPE_OWNER = "PET_OWNER"
USER_TYPE_SITTER = "SITTER"

OTP_TYPE_START = "START"
OTP_TYPE_END = "END"


def generate_public_id():
    """Generate a unique string ID"""
    return str(uuid.uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    phone = Column(String(20), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)  # Free-form profile address
    profile_image = Column(String(500), nullable=True)
    user_type = Column(String(20), default=USER_TYPE_OWNER, nullable=False)
    is_onboarded = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)  # Soft-delete flag
    fcm_token = Column(String(500), nullable=True)  # Push target for this user's device
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    sitter = relationship("Sitter", back_populates="user", uselist=False)
    pets = relationship("Pet", back_populates="owner")
    addresses = relationship("Address", back_populates="user")


class Sitter(Base):
    __tablename__ = "sitters"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)
    rating = Column(Float, default=0.0)
    experience = Column(Integer, default=0)  # Years
    bio = Column(Text, nullable=True)
    profile_picture = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="sitter")


class Pet(Base):
    __tablename__ = "pets"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    type = Column(String(50), nullable=False)  # dog, cat, ...
    breed = Column(String(100), nullable=True)
    age = Column(Integer, nullable=True)
    weight = Column(Float, nullable=True)
    special_instructions = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    owner = relationship("User", back_populates="pets")


class Service(Base):
    __tablename__ = "services"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False, default=0.0)
    duration = Column(Integer, nullable=True)  # Minutes
    category = Column(String(100), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class Address(Base):
    __tablename__ = "addresses"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    line1 = Column(String(255), nullable=False)
    line2 = Column(String(255), nullable=True)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    postal_code = Column(String(20), nullable=False)
    country = Column(String(100), nullable=True)
    landmark = Column(String(255), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    is_default = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="addresses")


class Booking(Base):
    """A single booking, or the parent plan of a recurring booking"""

    __tablename__ = "bookings"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    pet_id = Column(String(36), ForeignKey("pets.id"), nullable=False)
    service_id = Column(String(36), ForeignKey("services.id"), nullable=False)
    sitter_id = Column(String(36), ForeignKey("sitters.id"), nullable=True, index=True)
    address_id = Column(String(36), ForeignKey("addresses.id"), nullable=True)

    # Scheduling
    date = Column(Date, nullable=False, index=True)
    time = Column(String(10), nullable=False)  # HH:MM format
    duration = Column(Integer, nullable=True)  # Minutes

    # Status workflow: PENDING/CONFIRMED/ASSIGNED/UPCOMING → ONGOING → COMPLETED (or CANCELLED)
    status = Column(String(20), default=STATUS_PENDING, nullable=False, index=True)
    total_price = Column(Float, nullable=True)
    payment_status = Column(String(20), default="PENDING")
    payment_id = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    # Recurring plan
    is_recurring = Column(Boolean, default=False)
    recurring_pattern = Column(String(100), nullable=True)  # weekly_1_monday,friday
    recurring_end_date = Column(Date, nullable=True)

    # Actual execution times
    actual_start_time = Column(DateTime, nullable=True)
    actual_end_time = Column(DateTime, nullable=True)
    actual_duration = Column(Integer, nullable=True)  # Minutes
    completed_at = Column(DateTime, nullable=True)

    # Earnings
    sitter_earnings = Column(Float, nullable=True)
    platform_fee = Column(Float, nullable=True)
    earnings_processed = Column(Boolean, default=False)

    cancellation_reason = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship("User")
    pet = relationship("Pet")
    service = relationship("Service")
    sitter = relationship("Sitter")
    sessions = relationship("RecurringBooking", back_populates="booking")


class RecurringBooking(Base):
    """One dated session of a recurring booking plan, tracked on its own"""

    __tablename__ = "recurring_booking"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    pet_id = Column(String(36), ForeignKey("pets.id"), nullable=False)
    service_id = Column(String(36), ForeignKey("services.id"), nullable=False)
    sitter_id = Column(String(36), ForeignKey("sitters.id"), nullable=True, index=True)

    sequence_number = Column(Integer, nullable=False)  # 1-based within the plan
    session_date = Column(Date, nullable=False, index=True)
    session_time = Column(String(10), nullable=False)
    duration = Column(Integer, nullable=True)
    session_price = Column(Float, nullable=True)

    status = Column(String(20), default=STATUS_PENDING, nullable=False, index=True)
    payment_status = Column(String(20), default="PENDING")
    notes = Column(Text, nullable=True)

    service_started_at = Column(DateTime, nullable=True)
    service_ended_at = Column(DateTime, nullable=True)
    actual_duration = Column(Integer, nullable=True)
    cancellation_reason = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    booking = relationship("Booking", back_populates="sessions")
    user = relationship("User")
    pet = relationship("Pet")
    service = relationship("Service")
    sitter = relationship("Sitter")


class ServiceOtp(Base):
    """START/END code for exactly one booking or one recurring session"""

    __tablename__ = "service_otps"
    __table_args__ = (
        CheckConstraint(
            "(booking_id IS NULL) <> (recurring_booking_id IS NULL)",
            name="ck_service_otps_single_target",
        ),
    )

    id = Column(String(36), primary_key=True, default=generate_public_id)
    booking_id = Column(String(36), ForeignKey("bookings.id"), nullable=True, index=True)
    recurring_booking_id = Column(
        String(36), ForeignKey("recurring_booking.id"), nullable=True, index=True
    )
    type = Column(String(10), nullable=False)  # START or END
    otp = Column(String(10), nullable=False)
    is_used = Column(Boolean, default=False, nullable=False)
    expires_at = Column(DateTime, nullable=True)  # NULL means no expiry
    used_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())


class OtpCode(Base):
    """Login code scoped to a phone number"""

    __tablename__ = "otp_codes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    phone = Column(String(20), nullable=False, index=True)
    code = Column(String(10), nullable=False)
    user_type = Column(String(20), default=USER_TYPE_OWNER, nullable=False)
    expires_at = Column(DateTime, nullable=False)
    is_used = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class SitterWallet(Base):
    __tablename__ = "sitter_wallets"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    sitter_id = Column(String(36), ForeignKey("sitters.id"), unique=True, nullable=False)
    balance = Column(Float, default=0.0, nullable=False)
    pending_amount = Column(Float, default=0.0, nullable=False)
    total_earnings = Column(Float, default=0.0, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    transactions = relationship("WalletTransaction", back_populates="wallet")


class WalletTransaction(Base):
    __tablename__ = "wallet_transactions"

    id = Column(String(36), primary_key=True, default=generate_public_id)
    wallet_id = Column(String(36), ForeignKey("sitter_wallets.id"), nullable=False, index=True)
    booking_id = Column(String(36), nullable=False)  # Booking or recurring session id
    amount = Column(Float, nullable=False)
    type = Column(String(20), nullable=False)  # earning, payout
    status = Column(String(20), default="pending", nullable=False)
    description = Column(String(255), nullable=True)
    available_at = Column(DateTime, nullable=True)
    meta = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    wallet = relationship("SitterWallet", back_populates="transactions")
