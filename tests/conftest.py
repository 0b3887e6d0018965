"""
Pytest configuration and fixtures
"""

import os

# Settings must be in place before the application modules are imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["EXPOSE_OTP_IN_RESPONSE"] = "true"
os.environ["TWILIO_ACCOUNT_SID"] = ""
os.environ["TWILIO_AUTH_TOKEN"] = ""
os.environ["RESEND_API_KEY"] = ""
os.environ["ADMIN_EMAIL"] = ""
os.environ["FIREBASE_CREDENTIALS_PATH"] = ""

from datetime import date, timedelta  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from petcare.auth import create_access_token  # noqa: E402
from petcare.database import Base, get_db  # noqa: E402
from petcare.main import app  # noqa: E402
from petcare.models import (  # noqa: E402
    OTP_TYPE_START,
    STATUS_CONFIRMED,
    USER_TYPE_OWNER,
    USER_TYPE_SITTER,
    Address,
    Booking,
    Pet,
    RecurringBooking,
    Service,
    ServiceOtp,
    Sitter,
    User,
)


@pytest.fixture(scope="session")
def test_engine():
    """In-memory database shared by every connection of the test run"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(test_engine):
    """Fresh schema and session for each test"""
    Base.metadata.create_all(bind=test_engine)
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session):
    """Test client whose requests share the test session"""

    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {create_access_token(user)}"}

    return _headers


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_user(db_session):
    counter = {"n": 0}

    def _make(phone=None, user_type=USER_TYPE_OWNER, name="Test Owner", email=None, **kwargs):
        counter["n"] += 1
        user = User(
            phone=phone or f"+9198765432{counter['n']:02d}",
            user_type=user_type,
            name=name,
            email=email,
            **kwargs,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def make_sitter(db_session, make_user):
    def _make(name="Sam Sitter", rating=4.5, **kwargs):
        user = make_user(user_type=USER_TYPE_SITTER, name=name, **kwargs)
        sitter = Sitter(user_id=user.id, rating=rating)
        db_session.add(sitter)
        db_session.commit()
        db_session.refresh(sitter)
        return sitter

    return _make


@pytest.fixture
def make_pet(db_session):
    def _make(user, name="Buddy", type="dog", breed="Labrador"):
        pet = Pet(user_id=user.id, name=name, type=type, breed=breed)
        db_session.add(pet)
        db_session.commit()
        db_session.refresh(pet)
        return pet

    return _make


@pytest.fixture
def make_service(db_session):
    def _make(name="Dog Walking", price=500.0, category="walking", is_active=True):
        service = Service(
            name=name, description=f"{name} service", price=price, duration=60,
            category=category, is_active=is_active,
        )
        db_session.add(service)
        db_session.commit()
        db_session.refresh(service)
        return service

    return _make


@pytest.fixture
def make_address(db_session):
    def _make(user, line1="12 MG Road", city="Bengaluru", state="Karnataka", is_default=True):
        address = Address(
            user_id=user.id, line1=line1, city=city, state=state,
            postal_code="560001", country="India", is_default=is_default,
        )
        db_session.add(address)
        db_session.commit()
        db_session.refresh(address)
        return address

    return _make


@pytest.fixture
def make_booking(db_session, make_user, make_pet, make_service):
    def _make(user=None, pet=None, service=None, sitter=None, status=STATUS_CONFIRMED,
              booking_date=None, time="10:00", total_price=500.0, **kwargs):
        user = user or make_user()
        pet = pet or make_pet(user)
        service = service or make_service()
        booking = Booking(
            user_id=user.id,
            pet_id=pet.id,
            service_id=service.id,
            sitter_id=sitter.id if sitter else None,
            date=booking_date or date.today() + timedelta(days=1),
            time=time,
            duration=60,
            status=status,
            total_price=total_price,
            **kwargs,
        )
        db_session.add(booking)
        db_session.commit()
        db_session.refresh(booking)
        return booking

    return _make


@pytest.fixture
def make_session(db_session):
    def _make(booking, sequence_number=1, sitter=None, status=STATUS_CONFIRMED,
              session_date=None, time="09:00", session_price=300.0, **kwargs):
        session = RecurringBooking(
            booking_id=booking.id,
            user_id=booking.user_id,
            pet_id=booking.pet_id,
            service_id=booking.service_id,
            sitter_id=sitter.id if sitter else None,
            sequence_number=sequence_number,
            session_date=session_date or date.today() + timedelta(days=sequence_number),
            session_time=time,
            duration=60,
            session_price=session_price,
            status=status,
            **kwargs,
        )
        db_session.add(session)
        db_session.commit()
        db_session.refresh(session)
        return session

    return _make


@pytest.fixture
def make_service_otp(db_session):
    def _make(booking=None, session=None, type=OTP_TYPE_START, otp="123456", expires_at=None):
        row = ServiceOtp(
            booking_id=booking.id if booking else None,
            recurring_booking_id=session.id if session else None,
            type=type,
            otp=otp,
            is_used=False,
            expires_at=expires_at,
        )
        db_session.add(row)
        db_session.commit()
        db_session.refresh(row)
        return row

    return _make
