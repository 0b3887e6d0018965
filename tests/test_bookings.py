"""
Tests for booking creation, listing, cancellation and confirmation
"""

from datetime import date, timedelta

import pytest

from petcare.domain.bookings.repository import BookingRepository
from petcare.models import (
    OTP_TYPE_END,
    OTP_TYPE_START,
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_ONGOING,
    STATUS_PENDING,
    Booking,
    RecurringBooking,
    ServiceOtp,
)


@pytest.fixture
def owner(make_user):
    return make_user(name="Priya", email="priya@example.com")


@pytest.fixture
def booking_payload(owner, make_pet, make_service):
    pet = make_pet(owner)
    service = make_service(price=400.0)
    return {
        "petId": pet.id,
        "serviceId": service.id,
        "date": (date.today() + timedelta(days=2)).isoformat(),
        "time": "10:30",
    }


class TestCreateBooking:
    def test_single_booking_gets_start_and_end_codes(
        self, client, db_session, owner, booking_payload, auth_headers
    ):
        response = client.post("/api/bookings", json=booking_payload, headers=auth_headers(owner))

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["paymentStatus"] == "PENDING"
        assert len(data["startOtp"]) == 6
        assert len(data["endOtp"]) == 6
        assert "sessionsCreated" not in data

        booking = db_session.get(Booking, data["bookingId"])
        assert booking.status == STATUS_PENDING
        assert booking.total_price == 400.0
        assert booking.duration == 60
        assert booking.is_recurring is False
        codes = {
            row.type: row.otp
            for row in db_session.query(ServiceOtp).filter_by(booking_id=booking.id)
        }
        assert codes == {OTP_TYPE_START: data["startOtp"], OTP_TYPE_END: data["endOtp"]}

    def test_pay_now_marks_paid(self, client, owner, booking_payload, auth_headers):
        booking_payload["paymentOption"] = "pay-now"

        response = client.post("/api/bookings", json=booking_payload, headers=auth_headers(owner))

        assert response.json()["paymentStatus"] == "PAID"

    def test_recurring_plan_expands_into_sessions(
        self, client, db_session, owner, booking_payload, auth_headers
    ):
        start = date(2030, 1, 7)  # Monday
        booking_payload.update(
            date=start.isoformat(),
            recurring=True,
            recurringPattern="weekly_1_monday,thursday",
            recurringEndDate=(start + timedelta(days=13)).isoformat(),
            paymentOption="pay-later",
        )

        response = client.post("/api/bookings", json=booking_payload, headers=auth_headers(owner))

        assert response.status_code == 200
        data = response.json()
        assert data["sessionsCreated"] == 4
        assert data["totalAmount"] == 1600.0
        assert "startOtp" not in data

        plan = db_session.get(Booking, data["bookingId"])
        assert plan.is_recurring is True
        sessions = (
            db_session.query(RecurringBooking)
            .filter_by(booking_id=plan.id)
            .order_by(RecurringBooking.sequence_number)
            .all()
        )
        assert [s.session_date for s in sessions] == [
            date(2030, 1, 7), date(2030, 1, 10), date(2030, 1, 14), date(2030, 1, 17),
        ]
        assert [s.sequence_number for s in sessions] == [1, 2, 3, 4]
        for session in sessions:
            types = sorted(
                row.type for row in db_session.query(ServiceOtp).filter_by(recurring_booking_id=session.id)
            )
            assert types == [OTP_TYPE_END, OTP_TYPE_START]
        assert db_session.query(ServiceOtp).filter_by(booking_id=plan.id).count() == 0

    def test_malformed_pattern(self, client, db_session, owner, booking_payload, auth_headers):
        booking_payload.update(
            recurring=True, recurringPattern="weekly_1_someday", recurringEndDate="2030-02-01"
        )

        response = client.post("/api/bookings", json=booking_payload, headers=auth_headers(owner))

        assert response.status_code == 400
        assert db_session.query(Booking).count() == 0

    def test_missing_fields(self, client, owner, booking_payload, auth_headers):
        del booking_payload["time"]

        response = client.post("/api/bookings", json=booking_payload, headers=auth_headers(owner))

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"

    def test_pet_of_another_owner(self, client, make_user, booking_payload, auth_headers):
        stranger = make_user(name="Stranger")

        response = client.post("/api/bookings", json=booking_payload, headers=auth_headers(stranger))

        assert response.status_code == 404
        assert response.json()["error"] == "Pet not found or access denied"

    def test_inactive_service(self, client, owner, make_service, booking_payload, auth_headers):
        booking_payload["serviceId"] = make_service(name="Retired", is_active=False).id

        response = client.post("/api/bookings", json=booking_payload, headers=auth_headers(owner))

        assert response.status_code == 404
        assert response.json()["error"] == "Service not found"

    def test_requires_token(self, client, booking_payload):
        assert client.post("/api/bookings", json=booking_payload).status_code == 401


class TestListBookings:
    def test_lists_own_bookings_with_codes(
        self, client, owner, make_booking, make_sitter, make_service_otp, make_user, auth_headers
    ):
        sitter = make_sitter(name="Sam Sitter")
        booking = make_booking(user=owner, sitter=sitter)
        make_service_otp(booking=booking, type=OTP_TYPE_START, otp="111111")
        make_service_otp(booking=booking, type=OTP_TYPE_END, otp="222222")
        make_booking(user=make_user(name="Someone else"))

        response = client.get("/api/bookings", headers=auth_headers(owner))

        assert response.status_code == 200
        bookings = response.json()
        assert len(bookings) == 1
        assert bookings[0]["id"] == booking.id
        assert bookings[0]["startOtp"] == "111111"
        assert bookings[0]["endOtp"] == "222222"
        assert bookings[0]["sitterName"] == "Sam Sitter"
        assert bookings[0]["petName"] == "Buddy"


class TestUpcomingBooking:
    def test_returns_earliest_open_booking(self, client, owner, make_booking):
        today = date.today()
        make_booking(user=owner, booking_date=today + timedelta(days=5))
        earliest = make_booking(user=owner, booking_date=today + timedelta(days=1), status="confirmed")
        make_booking(user=owner, booking_date=today, status=STATUS_COMPLETED)
        make_booking(user=owner, booking_date=today - timedelta(days=1))

        response = client.get("/api/bookings/upcoming", params={"userId": owner.id})

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == earliest.id
        assert data["sitterName"] == "Sitter not assigned"

    def test_same_day_ordered_by_time(self, client, owner, make_booking):
        tomorrow = date.today() + timedelta(days=1)
        make_booking(user=owner, booking_date=tomorrow, time="15:00")
        morning = make_booking(user=owner, booking_date=tomorrow, time="08:00")

        response = client.get("/api/bookings/upcoming", params={"userId": owner.id})

        assert response.json()["id"] == morning.id

    def test_none_found(self, client, owner):
        response = client.get("/api/bookings/upcoming", params={"userId": owner.id})

        assert response.status_code == 404
        assert response.json()["error"] == "No upcoming booking found"

    def test_requires_user_id(self, client):
        assert client.get("/api/bookings/upcoming").status_code == 400


class TestOngoingBookings:
    def test_combines_bookings_and_sessions(
        self, client, owner, make_booking, make_session, make_sitter
    ):
        today = date.today()
        sitter = make_sitter(name="Ravi")
        regular = make_booking(user=owner, sitter=sitter, status=STATUS_ONGOING, booking_date=today)
        plan = make_booking(user=owner, is_recurring=True)
        session = make_session(plan, status="ongoing", session_date=today + timedelta(days=1))
        make_booking(user=owner, status=STATUS_COMPLETED)

        response = client.get("/api/bookings/ongoing", params={"ownerId": owner.id})

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert [b["id"] for b in data["bookings"]] == [session.id, regular.id]
        assert data["bookings"][0]["bookingType"] == "recurring_session"
        assert data["bookings"][0]["sitterName"] == "Sitter not assigned"
        assert data["bookings"][1]["sitterName"] == "Ravi"

    def test_requires_owner_id(self, client):
        assert client.get("/api/bookings/ongoing").status_code == 400


class TestCancellation:
    def test_cancel_open_booking(self, client, db_session, owner, make_booking, auth_headers):
        booking = make_booking(user=owner)

        response = client.post(
            "/api/bookings/cancel",
            json={"bookingId": booking.id, "reason": "Travelling"},
            headers=auth_headers(owner),
        )

        assert response.status_code == 200
        db_session.refresh(booking)
        assert booking.status == STATUS_CANCELLED
        assert booking.cancellation_reason == "Travelling"

    def test_cannot_cancel_recurring_plan(self, client, owner, make_booking, auth_headers):
        plan = make_booking(user=owner, is_recurring=True)

        response = client.post(
            "/api/bookings/cancel", json={"bookingId": plan.id}, headers=auth_headers(owner)
        )

        assert response.status_code == 400
        assert "individual sessions" in response.json()["error"]

    def test_cannot_cancel_started_booking(self, client, owner, make_booking, auth_headers):
        booking = make_booking(user=owner, status=STATUS_ONGOING)

        response = client.post(
            "/api/bookings/cancel", json={"bookingId": booking.id}, headers=auth_headers(owner)
        )

        assert response.status_code == 400

    def test_cannot_cancel_someone_elses_booking(
        self, client, owner, make_user, make_booking, auth_headers
    ):
        booking = make_booking(user=make_user(name="Other"))

        response = client.post(
            "/api/bookings/cancel", json={"bookingId": booking.id}, headers=auth_headers(owner)
        )

        assert response.status_code == 404

    def test_cancel_session(self, client, db_session, owner, make_booking, make_session, auth_headers):
        plan = make_booking(user=owner, is_recurring=True)
        session = make_session(plan, sequence_number=3, status="upcoming")

        response = client.post(
            "/api/bookings/recurring/cancel-session",
            json={"sessionId": session.id, "reason": "Sick pet"},
            headers=auth_headers(owner),
        )

        assert response.status_code == 200
        assert response.json()["sequenceNumber"] == 3
        db_session.refresh(session)
        db_session.refresh(plan)
        assert session.status == STATUS_CANCELLED
        assert plan.status != STATUS_CANCELLED

    def test_cancel_session_requires_reason(self, client, owner, make_booking, make_session, auth_headers):
        session = make_session(make_booking(user=owner, is_recurring=True))

        response = client.post(
            "/api/bookings/recurring/cancel-session",
            json={"sessionId": session.id},
            headers=auth_headers(owner),
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"


class TestSendConfirmation:
    def test_defaults_to_owner_phone(self, client, owner, make_booking, monkeypatch):
        calls = []

        async def fake_confirmation(**kwargs):
            calls.append(kwargs)
            return {"whatsapp_sent": True, "email_sent": True, "whatsapp_error": None, "email_error": None}

        monkeypatch.setattr(
            "petcare.services.notification_service.send_booking_confirmation", fake_confirmation
        )
        booking = make_booking(user=owner)

        response = client.post(
            "/api/bookings/send-confirmation",
            json={"bookingId": booking.id, "startOtp": "111111", "endOtp": "222222"},
        )

        assert response.status_code == 200
        assert response.json()["whatsappSent"] is True
        assert calls[0]["phone"] == owner.phone
        assert calls[0]["email"] == "priya@example.com"
        assert calls[0]["start_otp"] == "111111"

    def test_unconfigured_channels_do_not_fail(self, client, owner, make_booking, make_session):
        session = make_session(make_booking(user=owner, is_recurring=True))

        response = client.post(
            "/api/bookings/send-confirmation",
            json={"bookingId": session.id, "isRecurring": True, "phone": "+919999999999"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["bookingId"] == session.id
        assert data["whatsappSent"] is True
        assert data["emailSent"] is False

    def test_unknown_booking(self, client):
        response = client.post("/api/bookings/send-confirmation", json={"bookingId": "missing"})

        assert response.status_code == 404

    def test_lookup_failure_is_reported(self, client, monkeypatch):
        def broken(db, booking_id):
            raise RuntimeError("database unavailable")

        monkeypatch.setattr(BookingRepository, "get_booking", staticmethod(broken))

        response = client.post("/api/bookings/send-confirmation", json={"bookingId": "b1"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to send confirmation"}
