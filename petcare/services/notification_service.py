"""
Unified Notification Service
Fans lifecycle events out to WhatsApp, email and push.
Every function here is best-effort: failures are logged and reported in the
result, never raised to the caller.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..models import User
from . import twilio_service
from .push_service import push_sender

logger = logging.getLogger(__name__)


def notify_users(
    db: Session, user_ids: list[str], title: str, body: str, data: Optional[dict] = None
) -> dict:
    """Push a notification to every device registered for the given users"""
    result = {"push_sent": 0, "push_error": None}
    try:
        tokens = [
            token
            for (token,) in db.query(User.fcm_token)
            .filter(User.id.in_(user_ids), User.fcm_token.isnot(None))
            .all()
        ]
        if not tokens:
            logger.debug(f"⚠️ No push tokens for users {user_ids}")
            return result

        result["push_sent"] = push_sender.send(tokens, title, body, data)
        logger.info(f"🔔 Push '{title}' delivered to {result['push_sent']}/{len(tokens)} devices")
    except Exception as e:
        result["push_error"] = str(e)
        logger.error(f"❌ Failed to send push '{title}' to {user_ids}: {e}")
    return result


def notify_service_started(db: Session, owner_user_id: str, booking_id: str) -> dict:
    return notify_users(
        db,
        [owner_user_id],
        title="Service Started",
        body="Your pet care service has started.",
        data={"bookingId": booking_id, "event": "service_started"},
    )


def notify_service_completed(db: Session, owner_user_id: str, booking_id: str) -> dict:
    return notify_users(
        db,
        [owner_user_id],
        title="Service Completed",
        body="Your pet care service has been completed.",
        data={"bookingId": booking_id, "event": "service_completed"},
    )


async def send_login_otp(phone: str, otp: str, ttl_minutes: int) -> tuple[bool, Optional[str]]:
    """Deliver a login code over WhatsApp"""
    try:
        return await twilio_service.send_login_otp_whatsapp(phone, otp, ttl_minutes)
    except Exception as e:
        logger.error(f"❌ Failed to send login OTP to {phone}: {e}")
        return False, str(e)


async def send_booking_confirmation(
    phone: Optional[str],
    email: Optional[str],
    user_name: Optional[str],
    booking_id: str,
    booking_date,
    booking_time: str,
    price,
    start_otp: Optional[str] = None,
    end_otp: Optional[str] = None,
) -> dict:
    """
    Send a booking confirmation over WhatsApp and email

    With both service codes the WhatsApp message is the full confirmation,
    otherwise it acknowledges the payment for an existing booking.

    Returns:
        Dict with whatsapp_sent and email_sent status
    """
    from ..email_service import send_booking_confirmation_email

    result = {"whatsapp_sent": False, "email_sent": False, "whatsapp_error": None, "email_error": None}

    if phone:
        try:
            if start_otp and end_otp:
                success, error = await twilio_service.send_booking_confirmed_whatsapp(
                    phone, booking_id, start_otp, end_otp
                )
            else:
                success, error = await twilio_service.send_payment_received_whatsapp(phone, booking_id)
            result["whatsapp_sent"] = success
            result["whatsapp_error"] = error
            if not success:
                logger.warning(f"⚠️ Booking confirmation WhatsApp not sent to {phone}: {error}")
        except Exception as e:
            result["whatsapp_error"] = str(e)
            logger.error(f"❌ Failed to send booking confirmation WhatsApp to {phone}: {e}")
    else:
        logger.debug(f"⚠️ No phone number for booking {booking_id} confirmation")

    if email:
        try:
            await send_booking_confirmation_email(
                to=email,
                user_name=user_name or "there",
                booking_id=booking_id,
                booking_date=booking_date,
                booking_time=booking_time,
                price=price,
            )
            result["email_sent"] = True
        except Exception as e:
            result["email_error"] = str(e)
            logger.error(f"❌ Failed to send booking confirmation email to {email}: {e}")
    else:
        logger.debug(f"⚠️ No email address for booking {booking_id} confirmation")

    return result
