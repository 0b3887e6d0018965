"""
Email Service using Resend
"""

import logging
from typing import Optional, Union

import resend

from .config import ADMIN_EMAIL, EMAIL_FROM_ADDRESS, FRONTEND_URL, RESEND_API_KEY
from .email_templates import booking_confirmed_template, new_booking_admin_template

logger = logging.getLogger(__name__)

resend.api_key = RESEND_API_KEY


async def send_email(
    to: Union[str, list[str]],
    subject: str,
    html_content: str,
    from_address: Optional[str] = None,
) -> dict:
    """
    Send an email through Resend

    Raises:
        Exception: If the email service is not configured or the send fails
    """
    recipients = to if isinstance(to, list) else [to]
    sender = from_address or EMAIL_FROM_ADDRESS

    if not RESEND_API_KEY:
        logger.error("❌ No email service configured - RESEND_API_KEY missing")
        raise Exception("Email service not configured")

    try:
        logger.info(f"📧 Sending email via Resend to: {to}")
        response = resend.Emails.send(
            {
                "from": sender,
                "to": recipients,
                "subject": subject,
                "html": html_content,
            }
        )
        logger.info(f"✅ Email sent successfully via Resend: {response}")
        return response
    except Exception as e:
        logger.error(f"❌ Email send error to {recipients}: {e}")
        raise Exception(f"Failed to send email: {str(e)}") from e


async def send_booking_confirmation_email(
    to: str,
    user_name: str,
    booking_id: str,
    booking_date,
    booking_time: str,
    price,
) -> dict:
    """Send the owner's booking confirmation and, when configured, the admin alert"""
    booking_url = f"{FRONTEND_URL}/booking-details/{booking_id}"
    response = await send_email(
        to=to,
        subject="🎉 Your Pet's Booking is Confirmed! 🐾",
        html_content=booking_confirmed_template(
            user_name, booking_id, booking_date, booking_time, price, booking_url
        ),
    )

    if ADMIN_EMAIL:
        await send_email(
            to=ADMIN_EMAIL,
            subject=f"📢 New Booking: ID {booking_id}",
            html_content=new_booking_admin_template(
                user_name, to, booking_id, booking_date, booking_time, price
            ),
        )
        logger.info(f"✅ Email sent to admin: {ADMIN_EMAIL}")

    return response
