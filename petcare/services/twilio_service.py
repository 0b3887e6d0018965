"""
Twilio WhatsApp Service
Sends templated WhatsApp messages for login codes and booking events
"""

import logging
from typing import Optional

import httpx

from ..config import TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN, TWILIO_WHATSAPP_NUMBER
from ..shared.validators import format_whatsapp_phone

logger = logging.getLogger(__name__)

TWILIO_MESSAGES_URL = "https://api.twilio.com/2010-04-01/Accounts/{account_sid}/Messages.json"


def is_configured() -> bool:
    return bool(TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN)


async def send_whatsapp_message(to_phone: str, message_body: str) -> tuple[bool, Optional[str]]:
    """
    Send a WhatsApp text via the Twilio Messages API

    Args:
        to_phone: Recipient phone number, normalized before sending
        message_body: Fully rendered message

    Returns:
        Tuple of (success: bool, error_message: Optional[str])
    """
    if not to_phone:
        logger.debug("No phone number provided for WhatsApp message")
        return False, "No phone number provided"

    formatted_phone = format_whatsapp_phone(to_phone)

    if not is_configured():
        logger.info(f"📲 Twilio not configured - WhatsApp message to {formatted_phone} logged only")
        logger.debug(message_body)
        return True, None

    try:
        logger.info(f"🚀 Sending WhatsApp message to {formatted_phone}")
        async with httpx.AsyncClient() as client:
            response = await client.post(
                TWILIO_MESSAGES_URL.format(account_sid=TWILIO_ACCOUNT_SID),
                auth=(TWILIO_ACCOUNT_SID, TWILIO_AUTH_TOKEN),
                data={
                    "From": f"whatsapp:{TWILIO_WHATSAPP_NUMBER}",
                    "To": f"whatsapp:{formatted_phone}",
                    "Body": message_body,
                },
                timeout=10.0,
            )

        logger.info(f"📡 Twilio API response status: {response.status_code}")

        if response.status_code in [200, 201]:
            message_sid = response.json().get("sid")
            logger.info(f"✅ WhatsApp message sent to {formatted_phone} (SID: {message_sid})")
            return True, None

        try:
            error_data = response.json()
        except ValueError:
            error_data = {}
        error_message = error_data.get("message", response.text or "Unknown error")
        error_code = error_data.get("code")
        logger.error(f"❌ Twilio API error [{error_code}]: {error_message}")
        return False, error_message

    except httpx.HTTPError as e:
        logger.error(f"Twilio API error: {str(e)}")
        return False, str(e)
    except Exception as e:
        logger.error(f"Error sending WhatsApp message: {str(e)}")
        return False, str(e)


# WhatsApp Template Functions
async def send_login_otp_whatsapp(phone: str, otp: str, ttl_minutes: int):
    """Send the login verification code"""
    message = (
        f"🔐 Your PetCare OTP\n\n"
        f"Your verification code is: {otp}\n\n"
        f"⏰ This code expires in {ttl_minutes} minutes\n"
        f"🔒 Do not share this code with anyone\n\n"
        f"Welcome to PetCare! 🐾"
    )
    return await send_whatsapp_message(phone, message)


async def send_booking_confirmed_whatsapp(phone: str, booking_id: str, start_otp: str, end_otp: str):
    """Send the booking confirmation carrying both service codes"""
    message = (
        f"🐾 *PetCare Booking Confirmed!*\n\n"
        f"Your pet care service has been booked successfully!\n\n"
        f"📋 *Booking Details:*\n"
        f"• Booking ID: {booking_id}\n"
        f"• Service start OTP: *{start_otp}*\n"
        f"• Service end OTP: *{end_otp}*\n"
        f"• Status: Confirmed ✅\n\n"
        f"🔐 *Important:*\n"
        f"Please share the Service OTP with your caretaker when they arrive. "
        f"This OTP is required to start and end the service.\n\n"
        f"🚫 *Do not share this OTP with anyone else*\n\n"
        f"Thank you for choosing PetCare! 🐕🐱"
    )
    return await send_whatsapp_message(phone, message)


async def send_payment_received_whatsapp(phone: str, booking_id: str):
    """Send the payment acknowledgement for an existing booking"""
    message = (
        f"💳 *Payment Received!*\n\n"
        f"We've successfully received your payment for Booking ID: *{booking_id}*.\n\n"
        f"✅ Your booking is now confirmed.\n\n"
        f"You'll receive service start and end OTPs shortly if they haven't been generated yet.\n\n"
        f"Thank you for trusting PetCare! 🐾"
    )
    return await send_whatsapp_message(phone, message)
