"""Shared validation utilities"""

import re
import secrets
from typing import Optional

PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")
EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def validate_phone(phone: str) -> str:
    """
    Validate an international phone number (E.164 digits, optional leading +).

    Args:
        phone: Phone number as submitted

    Returns:
        The phone number unchanged

    Raises:
        ValueError: If phone number is invalid
    """
    if not phone or not PHONE_PATTERN.fullmatch(phone):
        raise ValueError("Invalid phone number format")
    return phone


def format_whatsapp_phone(phone: str) -> str:
    """Normalize a destination number to a leading + followed by digits only"""
    formatted = phone if phone.startswith("+") else f"+{phone}"
    return re.sub(r"[^\d+]", "", formatted)


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()
    if not EMAIL_PATTERN.fullmatch(email):
        raise ValueError("Invalid email format")

    return email


def generate_numeric_otp(length: int = 6) -> str:
    """Generate a cryptographically secure numeric code without a leading zero"""
    low = 10 ** (length - 1)
    return str(low + secrets.randbelow(9 * low))
