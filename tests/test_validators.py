"""
Tests for shared validators
"""

import pytest

from petcare.shared.validators import (
    format_whatsapp_phone,
    generate_numeric_otp,
    validate_email,
    validate_phone,
)


@pytest.mark.parametrize("phone", ["+919876543210", "919876543210", "+14155238886", "12"])
def test_valid_phones(phone):
    assert validate_phone(phone) == phone


@pytest.mark.parametrize(
    "phone", ["", "+0123456", "98765 43210", "+1", "+1234567890123456", "abc", "+919876543210\n"]
)
def test_invalid_phones(phone):
    with pytest.raises(ValueError):
        validate_phone(phone)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("919876543210", "+919876543210"),
        ("+91 98765-43210", "+919876543210"),
        ("(415) 523-8886", "+4155238886"),
    ],
)
def test_format_whatsapp_phone(raw, expected):
    assert format_whatsapp_phone(raw) == expected


def test_validate_email_lowercases():
    assert validate_email("  Priya@Example.COM ") == "priya@example.com"


def test_validate_email_rejects_garbage():
    with pytest.raises(ValueError):
        validate_email("priya@")


def test_otp_is_six_digits_without_leading_zero():
    codes = [generate_numeric_otp() for _ in range(500)]

    assert all(len(code) == 6 for code in codes)
    assert all(100000 <= int(code) <= 999999 for code in codes)
    assert len(set(codes)) > 1
