import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./petcare.db")

# JWT Configuration - CRITICAL: No default secret in production
JWT_SECRET = os.getenv("JWT_SECRET")
if not JWT_SECRET:
    import warnings

    warnings.warn(
        "JWT_SECRET not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    JWT_SECRET = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRE_DAYS = int(os.getenv("JWT_EXPIRE_DAYS", "7"))

# Login OTP
LOGIN_OTP_TTL_MINUTES = int(os.getenv("LOGIN_OTP_TTL_MINUTES", "10"))
# Echo the login code back in the API response (development only)
EXPOSE_OTP_IN_RESPONSE = os.getenv("EXPOSE_OTP_IN_RESPONSE", "true").lower() == "true"

# Twilio WhatsApp Configuration
TWILIO_ACCOUNT_SID = os.getenv("TWILIO_ACCOUNT_SID")
TWILIO_AUTH_TOKEN = os.getenv("TWILIO_AUTH_TOKEN")
TWILIO_WHATSAPP_NUMBER = os.getenv("TWILIO_WHATSAPP_NUMBER", "+14155238886")

# Resend Email Configuration
RESEND_API_KEY = os.getenv("RESEND_API_KEY")
EMAIL_FROM_ADDRESS = os.getenv("EMAIL_FROM_ADDRESS", "PetCare <notifications@petcare.app>")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL")

# Frontend base URL for links in messages
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:3000")

# Firebase Cloud Messaging (push disabled when unset)
FIREBASE_CREDENTIALS_PATH = os.getenv("FIREBASE_CREDENTIALS_PATH", "")

# Bookings
DEFAULT_BOOKING_DURATION = int(os.getenv("DEFAULT_BOOKING_DURATION", "60"))
DEFAULT_COUNTRY = os.getenv("DEFAULT_COUNTRY", "India")
# Sitter earnings stay pending this many days after a service completes
EARNINGS_HOLD_DAYS = int(os.getenv("EARNINGS_HOLD_DAYS", "3"))

ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")
