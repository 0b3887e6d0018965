"""Auth service - Phone login with one-time codes"""

import logging
from datetime import datetime, timedelta

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...auth import create_access_token
from ...config import EXPOSE_OTP_IN_RESPONSE, LOGIN_OTP_TTL_MINUTES
from ...models import USER_TYPE_OWNER, USER_TYPE_SITTER
from ...services import notification_service, twilio_service
from ...shared.validators import generate_numeric_otp, validate_phone
from .repository import AuthRepository
from .schemas import AuthUser, SendOtpRequest, SendOtpResponse, VerifyOtpRequest, VerifyOtpResponse

logger = logging.getLogger(__name__)

USER_TYPES = {USER_TYPE_OWNER, USER_TYPE_SITTER}


class AuthService:
    """Service layer for login code issuance and verification"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AuthRepository()

    async def send_otp(self, data: SendOtpRequest) -> SendOtpResponse:
        """
        Issue a login code for a phone number.

        Prior codes for the phone are deleted before the new one is stored, so
        at most one code is outstanding per phone. The row is committed before
        delivery and is kept even if delivery fails.
        """
        if not data.phone:
            raise HTTPException(status_code=400, detail="Phone number is required")
        try:
            phone = validate_phone(data.phone)
        except ValueError as e:
            raise HTTPException(status_code=400, detail="Invalid phone number format") from e

        user_type = data.userType or USER_TYPE_OWNER
        if user_type not in USER_TYPES:
            raise HTTPException(status_code=400, detail="Invalid user type")

        try:
            otp = generate_numeric_otp(6)
            expires_at = datetime.utcnow() + timedelta(minutes=LOGIN_OTP_TTL_MINUTES)
            logger.info(f"📱 Generating OTP for: {phone} (user type: {user_type})")

            existing_user = self.repo.get_active_user_by_phone(self.db, phone)
            user_id = existing_user.id if existing_user else None

            self.repo.delete_login_otps(self.db, phone)
            self.repo.create_login_otp(
                self.db,
                phone=phone,
                code=otp,
                user_type=user_type,
                expires_at=expires_at,
                user_id=user_id,
            )
            self.db.commit()
            logger.info(f"💾 OTP saved to database for {phone}")
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error storing OTP for {phone}: {str(e)}")
            logger.exception("Full error traceback:")
            raise HTTPException(status_code=500, detail="Failed to send OTP") from e

        sent, error = await notification_service.send_login_otp(phone, otp, LOGIN_OTP_TTL_MINUTES)
        if not sent and twilio_service.is_configured():
            logger.error(f"❌ Failed to deliver OTP to {phone}: {error}")
            raise HTTPException(status_code=500, detail="Failed to send OTP")

        return SendOtpResponse(
            success=True,
            message="OTP sent successfully to your WhatsApp",
            userId=user_id,
            expiresAt=expires_at.isoformat() + "Z",
            expiresIn=f"{LOGIN_OTP_TTL_MINUTES} minutes",
            otp=otp if EXPOSE_OTP_IN_RESPONSE else None,
        )

    def verify_otp(self, data: VerifyOtpRequest) -> VerifyOtpResponse:
        """Consume a login code and return a session token, creating the user on first login"""
        if not data.phone or not data.otp:
            raise HTTPException(status_code=400, detail="Phone number and OTP are required")

        try:
            phone = data.phone.strip()
            code = data.otp.strip()
            otp_row = self.repo.find_valid_login_otp(self.db, phone, code, datetime.utcnow())
            if not otp_row or self.repo.consume_login_otp(self.db, otp_row.id) == 0:
                logger.warning(f"⚠️ Invalid or expired OTP submitted for {phone}")
                raise HTTPException(status_code=400, detail="Invalid or expired OTP")

            user = self.repo.get_active_user_by_phone(self.db, phone)
            is_new_user = False
            if not user:
                if self.repo.get_user_by_phone(self.db, phone):
                    raise HTTPException(status_code=403, detail="Account is inactive")
                user = self.repo.create_user(self.db, phone, otp_row.user_type)
                is_new_user = True
                logger.info(f"🆕 Created {otp_row.user_type} user for {phone}")

            self.db.commit()
            self.db.refresh(user)
        except HTTPException:
            self.db.rollback()
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error verifying OTP for {data.phone}: {str(e)}")
            logger.exception("Full error traceback:")
            raise HTTPException(status_code=500, detail="Failed to verify OTP") from e

        logger.info(f"✅ OTP verified for {phone} (user {user.id})")
        return VerifyOtpResponse(
            success=True,
            message="OTP verified successfully",
            token=create_access_token(user),
            isNewUser=is_new_user,
            user=AuthUser(
                id=user.id,
                phone=user.phone,
                name=user.name,
                email=user.email,
                userType=user.user_type,
                isOnboarded=bool(user.is_onboarded),
            ),
        )
