"""Auth repository - Database operations for login codes and user accounts"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import USER_TYPE_SITTER, OtpCode, Sitter, User


class AuthRepository:
    """Repository for login OTP database operations. Callers own the commit."""

    @staticmethod
    def get_active_user_by_phone(db: Session, phone: str) -> Optional[User]:
        return db.query(User).filter(User.phone == phone, User.is_active.is_(True)).first()

    @staticmethod
    def get_user_by_phone(db: Session, phone: str) -> Optional[User]:
        return db.query(User).filter(User.phone == phone).first()

    @staticmethod
    def delete_login_otps(db: Session, phone: str) -> int:
        """Delete every login code issued to a phone"""
        return db.query(OtpCode).filter(OtpCode.phone == phone).delete(synchronize_session=False)

    @staticmethod
    def create_login_otp(
        db: Session,
        phone: str,
        code: str,
        user_type: str,
        expires_at: datetime,
        user_id: Optional[str] = None,
    ) -> OtpCode:
        otp = OtpCode(
            user_id=user_id,
            phone=phone,
            code=code,
            user_type=user_type,
            expires_at=expires_at,
            is_used=False,
        )
        db.add(otp)
        return otp

    @staticmethod
    def find_valid_login_otp(db: Session, phone: str, code: str, now: datetime) -> Optional[OtpCode]:
        """Newest unused, unexpired code for a phone"""
        return (
            db.query(OtpCode)
            .filter(
                OtpCode.phone == phone,
                OtpCode.code == code,
                OtpCode.is_used.is_(False),
                OtpCode.expires_at > now,
            )
            .order_by(OtpCode.id.desc())
            .first()
        )

    @staticmethod
    def consume_login_otp(db: Session, otp_id: int) -> int:
        """Mark a code used only if still unused; returns affected rows"""
        return (
            db.query(OtpCode)
            .filter(OtpCode.id == otp_id, OtpCode.is_used.is_(False))
            .update({OtpCode.is_used: True}, synchronize_session=False)
        )

    @staticmethod
    def create_user(db: Session, phone: str, user_type: str) -> User:
        """Create a user; sitters also get their sitter profile row"""
        user = User(phone=phone, user_type=user_type, is_onboarded=False, is_active=True)
        db.add(user)
        db.flush()
        if user_type == USER_TYPE_SITTER:
            db.add(Sitter(user_id=user.id))
        return user
