import logging
from datetime import datetime, timedelta
from typing import Any, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from jose import jwt as jose_jwt
from sqlalchemy.orm import Session

from .config import JWT_ALGORITHM, JWT_EXPIRE_DAYS, JWT_SECRET
from .database import get_db
from .models import User

logger = logging.getLogger(__name__)

# auto_error=False so a missing header maps to our own 401 message
security = HTTPBearer(auto_error=False)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a signed session token for a user

    Args:
        user: Authenticated user
        expires_delta: Token lifetime (default JWT_EXPIRE_DAYS)
    """
    expire = datetime.utcnow() + (expires_delta or timedelta(days=JWT_EXPIRE_DAYS))
    to_encode = {
        "userId": user.id,
        "phone": user.phone,
        "userType": user.user_type,
        "exp": expire,
    }
    return jose_jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> Optional[dict[str, Any]]:
    """
    Verify and decode a session token

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        payload = jose_jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None

    if not payload.get("userId"):
        logger.warning("JWT verification failed: missing userId claim")
        return None
    return payload


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get current user from the bearer token"""
    if not credentials or not credentials.credentials:
        raise HTTPException(status_code=401, detail="No token provided")

    decoded = verify_token(credentials.credentials)
    if not decoded:
        raise HTTPException(status_code=401, detail="Invalid token")

    user = db.query(User).filter(User.id == decoded["userId"], User.is_active.is_(True)).first()
    if not user:
        logger.warning(f"⚠️ Token for unknown user {decoded['userId']}")
        raise HTTPException(status_code=404, detail="User not found")

    logger.debug(f"✅ User authenticated: {user.id}")
    return user
