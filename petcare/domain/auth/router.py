"""Auth router - FastAPI endpoints for phone login"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ...auth import verify_token
from ...database import get_db
from .schemas import (
    SendOtpRequest,
    SendOtpResponse,
    VerifyOtpRequest,
    VerifyOtpResponse,
    VerifyTokenRequest,
)
from .service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency injection for AuthService"""
    return AuthService(db)


@router.post("/auth/send-otp", response_model=SendOtpResponse)
async def send_otp(data: SendOtpRequest, service: AuthService = Depends(get_auth_service)):
    """Generate a login code and send it to the phone over WhatsApp"""
    return await service.send_otp(data)


@router.post("/auth/verify-otp", response_model=VerifyOtpResponse)
async def verify_otp(data: VerifyOtpRequest, service: AuthService = Depends(get_auth_service)):
    """Exchange a login code for a session token"""
    return service.verify_otp(data)


@router.post("/verify-token")
async def verify_session_token(data: VerifyTokenRequest):
    if not data.token:
        return JSONResponse(status_code=400, content={"valid": False, "error": "Token required"})
    if not verify_token(data.token):
        return JSONResponse(status_code=401, content={"valid": False, "error": "Invalid token"})
    return {"valid": True}


@router.get("/verify-token")
async def verify_token_method_not_allowed():
    return JSONResponse(status_code=405, content={"message": "Use POST to verify token"})
