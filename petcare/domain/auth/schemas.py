"""Auth domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, model_serializer

from ...models import USER_TYPE_OWNER


class SendOtpRequest(BaseModel):
    """Request a login code; fields are checked by the service to return 400s"""

    phone: Optional[str] = None
    userType: Optional[str] = USER_TYPE_OWNER


class SendOtpResponse(BaseModel):
    success: bool
    message: str
    userId: Optional[str] = None
    expiresAt: str
    expiresIn: str
    otp: Optional[str] = None

    @model_serializer(mode="wrap")
    def _omit_hidden_code(self, handler):
        # userId stays as null for new phones; the code is only echoed when exposed
        data = handler(self)
        if self.otp is None:
            data.pop("otp", None)
        return data


class VerifyOtpRequest(BaseModel):
    phone: Optional[str] = None
    otp: Optional[str] = None


class AuthUser(BaseModel):
    id: str
    phone: str
    name: Optional[str] = None
    email: Optional[str] = None
    userType: str
    isOnboarded: bool


class VerifyOtpResponse(BaseModel):
    success: bool
    message: str
    token: str
    isNewUser: bool
    user: AuthUser


class VerifyTokenRequest(BaseModel):
    token: Optional[str] = None
