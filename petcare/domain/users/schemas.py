"""User domain schemas - Pydantic models for profile and addresses"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class ProfileData(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: str
    address: Optional[str] = None
    profileImage: Optional[str] = None
    createdAt: Optional[datetime] = None
    isOnboarded: bool


class ProfileResponse(BaseModel):
    success: bool
    data: ProfileData


class ProfileUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    fcmToken: Optional[str] = None


class AddressPayload(BaseModel):
    """Address fields plus the user it belongs to (by id or phone)"""

    userId: Optional[str] = None
    phone: Optional[str] = None
    line1: Optional[str] = None
    line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postalCode: Optional[str] = None
    country: Optional[str] = None
    landmark: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    isDefault: bool = False


class AddressResponse(BaseModel):
    id: str
    userId: str
    line1: str
    line2: Optional[str] = None
    city: str
    state: str
    postalCode: str
    country: Optional[str] = None
    landmark: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    isDefault: bool
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class AddressUpdateResponse(BaseModel):
    success: bool
    message: str
    address: AddressResponse
