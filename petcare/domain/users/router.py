"""User router - FastAPI endpoints for profile and addresses"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import (
    AddressPayload,
    AddressResponse,
    AddressUpdateResponse,
    ProfileResponse,
    ProfileUpdate,
)
from .service import UserService, profile_response

router = APIRouter(prefix="/user", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    """Get the current user's profile"""
    return profile_response(current_user)


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Update the current user's profile"""
    return service.update_profile(current_user, data)


@router.get("/address", response_model=AddressResponse)
async def get_address(
    userId: Optional[str] = Query(None),
    phone: Optional[str] = Query(None),
    service: UserService = Depends(get_user_service),
):
    """Get a user's default address by user id or phone"""
    return service.get_address(userId, phone)


@router.put("/address", response_model=AddressUpdateResponse)
async def upsert_address(data: AddressPayload, service: UserService = Depends(get_user_service)):
    return service.upsert_default_address(data)


@router.post("/address", response_model=AddressResponse, status_code=201)
async def add_address(data: AddressPayload, service: UserService = Depends(get_user_service)):
    return service.add_address(data)
