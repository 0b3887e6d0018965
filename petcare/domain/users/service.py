"""User service - Profile and address management"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...config import DEFAULT_COUNTRY
from ...models import Address, User
from ...shared.validators import validate_email
from .repository import UserRepository
from .schemas import (
    AddressPayload,
    AddressResponse,
    AddressUpdateResponse,
    ProfileData,
    ProfileResponse,
    ProfileUpdate,
)

logger = logging.getLogger(__name__)

REQUIRED_ADDRESS_FIELDS = ("line1", "city", "state", "postalCode")


def profile_response(user: User) -> ProfileResponse:
    return ProfileResponse(
        success=True,
        data=ProfileData(
            id=user.id,
            name=user.name,
            email=user.email,
            phone=user.phone,
            address=user.address,
            profileImage=user.profile_image,
            createdAt=user.created_at,
            isOnboarded=bool(user.is_onboarded),
        ),
    )


def address_response(address: Address) -> AddressResponse:
    return AddressResponse(
        id=address.id,
        userId=address.user_id,
        line1=address.line1,
        line2=address.line2,
        city=address.city,
        state=address.state,
        postalCode=address.postal_code,
        country=address.country,
        landmark=address.landmark,
        latitude=address.latitude,
        longitude=address.longitude,
        isDefault=bool(address.is_default),
        createdAt=address.created_at,
        updatedAt=address.updated_at,
    )


class UserService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    # ------------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------------

    def update_profile(self, user: User, data: ProfileUpdate) -> ProfileResponse:
        """Update the provided profile fields; setting a name completes onboarding"""
        updates = data.model_dump(exclude_unset=True)
        try:
            if "email" in updates:
                updates["email"] = validate_email(updates["email"])
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e

        try:
            if "name" in updates:
                user.name = updates["name"]
                if updates["name"]:
                    user.is_onboarded = True
            if "email" in updates:
                user.email = updates["email"]
            if "address" in updates:
                user.address = updates["address"]
            if "fcmToken" in updates:
                user.fcm_token = updates["fcmToken"]
            user.updated_at = datetime.utcnow()
            self.db.commit()
            self.db.refresh(user)
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Profile update failed for user {user.id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Internal server error") from e

        logger.info(f"👤 Profile updated for user {user.id}: {sorted(updates)}")
        return profile_response(user)

    # ------------------------------------------------------------------
    # Addresses
    # ------------------------------------------------------------------

    def _resolve_user_id(self, user_id: Optional[str], phone: Optional[str]) -> str:
        if not user_id and not phone:
            raise HTTPException(status_code=400, detail="User ID or phone is required")
        if user_id:
            user = self.repo.get_user_by_id(self.db, user_id)
        else:
            user = self.repo.get_user_by_phone(self.db, phone)
        if not user:
            logger.info(f"❌ User not found: {user_id or phone}")
            raise HTTPException(status_code=404, detail="User not found")
        return user.id

    @staticmethod
    def _require_address_fields(data: AddressPayload) -> None:
        missing = [field for field in REQUIRED_ADDRESS_FIELDS if not getattr(data, field)]
        if missing:
            raise HTTPException(
                status_code=400,
                detail=f"Missing required address fields: {', '.join(REQUIRED_ADDRESS_FIELDS)}",
            )

    def get_address(self, user_id: Optional[str], phone: Optional[str]) -> AddressResponse:
        resolved_id = self._resolve_user_id(user_id, phone)
        address = self.repo.get_default_address(self.db, resolved_id)
        if not address:
            raise HTTPException(status_code=404, detail="Address not found")
        return address_response(address)

    def upsert_default_address(self, data: AddressPayload) -> AddressUpdateResponse:
        """Create or replace the default address of a user"""
        user_id = self._resolve_user_id(data.userId, data.phone)
        self._require_address_fields(data)

        try:
            address = self.repo.get_default_address(self.db, user_id)
            fields = {
                "line1": data.line1,
                "line2": data.line2,
                "city": data.city,
                "state": data.state,
                "postal_code": data.postalCode,
                "country": data.country or DEFAULT_COUNTRY,
                "landmark": data.landmark,
                "latitude": data.latitude,
                "longitude": data.longitude,
            }
            if address:
                for key, value in fields.items():
                    setattr(address, key, value)
                address.updated_at = datetime.utcnow()
                logger.info(f"🔄 Updating default address {address.id} for user {user_id}")
            else:
                address = self.repo.create_address(self.db, user_id=user_id, is_default=True, **fields)
                logger.info(f"➕ Created default address for user {user_id}")
            self.db.commit()
            self.db.refresh(address)
        except HTTPException:
            raise
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error updating address for user {user_id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to update address") from e

        return AddressUpdateResponse(
            success=True, message="Address updated successfully", address=address_response(address)
        )

    def add_address(self, data: AddressPayload) -> AddressResponse:
        """Add an address; a new default replaces the previous one"""
        user_id = self._resolve_user_id(data.userId, data.phone)
        self._require_address_fields(data)

        try:
            if data.isDefault:
                self.repo.clear_default_address(self.db, user_id)
            address = self.repo.create_address(
                self.db,
                user_id=user_id,
                line1=data.line1,
                line2=data.line2,
                city=data.city,
                state=data.state,
                postal_code=data.postalCode,
                country=data.country or DEFAULT_COUNTRY,
                landmark=data.landmark,
                latitude=data.latitude,
                longitude=data.longitude,
                is_default=data.isDefault,
            )
            self.db.commit()
            self.db.refresh(address)
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error creating address for user {user_id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to create address") from e

        return address_response(address)
