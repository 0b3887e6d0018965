"""Catalog service - Service listing and pet management"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Pet, User
from .repository import CatalogRepository
from .schemas import PetCreate, PetResponse, ServiceResponse

logger = logging.getLogger(__name__)


def pet_response(pet: Pet) -> PetResponse:
    return PetResponse(
        id=pet.id,
        name=pet.name,
        type=pet.type,
        breed=pet.breed,
        age=pet.age,
        weight=pet.weight,
        specialInstructions=pet.special_instructions,
        imageUrl=pet.image_url,
    )


class CatalogService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = CatalogRepository()

    def list_services(self, category: Optional[str] = None) -> list[ServiceResponse]:
        services = self.repo.get_active_services(self.db, category)
        return [ServiceResponse.model_validate(s) for s in services]

    def list_pets(self, user: User) -> list[PetResponse]:
        return [pet_response(p) for p in self.repo.get_user_pets(self.db, user.id)]

    def create_pet(self, user: User, data: PetCreate) -> PetResponse:
        if not data.name or not data.type:
            raise HTTPException(status_code=400, detail="Pet name and type are required")

        try:
            pet = self.repo.create_pet(
                self.db,
                user_id=user.id,
                name=data.name,
                type=data.type,
                breed=data.breed,
                age=data.age,
                weight=data.weight,
                special_instructions=data.specialInstructions,
                image_url=data.imageUrl,
            )
            self.db.commit()
            self.db.refresh(pet)
        except Exception as e:
            self.db.rollback()
            logger.error(f"❌ Error creating pet for user {user.id}: {str(e)}")
            raise HTTPException(status_code=500, detail="Failed to create pet") from e

        logger.info(f"🐾 Pet {pet.id} added for user {user.id}")
        return pet_response(pet)
