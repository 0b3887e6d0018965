"""Catalog repository - Database operations for services and pets"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Pet, Service


class CatalogRepository:
    @staticmethod
    def get_active_services(db: Session, category: Optional[str] = None) -> list[Service]:
        query = db.query(Service).filter(Service.is_active.is_(True))
        if category:
            query = query.filter(Service.category == category)
        return query.order_by(Service.name.asc()).all()

    @staticmethod
    def get_user_pets(db: Session, user_id: str) -> list[Pet]:
        return db.query(Pet).filter(Pet.user_id == user_id).order_by(Pet.created_at.asc()).all()

    @staticmethod
    def create_pet(db: Session, **pet_data) -> Pet:
        pet = Pet(**pet_data)
        db.add(pet)
        db.flush()
        return pet
