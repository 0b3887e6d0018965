"""Catalog router - FastAPI endpoints for services and pets"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import PetCreate, PetResponse, ServiceResponse
from .service import CatalogService

router = APIRouter(tags=["Catalog"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


@router.get("/services", response_model=list[ServiceResponse])
async def list_services(
    category: Optional[str] = Query(None),
    service: CatalogService = Depends(get_catalog_service),
):
    """Active services, optionally filtered by category"""
    return service.list_services(category)


@router.get("/pets", response_model=list[PetResponse])
async def list_pets(
    current_user: User = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.list_pets(current_user)


@router.post("/pets", response_model=PetResponse, status_code=201)
async def create_pet(
    data: PetCreate,
    current_user: User = Depends(get_current_user),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.create_pet(current_user, data)
