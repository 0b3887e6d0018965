"""Lifecycle router - FastAPI endpoints for starting and ending a service"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import EndServiceResponse, ServiceCodeRequest, StartServiceResponse
from .service import LifecycleService

router = APIRouter(prefix="/bookings", tags=["Service Lifecycle"])


def get_lifecycle_service(db: Session = Depends(get_db)) -> LifecycleService:
    """Dependency injection for LifecycleService"""
    return LifecycleService(db)


@router.post("/start-service", response_model=StartServiceResponse)
async def start_service(
    data: ServiceCodeRequest, service: LifecycleService = Depends(get_lifecycle_service)
):
    """Start a booking or recurring session with its START code"""
    return service.start_service(data)


@router.post("/end-service", response_model=EndServiceResponse)
async def end_service(
    data: ServiceCodeRequest, service: LifecycleService = Depends(get_lifecycle_service)
):
    """Complete a booking or recurring session with its END code"""
    return service.end_service(data)
