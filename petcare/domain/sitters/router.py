"""Sitter router - FastAPI endpoints for sitters"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import SitterBooking
from .service import SitterService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sitters", tags=["Sitters"])


def get_sitter_service(db: Session = Depends(get_db)) -> SitterService:
    """Dependency injection for SitterService"""
    return SitterService(db)


@router.get("/bookings", response_model=list[SitterBooking])
async def get_sitter_bookings(
    userId: Optional[str] = Query(None),
    service: SitterService = Depends(get_sitter_service),
):
    """
    Get the schedule of the sitter behind a user id.

    Lookup failures return an empty list so the schedule screen still renders.
    """
    if not userId:
        raise HTTPException(status_code=400, detail="User ID is required")

    try:
        return service.get_bookings(userId)
    except Exception as e:
        logger.error(f"❌ Error fetching sitter bookings for {userId}: {str(e)}")
        return []
