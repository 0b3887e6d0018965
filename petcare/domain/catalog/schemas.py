"""Catalog schemas - Services offered and the owner's pets"""

from typing import Optional

from pydantic import BaseModel


class ServiceResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    price: float
    duration: Optional[int] = None
    category: Optional[str] = None

    class Config:
        from_attributes = True


class PetCreate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    breed: Optional[str] = None
    age: Optional[int] = None
    weight: Optional[float] = None
    specialInstructions: Optional[str] = None
    imageUrl: Optional[str] = None


class PetResponse(BaseModel):
    id: str
    name: str
    type: str
    breed: Optional[str] = None
    age: Optional[int] = None
    weight: Optional[float] = None
    specialInstructions: Optional[str] = None
    imageUrl: Optional[str] = None
