"""Service catalog schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ...models import ServiceCategory


class ServiceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category: ServiceCategory
    basePrice: int = Field(..., ge=0, description="Minor currency unit")
    priceUnit: Optional[str] = None
    duration: int = Field(..., gt=0, description="Minutes")
    features: list[str] = []
    imageUrl: Optional[str] = None
    isActive: bool = True


class ServiceUpdate(BaseModel):
    """Omitted fields are left unchanged"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[ServiceCategory] = None
    basePrice: Optional[int] = Field(None, ge=0)
    priceUnit: Optional[str] = None
    duration: Optional[int] = Field(None, gt=0)
    features: Optional[list[str]] = None
    imageUrl: Optional[str] = None
    isActive: Optional[bool] = None


class ServiceResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    category: ServiceCategory
    base_price: int
    price_unit: Optional[str]
    duration: int
    features: list[str]
    image_url: Optional[str]
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
