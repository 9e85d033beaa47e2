"""Equipment schemas."""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

EquipmentStatus = Literal["available", "booked", "maintenance", "retired"]


class EquipmentBase(BaseModel):
    """Base equipment schema."""

    name: str = Field(..., description="Equipment name", min_length=1)
    type: str = Field(..., description="Equipment type", min_length=1)
    brand: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    image_url: Optional[str] = None
    status: EquipmentStatus = "available"
    notes: Optional[str] = None


class EquipmentCreate(EquipmentBase):
    """Schema for creating equipment."""

    pass


class EquipmentResponse(EquipmentBase):
    """Schema for equipment response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: Optional[datetime] = None
