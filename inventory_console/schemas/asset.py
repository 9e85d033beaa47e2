"""Asset schemas."""

import re
from datetime import datetime
from typing import List, Literal, Optional
from zoneinfo import ZoneInfo

from pydantic import BaseModel, ConfigDict, Field, field_validator

from inventory_console.config import settings

AssetCategory = Literal[
    "studio equipment",
    "furnitures",
    "office equipment",
    "pantry supplies",
    "wardrobe",
    "make up station",
    "bathroom",
]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_quantity(value) -> Optional[int]:
    """Parse a quantity typed into the asset form.

    Reads an optional sign and the leading digits; anything without leading
    digits is not a number and becomes None. No bounds are enforced.

    Examples:
        >>> parse_quantity("3")
        3
        >>> parse_quantity("5.7")
        5
        >>> parse_quantity("abc") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value else None
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else None


def default_asset_timestamp() -> str:
    """Current time in the console timezone as ``YYYY-MM-DDTHH:MM``."""
    return datetime.now(ZoneInfo(settings.console_timezone)).strftime("%Y-%m-%dT%H:%M")


class AssetFields(BaseModel):
    """Mutable asset fields."""

    name: str = Field(..., description="Asset name", min_length=1)
    category: AssetCategory = "studio equipment"
    condition: Optional[str] = None
    qty: Optional[int] = Field(None, description="Quantity, parsed from free text")
    details: Optional[str] = None
    remarks: Optional[str] = None
    created_at: str = Field(default_factory=default_asset_timestamp, min_length=1)

    @field_validator("qty", mode="before")
    @classmethod
    def _parse_qty(cls, value):
        return parse_quantity(value)


class AssetCreate(AssetFields):
    """Schema for creating an asset."""

    asset_tag: str = Field(..., description="Staff-assigned asset tag", min_length=1)


class AssetUpdate(AssetFields):
    """Schema for overwriting an asset. The tag itself cannot change."""

    pass


class AssetResponse(BaseModel):
    """Schema for asset response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    asset_tag: str
    name: str
    category: str
    condition: Optional[str] = None
    qty: Optional[int] = None
    details: Optional[str] = None
    remarks: Optional[str] = None
    created_at: str


class AssetTrashResponse(AssetResponse):
    """Archived asset."""

    asset_id: Optional[int] = None
    deleted_at: datetime


class AssetBulkDeleteRequest(BaseModel):
    """Tags to move to trash."""

    asset_tags: List[str] = Field(..., min_length=1)


class AssetDeleteResponse(BaseModel):
    """Result of a soft delete."""

    deleted: List[str] = Field(..., description="Tags removed from the live table")
    archived: int = Field(..., description="Rows written to trash")
