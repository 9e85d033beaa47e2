"""SQLAlchemy models."""

from inventory_console.database import Base
from inventory_console.models.asset import Asset, AssetTrash
from inventory_console.models.equipment import Equipment
from inventory_console.models.log import Log
from inventory_console.models.user import User

__all__ = [
    "Base",
    "Asset",
    "AssetTrash",
    "Equipment",
    "Log",
    "User",
]
