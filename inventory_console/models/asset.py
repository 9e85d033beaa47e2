"""Asset models."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from inventory_console.database import Base

ASSET_CATEGORIES = (
    "studio equipment",
    "furnitures",
    "office equipment",
    "pantry supplies",
    "wardrobe",
    "make up station",
    "bathroom",
)


class Asset(Base):
    """Asset identified by its client-supplied tag."""

    __tablename__ = "assets"

    id = Column(Integer, primary_key=True, index=True)
    asset_tag = Column(String(100), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=False)
    category = Column(String(50), nullable=False, default="studio equipment")
    condition = Column(String(255), nullable=True)
    qty = Column(Integer, nullable=True)
    details = Column(Text, nullable=True)
    remarks = Column(Text, nullable=True)
    created_at = Column(String(32), nullable=False)  # Free text date entered by staff

    def __repr__(self):
        return f"<Asset(id={self.id}, asset_tag={self.asset_tag})>"


class AssetTrash(Base):
    """Archived copy of a deleted asset."""

    __tablename__ = "assets_trash"

    id = Column(Integer, primary_key=True, index=True)
    asset_id = Column(Integer, nullable=True, index=True)
    asset_tag = Column(String(100), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    category = Column(String(50), nullable=False)
    condition = Column(String(255), nullable=True)
    qty = Column(Integer, nullable=True)
    details = Column(Text, nullable=True)
    remarks = Column(Text, nullable=True)
    created_at = Column(String(32), nullable=False)
    deleted_at = Column(DateTime, server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<AssetTrash(id={self.id}, asset_tag={self.asset_tag})>"
