"""Equipment model."""

from sqlalchemy import Column, DateTime, Integer, String, Text, func

from inventory_console.database import Base

EQUIPMENT_STATUSES = ("available", "booked", "maintenance", "retired")


class Equipment(Base):
    """Equipment item tracked by the console."""

    __tablename__ = "equipment"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    type = Column(String(100), nullable=False)
    brand = Column(String(255), nullable=True)
    model = Column(String(255), nullable=True)
    serial_number = Column(String(255), nullable=True)
    image_url = Column(String(1000), nullable=True)
    status = Column(String(20), nullable=False, default="available")
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Equipment(id={self.id}, name={self.name}, status={self.status})>"
