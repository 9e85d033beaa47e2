"""Log model."""

from sqlalchemy import Column, DateTime, Integer, Text

from inventory_console.database import Base


class Log(Base):
    """Equipment activity log entry.

    user_id and equipment_id point at users and equipment informally;
    no foreign keys are declared.
    """

    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False)
    action = Column(Text, nullable=False)
    equipment_id = Column(Integer, nullable=False)
    timestamp = Column(DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<Log(id={self.id}, user_id={self.user_id}, equipment_id={self.equipment_id})>"
