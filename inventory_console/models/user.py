"""User model."""

from sqlalchemy import Column, DateTime, Integer, String, func

from inventory_console.database import Base

USER_ROLES = ("admin", "staff")


class User(Base):
    """Staff member record."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="staff")
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"
