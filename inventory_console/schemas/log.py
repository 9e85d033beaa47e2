"""Log schemas."""

from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, ConfigDict, Field


def default_log_timestamp() -> datetime:
    """Current UTC time truncated to the minute, without tzinfo (columns are naive UTC)."""
    return datetime.now(timezone.utc).replace(tzinfo=None, second=0, microsecond=0)


class LogBase(BaseModel):
    """Base log schema."""

    user_id: int = Field(..., description="User the entry refers to")
    action: str = Field(..., description="Free text action", min_length=1)
    equipment_id: int = Field(..., description="Equipment the entry refers to")
    timestamp: datetime = Field(default_factory=default_log_timestamp)


class LogCreate(LogBase):
    """Schema for creating a log entry."""

    pass


class LogResponse(LogBase):
    """Schema for log response."""

    model_config = ConfigDict(from_attributes=True)

    id: int


class NamedOption(BaseModel):
    """Id and display name for a dropdown."""

    id: int
    name: str


class LogOptions(BaseModel):
    """Choices offered by the log form."""

    users: List[NamedOption] = Field(default_factory=list)
    equipment: List[NamedOption] = Field(default_factory=list)
