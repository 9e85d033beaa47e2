"""Summary schemas."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class ChartPoint(BaseModel):
    """One bar of the dashboard chart."""

    table: str
    count: int


class SummaryResponse(BaseModel):
    """Row count per table."""

    counts: Dict[str, int]
    chart: List[ChartPoint]
    failed: List[str] = Field(default_factory=list, description="Tables whose count failed")
    fetched_at: datetime
    activation: Optional[int] = Field(None, description="Dashboard activation that produced these counts")
