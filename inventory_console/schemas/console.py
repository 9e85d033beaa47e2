"""Console state schemas."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from inventory_console.schemas.log import LogOptions
from inventory_console.schemas.report import TablePreview
from inventory_console.schemas.summary import SummaryResponse


class PanelState(BaseModel):
    """Rows shown by one inventory panel."""

    table: str
    rows: List[Dict[str, Any]]
    loaded: bool
    last_error: Optional[str] = Field(None, description="Last failed store call; rows shown are the previous ones")
    options: Optional[LogOptions] = None
    selected: Optional[List[str]] = None


class DashboardState(BaseModel):
    """Dashboard counts and how often the dashboard was opened."""

    activations: int
    summary: Optional[SummaryResponse] = None


class ReportsState(BaseModel):
    """Table previews of the reports view."""

    previews: List[TablePreview]


class ConsoleState(BaseModel):
    """Active tabs and the view behind them."""

    active_menu: str
    active_inventory_tab: str
    dashboard: DashboardState
    panel: Optional[PanelState] = None
    reports: Optional[ReportsState] = None
