"""Dashboard controller."""

from typing import Any, Dict, Optional

from inventory_console.gateway.base import BaseDataGateway
from inventory_console.schemas.summary import SummaryResponse
from inventory_console.services.summary_service import get_summary


class DashboardView:
    """Row counts, re-fetched on every activation."""

    def __init__(self):
        self.activations = 0
        self.summary: Optional[SummaryResponse] = None

    def activate(self, gateway: BaseDataGateway) -> SummaryResponse:
        self.activations += 1
        self.summary = get_summary(gateway, activation=self.activations)
        return self.summary

    def state(self) -> Dict[str, Any]:
        return {
            "activations": self.activations,
            "summary": self.summary.model_dump() if self.summary else None,
        }
