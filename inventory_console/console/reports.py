"""Reports view controller."""

from typing import Any, Dict, List

from inventory_console.gateway.base import BaseDataGateway
from inventory_console.services.report_service import (
    TableSnapshot,
    build_previews,
    collect_snapshots,
)


class ReportsView:
    """Holds a snapshot of every report table, taken on activation."""

    def __init__(self):
        self.snapshots: List[TableSnapshot] = []

    def activate(self, gateway: BaseDataGateway) -> List[TableSnapshot]:
        self.snapshots = collect_snapshots(gateway)
        return self.snapshots

    def state(self) -> Dict[str, Any]:
        return {"previews": [preview.model_dump() for preview in build_previews(self.snapshots)]}
