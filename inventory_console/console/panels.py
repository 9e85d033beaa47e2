"""Record panel controllers.

A panel owns the rows shown for one table. Rows are fetched when the panel
is activated and patched with the canonical rows the store returns after
each write. Failed store calls leave the rows as they were and are recorded
in ``last_error``.
"""

import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from inventory_console.gateway.base import BaseDataGateway, GatewayError, Row
from inventory_console.schemas.asset import AssetCreate, AssetUpdate
from inventory_console.schemas.log import LogOptions
from inventory_console.services import asset_service
from inventory_console.services.asset_service import AssetNotFoundError
from inventory_console.services.record_service import (
    RecordServiceError,
    create_record,
    get_log_options,
    list_records,
)
from inventory_console.services.report_service import TableSnapshot, snapshot_for
from inventory_console.services.tables import ASSETS, LOGS, TableSpec

logger = logging.getLogger(__name__)


class RecordPanel:
    """List and create controller for one table."""

    def __init__(self, spec: TableSpec):
        self.spec = spec
        self.rows: List[Row] = []
        self.loaded = False
        self.last_error: Optional[str] = None

    def _fail(self, action: str, error: Exception) -> None:
        logger.error(f"Error {action} {self.spec.name}: {error}")
        self.last_error = str(error)

    def activate(self, gateway: BaseDataGateway) -> bool:
        """Fetch the table. Returns False when the fetch failed and old rows were kept."""
        try:
            rows = list_records(gateway, self.spec)
        except GatewayError as e:
            self._fail("fetching", e)
            return False
        self.rows = rows
        self.loaded = True
        self.last_error = None
        return True

    def _insert(self, gateway: BaseDataGateway, data: BaseModel) -> Row:
        return create_record(gateway, self.spec, data)

    def create(self, gateway: BaseDataGateway, data: BaseModel) -> Row:
        """Insert a record and show it first.

        Raises:
            GatewayError, RecordServiceError: The insert failed; rows are unchanged
        """
        try:
            row = self._insert(gateway, data)
        except (GatewayError, RecordServiceError) as e:
            self._fail("adding to", e)
            raise
        self.rows.insert(0, row)
        self.last_error = None
        return row

    def snapshot(self) -> TableSnapshot:
        return snapshot_for(self.spec, self.rows)

    def state(self) -> Dict[str, Any]:
        return {
            "table": self.spec.name,
            "rows": self.rows,
            "loaded": self.loaded,
            "last_error": self.last_error,
        }


class LogsPanel(RecordPanel):
    """Logs panel; also loads the user and equipment choices for its form."""

    def __init__(self):
        super().__init__(LOGS)
        self.options = LogOptions()

    def activate(self, gateway: BaseDataGateway) -> bool:
        fetched = super().activate(gateway)
        self.options = get_log_options(gateway)
        return fetched

    def state(self) -> Dict[str, Any]:
        state = super().state()
        state["options"] = self.options.model_dump()
        return state


class AssetPanel(RecordPanel):
    """Assets panel with editing, selection and soft delete."""

    def __init__(self):
        super().__init__(ASSETS)
        self.selected: List[str] = []

    def _tags(self) -> List[str]:
        return list(dict.fromkeys(row["asset_tag"] for row in self.rows))

    def _insert(self, gateway: BaseDataGateway, data: AssetCreate) -> Row:
        return asset_service.create_asset(gateway, data)

    def update(self, gateway: BaseDataGateway, asset_tag: str, data: AssetUpdate) -> List[Row]:
        """Overwrite the asset and replace it in place.

        Raises:
            GatewayError, RecordServiceError: The update failed; rows are unchanged
        """
        try:
            updated = asset_service.update_asset(gateway, asset_tag, data)
        except (GatewayError, RecordServiceError) as e:
            self._fail("updating", e)
            raise

        by_id = {row["id"]: row for row in updated}
        self.rows = [by_id.pop(row["id"], row) for row in self.rows]
        # Rows updated remotely but not shown yet
        self.rows[:0] = list(by_id.values())
        self.last_error = None
        return updated

    def _remove(self, moved: List[Row]) -> None:
        removed_ids = {row["id"] for row in moved}
        self.rows = [row for row in self.rows if row["id"] not in removed_ids]

    def delete(self, gateway: BaseDataGateway, asset_tag: str) -> List[Row]:
        """Move one asset to trash.

        Raises:
            GatewayError, RecordServiceError: Nothing was removed from view
        """
        try:
            moved = asset_service.delete_asset(gateway, asset_tag)
        except (GatewayError, RecordServiceError) as e:
            self._fail("deleting from", e)
            raise
        self._remove(moved)
        self.selected = [tag for tag in self.selected if tag != asset_tag]
        self.last_error = None
        return moved

    def toggle(self, asset_tag: str) -> List[str]:
        """Add the tag to the selection, or remove it when already selected."""
        if asset_tag not in self._tags():
            raise AssetNotFoundError(f"Asset {asset_tag} is not listed")
        if asset_tag in self.selected:
            self.selected = [tag for tag in self.selected if tag != asset_tag]
        else:
            self.selected.append(asset_tag)
        return self.selected

    def toggle_all(self) -> List[str]:
        """Select every listed asset, or clear the selection when all are selected."""
        tags = self._tags()
        if tags and set(tags) <= set(self.selected):
            self.selected = []
        else:
            self.selected = tags
        return self.selected

    def delete_selected(self, gateway: BaseDataGateway) -> List[Row]:
        """Move every selected asset to trash and clear the selection.

        Raises:
            GatewayError: Nothing was removed from view and the selection is kept
        """
        if not self.selected:
            return []
        try:
            moved = asset_service.delete_assets(gateway, self.selected)
        except GatewayError as e:
            self._fail("deleting from", e)
            raise
        self._remove(moved)
        self.selected = []
        self.last_error = None
        return moved

    def state(self) -> Dict[str, Any]:
        state = super().state()
        state["selected"] = list(self.selected)
        return state
