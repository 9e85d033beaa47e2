"""Business logic services."""

from inventory_console.services.asset_service import (
    create_asset,
    delete_asset,
    delete_assets,
    list_trash,
    update_asset,
)
from inventory_console.services.record_service import create_record, get_log_options, list_records
from inventory_console.services.report_service import ReportService, collect_snapshots
from inventory_console.services.summary_service import get_summary

__all__ = [
    "ReportService",
    "collect_snapshots",
    "create_asset",
    "create_record",
    "delete_asset",
    "delete_assets",
    "get_log_options",
    "get_summary",
    "list_records",
    "list_trash",
    "update_asset",
]
