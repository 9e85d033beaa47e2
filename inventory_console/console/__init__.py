"""Per-session console controllers."""

from inventory_console.console.dashboard import DashboardView
from inventory_console.console.panels import AssetPanel, LogsPanel, RecordPanel
from inventory_console.console.registry import ConsoleRegistry, registry
from inventory_console.console.reports import ReportsView
from inventory_console.console.shell import INVENTORY_TABS, MENU_TABS, Shell, UnknownTabError

__all__ = [
    "AssetPanel",
    "ConsoleRegistry",
    "DashboardView",
    "INVENTORY_TABS",
    "LogsPanel",
    "MENU_TABS",
    "RecordPanel",
    "ReportsView",
    "Shell",
    "UnknownTabError",
    "registry",
]
