"""Tab shell holding one signed-in user's views."""

import logging
import threading
from typing import Any, Dict, List

from inventory_console.console.dashboard import DashboardView
from inventory_console.console.panels import AssetPanel, LogsPanel, RecordPanel
from inventory_console.console.reports import ReportsView
from inventory_console.gateway.base import BaseDataGateway
from inventory_console.services.report_service import TableSnapshot
from inventory_console.services.tables import EQUIPMENT, USERS

logger = logging.getLogger(__name__)

MENU_TABS = ("dashboard", "inventory", "reports")
INVENTORY_TABS = ("equipment", "logs", "users", "assets")


class UnknownTabError(ValueError):
    """Tab name is not part of the shell."""
    pass


class Shell:
    """Menu tabs, inventory sub-tabs and the views behind them.

    Switching to a tab activates its view, which fetches fresh data. Callers
    hold ``lock`` while driving the shell.
    """

    def __init__(self):
        self.lock = threading.RLock()
        self.active_menu = "dashboard"
        self.active_inventory_tab = "equipment"
        self.dashboard = DashboardView()
        self.reports = ReportsView()
        self.panels: Dict[str, RecordPanel] = {
            "equipment": RecordPanel(EQUIPMENT),
            "logs": LogsPanel(),
            "users": RecordPanel(USERS),
            "assets": AssetPanel(),
        }

    @property
    def assets(self) -> AssetPanel:
        return self.panels["assets"]

    def panel(self, table: str) -> RecordPanel:
        if table not in self.panels:
            raise UnknownTabError(f"Unknown inventory tab: {table}")
        return self.panels[table]

    def select_menu(self, tab: str, gateway: BaseDataGateway) -> None:
        """Switch the menu tab and activate the view behind it."""
        if tab not in MENU_TABS:
            raise UnknownTabError(f"Unknown menu tab: {tab}")
        self.active_menu = tab
        logger.debug(f"Menu tab -> {tab}")

        if tab == "dashboard":
            self.dashboard.activate(gateway)
        elif tab == "inventory":
            self.panels[self.active_inventory_tab].activate(gateway)
        else:
            self.reports.activate(gateway)

    def select_inventory_tab(self, tab: str, gateway: BaseDataGateway) -> RecordPanel:
        """Switch to an inventory table and fetch it."""
        panel = self.panel(tab)
        self.active_menu = "inventory"
        self.active_inventory_tab = tab
        logger.debug(f"Inventory tab -> {tab}")
        panel.activate(gateway)
        return panel

    def visible_snapshots(self) -> List[TableSnapshot]:
        """Tables currently on screen."""
        if self.active_menu == "inventory":
            return [self.panels[self.active_inventory_tab].snapshot()]
        if self.active_menu == "reports":
            return list(self.reports.snapshots)
        return []

    def state(self) -> Dict[str, Any]:
        state: Dict[str, Any] = {
            "active_menu": self.active_menu,
            "active_inventory_tab": self.active_inventory_tab,
            "dashboard": self.dashboard.state(),
            "panel": None,
            "reports": None,
        }
        if self.active_menu == "inventory":
            state["panel"] = self.panels[self.active_inventory_tab].state()
        elif self.active_menu == "reports":
            state["reports"] = self.reports.state()
        return state
