"""Tests for the console controllers."""

from datetime import datetime, timedelta, timezone

import pytest

from inventory_console.console import AssetPanel, ConsoleRegistry, DashboardView, RecordPanel, Shell, UnknownTabError
from inventory_console.console.panels import LogsPanel
from inventory_console.gateway.base import GatewayConnectionError
from inventory_console.gateway.sql_gateway import SqlDataGateway
from inventory_console.schemas.asset import AssetCreate, AssetUpdate
from inventory_console.schemas.user import UserCreate
from inventory_console.services.asset_service import AssetNotFoundError
from inventory_console.services.tables import USERS


class UnreachableGateway(SqlDataGateway):
    """Gateway whose reads and writes fail as if the store were down."""

    def select(self, table, columns=None, filters=None, order=None):
        raise GatewayConnectionError("store unreachable")

    def insert(self, table, rows):
        raise GatewayConnectionError("store unreachable")

    def move(self, source, destination, filters, transform, retries=0):
        raise GatewayConnectionError("store unreachable")


def _assets_panel(gateway, *tags):
    panel = AssetPanel()
    for tag in tags:
        panel.create(gateway, AssetCreate(asset_tag=tag, name=f"Item {tag}"))
    return panel


class TestRecordPanel:
    """Tests for the generic record panel."""

    def test_created_user_is_listed_first(self, gateway):
        panel = RecordPanel(USERS)
        panel.create(gateway, UserCreate(name="Bo", email="bo@x.com"))

        row = panel.create(gateway, UserCreate(name="Ana", email="ana@x.com", role="staff"))

        assert panel.rows[0] is row
        assert row["name"] == "Ana"
        assert row["id"] is not None
        assert row["created_at"] is not None

    def test_activate_fetches_rows(self, gateway):
        gateway.insert("users", [{"name": "Ana", "email": "ana@x.com", "role": "staff"}])
        panel = RecordPanel(USERS)

        assert panel.activate(gateway) is True
        assert panel.loaded
        assert [row["name"] for row in panel.rows] == ["Ana"]

    def test_failed_fetch_keeps_previous_rows(self, gateway, test_db):
        gateway.insert("users", [{"name": "Ana", "email": "ana@x.com", "role": "staff"}])
        panel = RecordPanel(USERS)
        panel.activate(gateway)

        assert panel.activate(UnreachableGateway(test_db)) is False
        assert [row["name"] for row in panel.rows] == ["Ana"]
        assert "unreachable" in panel.last_error

    def test_failed_create_leaves_rows(self, gateway, test_db):
        panel = RecordPanel(USERS)
        panel.create(gateway, UserCreate(name="Ana", email="ana@x.com"))

        with pytest.raises(GatewayConnectionError):
            panel.create(UnreachableGateway(test_db), UserCreate(name="Bo", email="bo@x.com"))

        assert [row["name"] for row in panel.rows] == ["Ana"]
        assert panel.last_error is not None


class TestLogsPanel:
    """Tests for the logs panel."""

    def test_activation_loads_options(self, gateway):
        gateway.insert("users", [{"name": "Ana", "email": "ana@x.com", "role": "staff"}])
        gateway.insert("equipment", [{"name": "Camera", "type": "Camera"}])
        panel = LogsPanel()

        panel.activate(gateway)

        assert [option.name for option in panel.options.users] == ["Ana"]
        assert [option.name for option in panel.options.equipment] == ["Camera"]
        assert panel.state()["options"]["users"][0]["name"] == "Ana"


class TestAssetPanel:
    """Tests for asset editing, selection and soft delete."""

    def test_update_replaces_row_in_place(self, gateway):
        panel = _assets_panel(gateway, "A1", "A2")

        panel.update(gateway, "A1", AssetUpdate(name="Camera", qty="5"))

        assert [row["asset_tag"] for row in panel.rows] == ["A2", "A1"]
        assert panel.rows[1]["qty"] == 5
        assert panel.rows[1]["name"] == "Camera"

    def test_toggle_twice_restores_selection(self, gateway):
        panel = _assets_panel(gateway, "A1", "A2")

        panel.toggle("A1")
        assert panel.selected == ["A1"]
        panel.toggle("A1")
        assert panel.selected == []

    def test_toggle_unknown_tag(self, gateway):
        panel = _assets_panel(gateway, "A1")

        with pytest.raises(AssetNotFoundError):
            panel.toggle("missing")

    def test_select_all_toggled_twice_from_empty(self, gateway):
        panel = _assets_panel(gateway, "A1", "A2", "A3")

        assert sorted(panel.toggle_all()) == ["A1", "A2", "A3"]
        assert panel.toggle_all() == []

    def test_select_all_toggled_twice_from_full(self, gateway):
        panel = _assets_panel(gateway, "A1", "A2")
        panel.toggle("A1")
        panel.toggle("A2")

        assert panel.toggle_all() == []
        assert sorted(panel.toggle_all()) == ["A1", "A2"]

    def test_select_all_from_partial_selects_everything(self, gateway):
        panel = _assets_panel(gateway, "A1", "A2")
        panel.toggle("A1")

        assert sorted(panel.toggle_all()) == ["A1", "A2"]

    def test_select_all_with_no_rows(self):
        panel = AssetPanel()

        assert panel.toggle_all() == []
        assert panel.toggle_all() == []

    def test_delete_selected(self, gateway):
        panel = _assets_panel(gateway, "T1", "T2", "T3")
        panel.toggle("T1")
        panel.toggle("T2")

        moved = panel.delete_selected(gateway)

        assert sorted(row["asset_tag"] for row in moved) == ["T1", "T2"]
        assert [row["asset_tag"] for row in panel.rows] == ["T3"]
        assert panel.selected == []
        assert gateway.count("assets_trash") == 2

    def test_delete_selected_with_empty_selection(self, gateway):
        panel = _assets_panel(gateway, "T1")

        assert panel.delete_selected(gateway) == []
        assert len(panel.rows) == 1

    def test_failed_bulk_delete_keeps_rows_and_selection(self, gateway, test_db):
        panel = _assets_panel(gateway, "T1", "T2")
        panel.toggle_all()

        with pytest.raises(GatewayConnectionError):
            panel.delete_selected(UnreachableGateway(test_db))

        assert len(panel.rows) == 2
        assert sorted(panel.selected) == ["T1", "T2"]
        assert panel.last_error is not None

    def test_delete_one_drops_it_from_selection(self, gateway):
        panel = _assets_panel(gateway, "T1", "T2")
        panel.toggle_all()

        panel.delete(gateway, "T1")

        assert [row["asset_tag"] for row in panel.rows] == ["T2"]
        assert panel.selected == ["T2"]


class TestDashboardView:
    """Tests for the dashboard."""

    def test_counts_refetched_on_every_activation(self, gateway):
        dashboard = DashboardView()
        first = dashboard.activate(gateway)
        assert first.counts["users"] == 0

        gateway.insert("users", [{"name": "Ana", "email": "ana@x.com", "role": "staff"}])
        second = dashboard.activate(gateway)

        assert second.counts["users"] == first.counts["users"] + 1
        assert dashboard.activations == 2
        assert second.activation == 2


class TestShell:
    """Tests for the tab shell."""

    def test_starts_on_dashboard(self):
        shell = Shell()

        assert shell.active_menu == "dashboard"
        assert shell.active_inventory_tab == "equipment"
        assert shell.visible_snapshots() == []

    def test_each_dashboard_visit_reactivates(self, gateway):
        shell = Shell()

        shell.select_menu("dashboard", gateway)
        shell.select_menu("inventory", gateway)
        shell.select_menu("dashboard", gateway)

        assert shell.dashboard.activations == 2

    def test_inventory_tab_fetches_table(self, gateway):
        gateway.insert("equipment", [{"name": "Camera", "type": "Camera"}])
        shell = Shell()

        shell.select_inventory_tab("equipment", gateway)

        state = shell.state()
        assert state["active_menu"] == "inventory"
        assert state["panel"]["table"] == "equipment"
        assert [row["name"] for row in state["panel"]["rows"]] == ["Camera"]
        assert [snapshot.title for snapshot in shell.visible_snapshots()] == ["Equipment"]

    def test_reports_tab_takes_snapshots(self, gateway):
        gateway.insert("users", [{"name": "Ana", "email": "ana@x.com", "role": "staff"}])
        shell = Shell()

        shell.select_menu("reports", gateway)

        assert [snapshot.title for snapshot in shell.visible_snapshots()] == ["Equipment", "Logs", "Users", "Assets"]
        previews = shell.state()["reports"]["previews"]
        assert [preview["title"] for preview in previews] == ["Users"]

    def test_unknown_tabs(self, gateway):
        shell = Shell()

        with pytest.raises(UnknownTabError):
            shell.select_menu("settings", gateway)
        with pytest.raises(UnknownTabError):
            shell.select_inventory_tab("printers", gateway)


class TestConsoleRegistry:
    """Tests for the per-session registry."""

    def test_same_token_same_shell(self):
        registry = ConsoleRegistry()

        assert registry.get("token-a") is registry.get("token-a")
        assert registry.get("token-a") is not registry.get("token-b")
        assert len(registry) == 2

    def test_discard(self):
        registry = ConsoleRegistry()
        shell = registry.get("token-a")

        registry.discard("token-a")

        assert registry.get("token-a") is not shell

    def test_expired_session_shell_is_dropped(self):
        registry = ConsoleRegistry()
        past = datetime.now(timezone.utc) - timedelta(seconds=1)
        registry.get("token-a", expires_at=past)

        registry.get("token-b")

        assert len(registry) == 1

    def test_live_session_shell_is_kept(self):
        registry = ConsoleRegistry()
        later = datetime.now(timezone.utc) + timedelta(hours=1)
        shell = registry.get("token-a", expires_at=later)

        registry.get("token-b")

        assert registry.get("token-a", expires_at=later) is shell

    def test_session_without_expiry_dropped_after_idle_period(self):
        registry = ConsoleRegistry(idle_seconds=0)
        shell = registry.get("token-a")

        assert registry.get("token-a") is not shell
        assert len(registry) == 1
