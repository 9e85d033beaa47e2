"""Tests for summary service."""

from datetime import datetime, timedelta, timezone

from inventory_console.gateway.base import GatewayRequestError
from inventory_console.gateway.sql_gateway import SqlDataGateway
from inventory_console.schemas.log import LogCreate
from inventory_console.services.summary_service import get_summary


class LogsUncountable(SqlDataGateway):
    def count(self, table, filters=None):
        if table == "logs":
            raise GatewayRequestError("count rejected", status_code=500)
        return super().count(table, filters)


def test_counts_every_table(gateway):
    gateway.insert("users", [{"name": "Ana", "email": "ana@x.com", "role": "staff"}])
    gateway.insert("equipment", [{"name": "Camera", "type": "Camera"}, {"name": "Lamp", "type": "Light"}])

    summary = get_summary(gateway)

    assert summary.counts == {"equipment": 2, "logs": 0, "users": 1, "assets": 0}
    assert [(point.table, point.count) for point in summary.chart] == [
        ("equipment", 2),
        ("logs", 0),
        ("users", 1),
        ("assets", 0),
    ]
    assert summary.failed == []


def test_failed_count_reports_zero(test_db):
    gateway = LogsUncountable(test_db)
    gateway.insert("logs", [{"user_id": 1, "action": "checked out", "equipment_id": 1, "timestamp": datetime(2024, 1, 1, 9, 0)}])

    summary = get_summary(gateway)

    assert summary.counts["logs"] == 0
    assert summary.failed == ["logs"]


def test_activation_echoed(gateway):
    assert get_summary(gateway, activation=3).activation == 3


def test_fetched_at_is_utc(gateway):
    assert get_summary(gateway).fetched_at.utcoffset() == timedelta(0)


def test_log_timestamp_defaults_to_current_minute():
    entry = LogCreate(user_id=1, action="borrowed", equipment_id=1)

    assert entry.timestamp.tzinfo is None
    assert entry.timestamp.second == 0 and entry.timestamp.microsecond == 0
    assert abs(datetime.now(timezone.utc).replace(tzinfo=None) - entry.timestamp).total_seconds() < 120
