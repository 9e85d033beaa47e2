"""Tests for the REST data gateway."""

import json
import logging

import httpx
import pytest

from inventory_console.gateway.base import Filter, GatewayConnectionError, GatewayRequestError, Order, SoftDeleteError
from inventory_console.gateway.rest_gateway import RestDataGateway, build_filter_params, parse_content_range
from inventory_console.services.asset_service import to_trash_row

BACKEND = "http://backend.test"


def make_gateway(handler, **config):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return RestDataGateway({"url": BACKEND, "api_key": "anon", **config}, client=client)


class TestFilterParams:
    """Tests for filter translation."""

    def test_eq(self):
        assert build_filter_params([Filter.eq("asset_tag", "A1")]) == [("asset_tag", "eq.A1")]

    def test_in(self):
        assert build_filter_params([Filter.in_("asset_tag", ["T1", "T2"])]) == [("asset_tag", "in.(T1,T2)")]

    def test_reserved_characters_are_quoted(self):
        assert build_filter_params([Filter.in_("asset_tag", ["A,1"])]) == [("asset_tag", 'in.("A,1")')]

    def test_none(self):
        assert build_filter_params(None) == []


class TestContentRange:
    """Tests for Content-Range parsing."""

    def test_total(self):
        assert parse_content_range("0-24/3573") == 3573

    def test_empty(self):
        assert parse_content_range("*/0") == 0

    def test_missing(self):
        with pytest.raises(GatewayRequestError):
            parse_content_range(None)

    def test_unknown_total(self):
        with pytest.raises(GatewayRequestError):
            parse_content_range("0-24/*")


class TestRequests:
    """Tests for the requests sent to the data API."""

    def test_select_sends_order_and_auth(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[{"id": 1, "name": "Ana"}])

        gateway = make_gateway(handler, access_token="user-token")
        rows = gateway.select("users", order=[Order("created_at", descending=True), Order("id", descending=True)])

        assert rows == [{"id": 1, "name": "Ana"}]
        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/rest/v1/users"
        assert request.url.params["select"] == "*"
        assert request.url.params["order"] == "created_at.desc,id.desc"
        assert request.headers["apikey"] == "anon"
        assert request.headers["authorization"] == "Bearer user-token"

    def test_anon_key_used_without_token(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        make_gateway(handler).select("users")
        assert seen[0].headers["authorization"] == "Bearer anon"

    def test_insert_returns_representation(self):
        seen = []

        def handler(request):
            seen.append(request)
            body = json.loads(request.content)
            return httpx.Response(201, json=[dict(body[0], id=7)])

        rows = make_gateway(handler).insert("assets", [{"asset_tag": "A1", "name": "Camera"}])

        assert rows == [{"asset_tag": "A1", "name": "Camera", "id": 7}]
        assert seen[0].method == "POST"
        assert seen[0].headers["prefer"] == "return=representation"

    def test_update_sends_filter(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[{"id": 1, "asset_tag": "A1", "qty": 5}])

        rows = make_gateway(handler).update("assets", {"qty": 5}, [Filter.eq("asset_tag", "A1")])

        assert rows[0]["qty"] == 5
        assert seen[0].method == "PATCH"
        assert seen[0].url.params["asset_tag"] == "eq.A1"
        assert json.loads(seen[0].content) == {"qty": 5}

    def test_count_reads_content_range(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, headers={"content-range": "0-2/3"})

        assert make_gateway(handler).count("users") == 3
        assert seen[0].method == "HEAD"
        assert seen[0].headers["prefer"] == "count=exact"

    def test_count_many_maps_failures_to_none(self):
        def handler(request):
            if request.url.path.endswith("/logs"):
                return httpx.Response(500, json={"message": "boom"})
            return httpx.Response(200, headers={"content-range": "*/4"})

        counts = make_gateway(handler).count_many(["equipment", "logs", "users"])
        assert counts == {"equipment": 4, "logs": None, "users": 4}

    def test_rejected_request(self):
        def handler(request):
            return httpx.Response(400, json={"message": "bad filter"})

        with pytest.raises(GatewayRequestError) as exc_info:
            make_gateway(handler).select("assets")
        assert exc_info.value.status_code == 400
        assert "bad filter" in str(exc_info.value)

    def test_unreachable_backend(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GatewayConnectionError):
            make_gateway(handler).select("assets")


class TestMove:
    """Tests for archive-then-delete over the data API."""

    ROWS = [
        {"id": 1, "asset_tag": "T1", "name": "Tripod", "category": "studio equipment", "created_at": "2024-01-01T09:00"},
        {"id": 2, "asset_tag": "T2", "name": "Lamp", "category": "studio equipment", "created_at": "2024-01-01T09:00"},
    ]

    def _handler(self, calls, fail_live_delete=0, fail_trash_delete=False):
        failures = {"left": fail_live_delete}

        def handler(request):
            table = request.url.path.rsplit("/", 1)[1]
            calls.append((request.method, table, dict(request.url.params)))
            if request.method == "GET":
                return httpx.Response(200, json=self.ROWS)
            if request.method == "POST":
                body = json.loads(request.content)
                return httpx.Response(201, json=[dict(row, id=100 + i) for i, row in enumerate(body)])
            if request.method == "DELETE" and table == "assets" and failures["left"]:
                failures["left"] -= 1
                return httpx.Response(503, json={"message": "unavailable"})
            if request.method == "DELETE" and table == "assets_trash" and fail_trash_delete:
                return httpx.Response(500, json={"message": "cleanup failed"})
            return httpx.Response(200, json=self.ROWS if table == "assets" else [])

        return handler

    def test_archive_precedes_delete(self):
        calls = []
        gateway = make_gateway(self._handler(calls))

        moved = gateway.move("assets", "assets_trash", [Filter.in_("asset_tag", ["T1", "T2"])], to_trash_row)

        assert moved == self.ROWS
        assert [(method, table) for method, table, _ in calls] == [
            ("GET", "assets"),
            ("POST", "assets_trash"),
            ("DELETE", "assets"),
        ]
        assert calls[2][2]["asset_tag"] == "in.(T1,T2)"

    def test_delete_retried(self):
        calls = []
        gateway = make_gateway(self._handler(calls, fail_live_delete=1))

        gateway.move("assets", "assets_trash", [Filter.in_("asset_tag", ["T1", "T2"])], to_trash_row, retries=1)

        deletes = [table for method, table, _ in calls if method == "DELETE"]
        assert deletes == ["assets", "assets"]

    def test_failed_delete_removes_archived_copies(self):
        calls = []
        gateway = make_gateway(self._handler(calls, fail_live_delete=5))

        with pytest.raises(SoftDeleteError):
            gateway.move("assets", "assets_trash", [Filter.in_("asset_tag", ["T1", "T2"])], to_trash_row, retries=1)

        method, table, params = calls[-1]
        assert (method, table) == ("DELETE", "assets_trash")
        assert params["id"] == "in.(100,101)"

    def test_failed_cleanup_logs_rows_left_in_both_tables(self, caplog):
        calls = []
        gateway = make_gateway(self._handler(calls, fail_live_delete=5, fail_trash_delete=True))

        with caplog.at_level(logging.ERROR, logger="inventory_console.gateway.base"):
            with pytest.raises(SoftDeleteError):
                gateway.move(
                    "assets", "assets_trash", [Filter.in_("asset_tag", ["T1", "T2"])], to_trash_row, retries=1
                )

        errors = [
            record
            for record in caplog.records
            if record.name == "inventory_console.gateway.base" and record.levelno == logging.ERROR
        ]
        assert len(errors) == 1
        message = errors[0].getMessage()
        assert "T1" in message and "T2" in message
        assert "assets_trash" in message
        assert [(method, table) for method, table, _ in calls if method == "DELETE"] == [
            ("DELETE", "assets"),
            ("DELETE", "assets"),
            ("DELETE", "assets_trash"),
        ]
