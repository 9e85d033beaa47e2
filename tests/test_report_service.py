"""Tests for report service."""

import fitz
import pytest

from inventory_console.schemas.report import ExportStrategy
from inventory_console.services.report_service import (
    ReportService,
    TableSnapshot,
    build_previews,
    collect_snapshots,
    export_inventory,
    format_cell,
    humanize,
    snapshot_for,
    truncate,
)
from inventory_console.services.tables import ASSETS, EQUIPMENT, LOGS


def _pages(pdf_bytes):
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        return [page.get_text() for page in doc]


def _equipment_rows(count=2):
    return [
        {"id": i, "name": f"Camera {i}", "type": "Camera", "brand": None, "status": "available"}
        for i in range(1, count + 1)
    ]


@pytest.fixture
def service():
    return ReportService(font_size=8)


class TestCells:
    """Tests for cell formatting."""

    def test_null_renders_empty(self):
        assert format_cell(None) == ""

    def test_values_stringified(self):
        assert format_cell(3) == "3"
        assert format_cell("Tripod") == "Tripod"

    def test_humanize(self):
        assert humanize("serial_number") == "Serial Number"

    def test_truncate(self):
        assert truncate("Tripod", 10) == "Tripod"
        assert truncate("a" * 20, 10) == "aaaaaaa..."

    def test_snapshot_uses_declared_column_order(self):
        snapshot = snapshot_for(EQUIPMENT, _equipment_rows(1))

        assert snapshot.columns == list(EQUIPMENT.columns)
        assert snapshot.cells()[0][:4] == ["1", "Camera 1", "Camera", ""]


class TestPreviews:
    """Tests for table previews."""

    def test_first_four_columns_of_first_five_rows(self):
        snapshots = [snapshot_for(EQUIPMENT, _equipment_rows(8)), snapshot_for(LOGS, [])]

        previews = build_previews(snapshots)

        assert len(previews) == 1
        assert previews[0].title == "Equipment"
        assert previews[0].columns == ["Id", "Name", "Type", "Brand"]
        assert len(previews[0].rows) == 5
        assert all(len(row) == 4 for row in previews[0].rows)


class TestStructured:
    """Tests for the structured strategy."""

    def test_empty_tables_are_skipped(self, service):
        snapshots = [snapshot_for(EQUIPMENT, _equipment_rows()), snapshot_for(LOGS, [])]

        pages = _pages(service.render_structured(snapshots, counts={"equipment": 2, "logs": 0}))

        assert "Inventory Summary Report" in pages[0]
        assert len(pages) == 2
        assert pages[1].splitlines()[0] == "Equipment"
        assert "Camera 2" in pages[1]
        assert not any("Logs" in text for text in pages)

    def test_long_table_continues_with_header(self, service):
        pages = _pages(service.render_structured([snapshot_for(EQUIPMENT, _equipment_rows(150))]))

        assert len(pages) > 2
        assert all("Status" in text for text in pages[1:])

    def test_headers_are_humanized(self, service):
        pages = _pages(service.render_structured([snapshot_for(EQUIPMENT, _equipment_rows(1))]))

        assert "Status" in pages[1]
        assert "status\n" not in pages[1]

    def test_very_long_cell_fits_on_one_page(self, service):
        row = {
            "id": 1,
            "asset_tag": "A-100",
            "name": "Tripod",
            "category": "studio equipment",
            "condition": "good",
            "qty": 1,
            "details": "word " * 3000,
            "remarks": "note " * 3000,
            "created_at": "2024-01-01 09:00",
        }

        pages = _pages(service.render_structured([snapshot_for(ASSETS, [row])]))

        assert len(pages) == 2
        assert "A-100" in pages[1]
        assert "..." in pages[1]

    def test_title_page_only_when_everything_is_empty(self, service):
        pages = _pages(service.render_structured([snapshot_for(LOGS, [])]))

        assert len(pages) == 1


class TestRasterized:
    """Tests for the rasterized strategy."""

    def test_empty_tables_are_skipped(self, service):
        snapshots = [snapshot_for(EQUIPMENT, _equipment_rows()), snapshot_for(LOGS, [])]

        pages = _pages(service.render_rasterized(snapshots))

        assert len(pages) == 1
        assert pages[0].splitlines()[0] == "Equipment"
        assert not any("Logs" in text for text in pages)

    def test_tall_table_sliced_across_pages(self, service):
        snapshot = TableSnapshot(
            title="Tags",
            columns=["asset_tag", "qty"],
            rows=[{"asset_tag": f"A{i}", "qty": i} for i in range(300)],
        )

        pages = _pages(service.render_rasterized([snapshot]))

        assert len(pages) > 1
        assert pages[0].splitlines()[0] == "Tags"
        assert all(text.splitlines()[0] == "Tags (continued)" for text in pages[1:])

    def test_nothing_to_export(self, service):
        pages = _pages(service.render_rasterized([snapshot_for(LOGS, [])]))

        assert len(pages) == 1
        assert "No records to export." in pages[0]

    def test_rasterize_table_draws_every_row(self, service):
        image = service.rasterize_table(snapshot_for(EQUIPMENT, _equipment_rows(10)))
        single = service.rasterize_table(snapshot_for(EQUIPMENT, _equipment_rows(1)))

        assert image.height > single.height


class TestExport:
    """Tests for exporting straight from the store."""

    def test_structured_export(self, gateway):
        gateway.insert("equipment", [{"name": "Camera", "type": "Camera"}])

        pages = _pages(export_inventory(gateway, ExportStrategy.STRUCTURED))

        assert [text.splitlines()[0] for text in pages[1:]] == ["Equipment"]

    def test_rasterized_export(self, gateway):
        gateway.insert("users", [{"name": "Ana", "email": "ana@x.com", "role": "staff"}])

        pages = _pages(export_inventory(gateway, ExportStrategy.RASTERIZED))

        assert [text.splitlines()[0] for text in pages] == ["Users"]

    def test_collect_snapshots_in_report_order(self, gateway):
        assert [s.title for s in collect_snapshots(gateway)] == ["Equipment", "Logs", "Users", "Assets"]
