"""Report service for generating inventory PDFs."""

import io
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence
from xml.sax.saxutils import escape

from PIL import Image, ImageDraw, ImageFont
from reportlab.graphics.charts.barcharts import VerticalBarChart
from reportlab.graphics.shapes import Drawing
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from inventory_console.config import settings
from inventory_console.gateway.base import BaseDataGateway, GatewayError
from inventory_console.schemas.report import ExportStrategy, TablePreview
from inventory_console.services.tables import REPORT_TABLES, TABLES, TableSpec

logger = logging.getLogger(__name__)


@dataclass
class TableSnapshot:
    """Rows of one table as captured for a report."""

    title: str
    columns: List[str]
    rows: List[Dict[str, Any]]

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def cells(self) -> List[List[str]]:
        return [[format_cell(row.get(column)) for column in self.columns] for row in self.rows]


def format_cell(value: Any) -> str:
    """String form of a cell; missing values render empty."""
    if value is None:
        return ""
    return str(value)


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to ``limit`` characters, marking the cut with an ellipsis."""
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def humanize(column: str) -> str:
    """Header label for a column name (``serial_number`` -> ``Serial Number``)."""
    return column.replace("_", " ").title()


def snapshot_for(spec: TableSpec, rows: Sequence[Dict[str, Any]]) -> TableSnapshot:
    """Snapshot with the table's declared column order."""
    return TableSnapshot(title=spec.title, columns=list(spec.columns), rows=list(rows))


def collect_snapshots(
    gateway: BaseDataGateway,
    tables: Sequence[str] = REPORT_TABLES,
) -> List[TableSnapshot]:
    """Fetch every report table.

    A table that cannot be fetched is logged and treated as empty.
    """
    snapshots = []
    for name in tables:
        spec = TABLES[name]
        try:
            rows = gateway.select(spec.name, order=list(spec.order))
        except GatewayError as e:
            logger.error(f"Error fetching {spec.name} for report: {e}")
            rows = []
        snapshots.append(snapshot_for(spec, rows))
    return snapshots


def build_previews(
    snapshots: Sequence[TableSnapshot],
    max_columns: int = 4,
    max_rows: int = 5,
) -> List[TablePreview]:
    """First columns and rows of every non-empty snapshot."""
    previews = []
    for snapshot in snapshots:
        if snapshot.is_empty:
            continue
        previews.append(
            TablePreview(
                title=snapshot.title,
                columns=[humanize(c) for c in snapshot.columns[:max_columns]],
                rows=[row[:max_columns] for row in snapshot.cells()[:max_rows]],
            )
        )
    return previews


class ReportService:
    """Render inventory tables to PDF.

    Two strategies are offered: ``render_structured`` lays the data out as
    PDF tables, ``render_rasterized`` draws each table as an image and slices
    it across pages.
    """

    TITLE = "Inventory Summary Report"
    FILENAME = "inventory_summary_report.pdf"
    MARGIN = 40
    HEADING_SPACE = 30
    CELL_PADDING = 4
    MAX_CELL_CHARS = 60

    def __init__(self, font_size: Optional[int] = None):
        """Initialize report service."""
        self.font_size = font_size or settings.report_font_size
        self.page_width, self.page_height = A4

    def render_structured(
        self,
        snapshots: Sequence[TableSnapshot],
        counts: Optional[Dict[str, int]] = None,
    ) -> bytes:
        """
        Render a title page followed by one section per non-empty table.

        Args:
            snapshots: Tables to include, in order
            counts: Row count per table for the title page chart

        Returns:
            PDF bytes
        """
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=self.MARGIN,
            rightMargin=self.MARGIN,
            topMargin=self.MARGIN,
            bottomMargin=self.MARGIN,
            title=self.TITLE,
            author="Inventory Console",
        )

        styles = getSampleStyleSheet()
        cell_style = ParagraphStyle(
            "ReportCell",
            parent=styles["BodyText"],
            fontSize=self.font_size,
            leading=self.font_size + 2,
        )
        header_style = ParagraphStyle("ReportHeader", parent=cell_style, fontName="Helvetica-Bold")

        story = [
            Paragraph(self.TITLE, styles["Title"]),
            Paragraph(f"Generated {datetime.now(timezone.utc):%Y-%m-%d %H:%M} UTC", styles["Normal"]),
        ]
        if counts:
            story.append(Spacer(1, 24))
            story.append(self._counts_chart(counts, doc.width))

        sections = 0
        for snapshot in snapshots:
            if snapshot.is_empty:
                logger.debug(f"Skipping empty table {snapshot.title}")
                continue
            story.append(PageBreak())
            story.append(Paragraph(escape(snapshot.title), styles["Heading2"]))
            story.append(self._build_table(snapshot, cell_style, header_style, doc.width))
            sections += 1

        doc.build(story)
        pdf_content = buffer.getvalue()
        buffer.close()

        logger.info(f"Rendered structured report: {sections} section(s), {len(pdf_content)} bytes")
        return pdf_content

    def _build_table(
        self,
        snapshot: TableSnapshot,
        cell_style: ParagraphStyle,
        header_style: ParagraphStyle,
        available_width: float,
    ) -> Table:
        header = [Paragraph(escape(humanize(column)), header_style) for column in snapshot.columns]
        body = [
            [Paragraph(escape(truncate(cell, self.MAX_CELL_CHARS)), cell_style) for cell in row]
            for row in snapshot.cells()
        ]
        col_width = available_width / len(snapshot.columns)
        table = Table([header] + body, colWidths=[col_width] * len(snapshot.columns), repeatRows=1)
        table.setStyle(
            TableStyle(
                [
                    ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                    ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ]
            )
        )
        return table

    def _counts_chart(self, counts: Dict[str, int], width: float) -> Drawing:
        values = [counts[name] for name in counts]
        top = max(values + [1])

        drawing = Drawing(width, 220)
        chart = VerticalBarChart()
        chart.x = 40
        chart.y = 30
        chart.width = width - 60
        chart.height = 170
        chart.data = [values]
        chart.categoryAxis.categoryNames = list(counts)
        chart.valueAxis.valueMin = 0
        chart.valueAxis.valueMax = top + max(1, top // 10)
        chart.bars[0].fillColor = colors.HexColor("#2563eb")
        drawing.add(chart)
        return drawing

    def render_rasterized(self, snapshots: Sequence[TableSnapshot]) -> bytes:
        """
        Render each non-empty table as an image placed across pages.

        Each image is scaled to fit the page width. When it is taller than the
        content area, the following pages draw the same image shifted up by
        one content height so the table continues where the last page ended.

        Returns:
            PDF bytes
        """
        buffer = io.BytesIO()
        c = canvas.Canvas(buffer, pagesize=A4)
        c.setTitle(self.TITLE)
        c.setAuthor("Inventory Console")

        content_width = self.page_width - 2 * self.MARGIN
        content_height = self.page_height - 2 * self.MARGIN - self.HEADING_SPACE
        content_top = self.MARGIN + content_height

        pages = 0
        for snapshot in snapshots:
            if snapshot.is_empty:
                logger.debug(f"Skipping empty table {snapshot.title}")
                continue

            image = self.rasterize_table(snapshot)
            scale = min(1.0, content_width / image.width)
            draw_width = image.width * scale
            draw_height = image.height * scale
            reader = ImageReader(image)

            offset = 0.0
            while True:
                heading = snapshot.title if offset == 0 else f"{snapshot.title} (continued)"
                c.setFont("Helvetica-Bold", 14)
                c.drawString(self.MARGIN, self.page_height - self.MARGIN, heading)

                c.saveState()
                clip = c.beginPath()
                clip.rect(self.MARGIN, self.MARGIN, content_width, content_height)
                c.clipPath(clip, stroke=0, fill=0)
                c.drawImage(
                    reader,
                    self.MARGIN,
                    content_top - draw_height + offset,
                    width=draw_width,
                    height=draw_height,
                )
                c.restoreState()
                c.showPage()
                pages += 1

                offset += content_height
                if offset >= draw_height:
                    break

            image.close()

        if pages == 0:
            c.setFont("Helvetica-Bold", 14)
            c.drawString(self.MARGIN, self.page_height - self.MARGIN, self.TITLE)
            c.setFont("Helvetica", 10)
            c.drawString(self.MARGIN, self.page_height - self.MARGIN - 24, "No records to export.")
            c.showPage()

        c.save()
        pdf_content = buffer.getvalue()
        buffer.close()

        logger.info(f"Rendered rasterized report: {pages} page(s), {len(pdf_content)} bytes")
        return pdf_content

    def rasterize_table(self, snapshot: TableSnapshot) -> Image.Image:
        """Draw a table grid with its header row into an RGB image."""
        font = ImageFont.load_default()
        probe = ImageDraw.Draw(Image.new("RGB", (1, 1)))

        header = [humanize(column) for column in snapshot.columns]
        body = [[self._fit_text(cell) for cell in row] for row in snapshot.cells()]
        lines = [header] + body

        widths = []
        for index in range(len(header)):
            longest = max(probe.textlength(line[index], font=font) for line in lines)
            widths.append(int(longest) + 2 * self.CELL_PADDING)

        text_height = font.getbbox("Ag")[3]
        row_height = text_height + 2 * self.CELL_PADDING

        image = Image.new("RGB", (sum(widths) + 1, row_height * len(lines) + 1), (255, 255, 255))
        draw = ImageDraw.Draw(image)
        draw.rectangle([0, 0, sum(widths), row_height], fill=(235, 235, 235))

        for row_index, line in enumerate(lines):
            y = row_index * row_height
            x = 0
            for col_index, text in enumerate(line):
                draw.rectangle([x, y, x + widths[col_index], y + row_height], outline=(160, 160, 160))
                draw.text((x + self.CELL_PADDING, y + self.CELL_PADDING), text, fill=(0, 0, 0), font=font)
                x += widths[col_index]

        return image

    def _fit_text(self, text: str) -> str:
        # Bitmap fonts only cover latin-1
        text = text.replace("\n", " ").encode("latin-1", "replace").decode("latin-1")
        return truncate(text, self.MAX_CELL_CHARS)


def export_inventory(
    gateway: BaseDataGateway,
    strategy: ExportStrategy = ExportStrategy.STRUCTURED,
    service: Optional[ReportService] = None,
) -> bytes:
    """Re-fetch every report table and render the inventory PDF.

    Args:
        gateway: Data gateway
        strategy: Structured tables or rasterized table images
        service: Renderer to use (a default one when None)

    Returns:
        PDF bytes
    """
    service = service or ReportService()
    snapshots = collect_snapshots(gateway)
    if strategy == ExportStrategy.RASTERIZED:
        return service.render_rasterized(snapshots)

    counts = {name: len(snapshot.rows) for name, snapshot in zip(REPORT_TABLES, snapshots)}
    return service.render_structured(snapshots, counts=counts)
