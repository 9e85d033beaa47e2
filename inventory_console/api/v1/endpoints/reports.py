"""Report endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Response

from inventory_console.api.deps import get_data_gateway
from inventory_console.gateway import BaseDataGateway
from inventory_console.schemas.report import ExportStrategy, TablePreview
from inventory_console.services.report_service import (
    ReportService,
    build_previews,
    collect_snapshots,
    export_inventory,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/inventory.pdf")
def download_inventory_report(
    strategy: ExportStrategy = Query(ExportStrategy.STRUCTURED, description="How tables are drawn"),
    gateway: BaseDataGateway = Depends(get_data_gateway),
):
    """Download every inventory table as one PDF.

    All tables are fetched again for the export. Empty tables are left out.
    """
    pdf_content = export_inventory(gateway, strategy)
    logger.info(f"Exported inventory report ({strategy.value})")

    return Response(
        content=pdf_content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{ReportService.FILENAME}"'
        },
    )


@router.get("/preview", response_model=List[TablePreview])
def preview_reports(gateway: BaseDataGateway = Depends(get_data_gateway)):
    """First four columns of the first five rows of every non-empty table."""
    return build_previews(collect_snapshots(gateway))
