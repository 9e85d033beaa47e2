"""Summary aggregation service."""

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from inventory_console.gateway.base import BaseDataGateway
from inventory_console.schemas.summary import ChartPoint, SummaryResponse
from inventory_console.services.tables import REPORT_TABLES

logger = logging.getLogger(__name__)


def get_summary(
    gateway: BaseDataGateway,
    tables: Sequence[str] = REPORT_TABLES,
    activation: Optional[int] = None,
) -> SummaryResponse:
    """Count rows per table with head-count queries.

    Counts are fetched on every call. A table whose count fails is
    reported as 0 and listed in ``failed``.

    Args:
        gateway: Data gateway
        tables: Tables to count, in display order
        activation: Dashboard activation number, echoed back

    Returns:
        Counts and chart input
    """
    raw = gateway.count_many(list(tables))
    failed = [table for table in tables if raw.get(table) is None]
    if failed:
        logger.warning(f"Summary counts unavailable for: {failed}")

    counts = {table: raw.get(table) or 0 for table in tables}
    return SummaryResponse(
        counts=counts,
        chart=[ChartPoint(table=table, count=counts[table]) for table in tables],
        failed=failed,
        fetched_at=datetime.now(timezone.utc),
        activation=activation,
    )
