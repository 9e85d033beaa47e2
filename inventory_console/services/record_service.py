"""Record business logic shared by the console tables."""

import logging
from typing import List

from pydantic import BaseModel

from inventory_console.gateway.base import BaseDataGateway, GatewayError, Order, Row
from inventory_console.schemas.log import LogOptions, NamedOption
from inventory_console.services.tables import TableSpec

logger = logging.getLogger(__name__)


class RecordServiceError(Exception):
    """Base exception for record service errors."""
    pass


class EmptyInsertResultError(RecordServiceError):
    """Store accepted an insert but returned no row."""
    pass


def list_records(gateway: BaseDataGateway, spec: TableSpec) -> List[Row]:
    """Fetch every row of a table in its list order.

    Raises:
        GatewayError: If the store call fails
    """
    return gateway.select(spec.name, order=list(spec.order))


def create_record(gateway: BaseDataGateway, spec: TableSpec, data: BaseModel) -> Row:
    """Insert one record and return its canonical row.

    Args:
        gateway: Data gateway
        spec: Target table
        data: Validated create schema

    Returns:
        Row as stored, including store-assigned fields

    Raises:
        GatewayError: If the insert fails
        EmptyInsertResultError: If the store returned nothing
    """
    rows = gateway.insert(spec.name, [data.model_dump()])
    if not rows:
        raise EmptyInsertResultError(f"Insert into {spec.name} returned no row")
    return rows[0]


def get_log_options(gateway: BaseDataGateway) -> LogOptions:
    """Fetch user and equipment choices for the log form.

    A failing lookup leaves its list empty.
    """
    options = LogOptions()
    for table, field in (("users", "users"), ("equipment", "equipment")):
        try:
            rows = gateway.select(table, columns=["id", "name"], order=[Order("id")])
        except GatewayError as e:
            logger.error(f"Error fetching {table} options: {e}")
            continue
        setattr(options, field, [NamedOption(**row) for row in rows])
    return options
