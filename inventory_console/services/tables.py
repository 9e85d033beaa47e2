"""Table registry: column order, list order and schema per console table."""

from dataclasses import dataclass
from typing import Dict, Tuple, Type

from pydantic import BaseModel

from inventory_console.gateway.base import Order
from inventory_console.schemas.asset import AssetResponse
from inventory_console.schemas.equipment import EquipmentResponse
from inventory_console.schemas.log import LogResponse
from inventory_console.schemas.user import UserResponse


@dataclass(frozen=True)
class TableSpec:
    """How a table is listed and displayed."""

    name: str
    title: str
    columns: Tuple[str, ...]
    order: Tuple[Order, ...]
    response_model: Type[BaseModel]


EQUIPMENT = TableSpec(
    name="equipment",
    title="Equipment",
    columns=(
        "id",
        "name",
        "type",
        "brand",
        "model",
        "serial_number",
        "image_url",
        "status",
        "notes",
        "created_at",
    ),
    order=(Order("created_at", descending=True), Order("id", descending=True)),
    response_model=EquipmentResponse,
)

LOGS = TableSpec(
    name="logs",
    title="Logs",
    columns=("id", "user_id", "action", "equipment_id", "timestamp"),
    order=(Order("timestamp", descending=True), Order("id", descending=True)),
    response_model=LogResponse,
)

USERS = TableSpec(
    name="users",
    title="Users",
    columns=("id", "name", "email", "role", "created_at"),
    order=(Order("created_at", descending=True), Order("id", descending=True)),
    response_model=UserResponse,
)

ASSETS = TableSpec(
    name="assets",
    title="Assets",
    columns=(
        "id",
        "asset_tag",
        "name",
        "category",
        "condition",
        "qty",
        "details",
        "remarks",
        "created_at",
    ),
    order=(Order("created_at", descending=True), Order("id", descending=True)),
    response_model=AssetResponse,
)

ASSETS_TRASH_TABLE = "assets_trash"

TABLES: Dict[str, TableSpec] = {spec.name: spec for spec in (EQUIPMENT, LOGS, USERS, ASSETS)}

# Report and dashboard order
REPORT_TABLES = ("equipment", "logs", "users", "assets")
