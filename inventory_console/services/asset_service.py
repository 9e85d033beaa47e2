"""Asset business logic service."""

import logging
from typing import List, Sequence

from inventory_console.config import settings
from inventory_console.gateway.base import BaseDataGateway, Filter, Order, Row
from inventory_console.schemas.asset import AssetCreate, AssetUpdate
from inventory_console.services.record_service import (
    EmptyInsertResultError,
    RecordServiceError,
)
from inventory_console.services.tables import ASSETS, ASSETS_TRASH_TABLE

logger = logging.getLogger(__name__)

ARCHIVED_FIELDS = (
    "asset_tag",
    "name",
    "category",
    "condition",
    "qty",
    "details",
    "remarks",
    "created_at",
)


class AssetNotFoundError(RecordServiceError):
    """No asset carries the tag."""
    pass


class AssetTagConflictError(RecordServiceError):
    """An asset with the tag already exists."""
    pass


def to_trash_row(row: Row) -> Row:
    """Build the archived copy of an asset row."""
    archived = {field: row.get(field) for field in ARCHIVED_FIELDS}
    archived["asset_id"] = row.get("id")
    return archived


def create_asset(gateway: BaseDataGateway, data: AssetCreate) -> Row:
    """Create an asset.

    Args:
        gateway: Data gateway
        data: Asset fields; qty already parsed from the form text

    Returns:
        Canonical asset row

    Raises:
        AssetTagConflictError: If the tag is already used
        GatewayError: If the store call fails

    Examples:
        >>> row = create_asset(gateway, AssetCreate(asset_tag="A1", name="Camera", qty="3"))
        >>> row["qty"]
        3
    """
    if gateway.count(ASSETS.name, [Filter.eq("asset_tag", data.asset_tag)]) > 0:
        raise AssetTagConflictError(f"Asset tag {data.asset_tag} already exists")

    rows = gateway.insert(ASSETS.name, [data.model_dump()])
    if not rows:
        raise EmptyInsertResultError(f"Insert into {ASSETS.name} returned no row")
    logger.info(f"Created asset {data.asset_tag}")
    return rows[0]


def update_asset(gateway: BaseDataGateway, asset_tag: str, data: AssetUpdate) -> List[Row]:
    """Overwrite every mutable field of the assets carrying ``asset_tag``.

    Returns:
        Updated rows

    Raises:
        AssetNotFoundError: If no asset carries the tag
        GatewayError: If the store call fails
    """
    rows = gateway.update(ASSETS.name, data.model_dump(), [Filter.eq("asset_tag", asset_tag)])
    if not rows:
        raise AssetNotFoundError(f"Asset {asset_tag} not found")
    logger.info(f"Updated asset {asset_tag}")
    return rows


def delete_assets(gateway: BaseDataGateway, asset_tags: Sequence[str]) -> List[Row]:
    """Move the assets carrying any of ``asset_tags`` to trash.

    The archived copies are written before the live rows are removed.

    Returns:
        Rows removed from the live table (empty when no tag matched)

    Raises:
        GatewayError: If archiving fails (nothing deleted)
        SoftDeleteError: If the live delete failed after archiving
    """
    tags = list(dict.fromkeys(asset_tags))
    if not tags:
        return []

    moved = gateway.move(
        ASSETS.name,
        ASSETS_TRASH_TABLE,
        [Filter.in_("asset_tag", tags)],
        to_trash_row,
        retries=settings.soft_delete_retries,
    )
    logger.info(f"Moved {len(moved)} asset(s) to trash: {tags}")
    return moved


def delete_asset(gateway: BaseDataGateway, asset_tag: str) -> List[Row]:
    """Move one asset to trash.

    Raises:
        AssetNotFoundError: If no asset carries the tag
    """
    moved = delete_assets(gateway, [asset_tag])
    if not moved:
        raise AssetNotFoundError(f"Asset {asset_tag} not found")
    return moved


def list_trash(gateway: BaseDataGateway) -> List[Row]:
    """Archived assets, most recently deleted first."""
    return gateway.select(
        ASSETS_TRASH_TABLE,
        order=[Order("deleted_at", descending=True), Order("id", descending=True)],
    )
