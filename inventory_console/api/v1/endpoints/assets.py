"""Asset endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from inventory_console.api.deps import get_data_gateway
from inventory_console.gateway import BaseDataGateway
from inventory_console.schemas.asset import (
    AssetBulkDeleteRequest,
    AssetCreate,
    AssetDeleteResponse,
    AssetResponse,
    AssetTrashResponse,
    AssetUpdate,
)
from inventory_console.services import asset_service
from inventory_console.services.asset_service import AssetNotFoundError, AssetTagConflictError
from inventory_console.services.record_service import list_records
from inventory_console.services.tables import ASSETS

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[AssetResponse])
def list_assets(gateway: BaseDataGateway = Depends(get_data_gateway)):
    """List all assets, newest first."""
    return list_records(gateway, ASSETS)


@router.post("/", response_model=AssetResponse, status_code=status.HTTP_201_CREATED)
def create_asset(
    asset_data: AssetCreate,
    gateway: BaseDataGateway = Depends(get_data_gateway),
):
    """
    Create an asset.

    - **asset_tag**: Unique tag
    - **name**: Asset name
    - **category**: One of the fixed categories (default: studio equipment)
    - **qty**: Quantity text; its leading integer is stored
    - **created_at**: Defaults to now in the console timezone
    """
    try:
        return asset_service.create_asset(gateway, asset_data)
    except AssetTagConflictError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )


@router.get("/trash", response_model=List[AssetTrashResponse])
def list_trash(gateway: BaseDataGateway = Depends(get_data_gateway)):
    """List archived assets, most recently deleted first."""
    return asset_service.list_trash(gateway)


@router.post("/bulk-delete", response_model=AssetDeleteResponse)
def bulk_delete_assets(
    request: AssetBulkDeleteRequest,
    gateway: BaseDataGateway = Depends(get_data_gateway),
):
    """Move every asset carrying one of the tags to trash.

    Tags with no matching asset are ignored.
    """
    moved = asset_service.delete_assets(gateway, request.asset_tags)
    return AssetDeleteResponse(
        deleted=sorted({row["asset_tag"] for row in moved}),
        archived=len(moved),
    )


@router.put("/{asset_tag}", response_model=List[AssetResponse])
def update_asset(
    asset_tag: str,
    asset_data: AssetUpdate,
    gateway: BaseDataGateway = Depends(get_data_gateway),
):
    """Overwrite every field of the asset except its tag."""
    try:
        return asset_service.update_asset(gateway, asset_tag, asset_data)
    except AssetNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )


@router.delete("/{asset_tag}", response_model=AssetDeleteResponse)
def delete_asset(
    asset_tag: str,
    gateway: BaseDataGateway = Depends(get_data_gateway),
):
    """Move the asset to trash."""
    try:
        moved = asset_service.delete_asset(gateway, asset_tag)
    except AssetNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        )
    return AssetDeleteResponse(deleted=[asset_tag], archived=len(moved))
