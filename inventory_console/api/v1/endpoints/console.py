"""Console endpoints.

Each signed-in session drives its own shell: switching tabs activates the
view behind them, and panel writes patch the rows the session sees.
"""

import logging
from typing import Any, Dict, Type

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from inventory_console.api.deps import get_console, get_data_gateway
from inventory_console.console import Shell, UnknownTabError
from inventory_console.gateway import BaseDataGateway
from inventory_console.schemas.asset import AssetCreate, AssetUpdate
from inventory_console.schemas.console import ConsoleState, PanelState
from inventory_console.schemas.equipment import EquipmentCreate
from inventory_console.schemas.log import LogCreate
from inventory_console.schemas.user import UserCreate
from inventory_console.services.asset_service import AssetNotFoundError, AssetTagConflictError
from inventory_console.services.report_service import ReportService

router = APIRouter()
logger = logging.getLogger(__name__)

CREATE_SCHEMAS: Dict[str, Type[BaseModel]] = {
    "equipment": EquipmentCreate,
    "logs": LogCreate,
    "users": UserCreate,
    "assets": AssetCreate,
}


def _tab_not_found(e: UnknownTabError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.get("/", response_model=ConsoleState)
def read_console(shell: Shell = Depends(get_console)):
    """Current tabs and the state of the visible view."""
    with shell.lock:
        return shell.state()


@router.post("/menu/{tab}", response_model=ConsoleState)
def select_menu(
    tab: str,
    shell: Shell = Depends(get_console),
    gateway: BaseDataGateway = Depends(get_data_gateway),
):
    """Switch to dashboard, inventory or reports and refresh that view."""
    with shell.lock:
        try:
            shell.select_menu(tab, gateway)
        except UnknownTabError as e:
            raise _tab_not_found(e)
        return shell.state()


@router.post("/inventory/{tab}", response_model=ConsoleState)
def select_inventory_tab(
    tab: str,
    shell: Shell = Depends(get_console),
    gateway: BaseDataGateway = Depends(get_data_gateway),
):
    """Switch to an inventory table and fetch it."""
    with shell.lock:
        try:
            shell.select_inventory_tab(tab, gateway)
        except UnknownTabError as e:
            raise _tab_not_found(e)
        return shell.state()


@router.post("/panels/{table}/records", response_model=PanelState, status_code=status.HTTP_201_CREATED)
def add_record(
    table: str,
    payload: Dict[str, Any] = Body(...),
    shell: Shell = Depends(get_console),
    gateway: BaseDataGateway = Depends(get_data_gateway),
):
    """Add a record through a panel; it is shown first once stored."""
    if table not in CREATE_SCHEMAS:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown inventory tab: {table}",
        )
    try:
        data = CREATE_SCHEMAS[table].model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    with shell.lock:
        panel = shell.panel(table)
        try:
            panel.create(gateway, data)
        except AssetTagConflictError as e:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=str(e),
            )
        return panel.state()


@router.put("/panels/assets/records/{asset_tag}", response_model=PanelState)
def update_asset_record(
    asset_tag: str,
    asset_data: AssetUpdate,
    shell: Shell = Depends(get_console),
    gateway: BaseDataGateway = Depends(get_data_gateway),
):
    """Overwrite an asset and replace it in the list."""
    with shell.lock:
        try:
            shell.assets.update(gateway, asset_tag, asset_data)
        except AssetNotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        return shell.assets.state()


@router.delete("/panels/assets/records/{asset_tag}", response_model=PanelState)
def delete_asset_record(
    asset_tag: str,
    shell: Shell = Depends(get_console),
    gateway: BaseDataGateway = Depends(get_data_gateway),
):
    """Move an asset to trash and drop it from the list."""
    with shell.lock:
        try:
            shell.assets.delete(gateway, asset_tag)
        except AssetNotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        return shell.assets.state()


@router.post("/panels/assets/selection/{asset_tag}", response_model=PanelState)
def toggle_asset_selection(asset_tag: str, shell: Shell = Depends(get_console)):
    """Select or unselect one listed asset."""
    with shell.lock:
        try:
            shell.assets.toggle(asset_tag)
        except AssetNotFoundError as e:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
        return shell.assets.state()


@router.post("/panels/assets/selection", response_model=PanelState)
def toggle_all_assets(shell: Shell = Depends(get_console)):
    """Select every listed asset, or clear the selection when all are selected."""
    with shell.lock:
        shell.assets.toggle_all()
        return shell.assets.state()


@router.delete("/panels/assets/selection", response_model=PanelState)
def delete_selected_assets(
    shell: Shell = Depends(get_console),
    gateway: BaseDataGateway = Depends(get_data_gateway),
):
    """Move every selected asset to trash."""
    with shell.lock:
        shell.assets.delete_selected(gateway)
        return shell.assets.state()


@router.get("/export.pdf")
def export_visible_tables(shell: Shell = Depends(get_console)):
    """Download the tables currently on screen, drawn as images."""
    with shell.lock:
        snapshots = shell.visible_snapshots()

    pdf_content = ReportService().render_rasterized(snapshots)
    return Response(
        content=pdf_content,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{ReportService.FILENAME}"'
        },
    )
