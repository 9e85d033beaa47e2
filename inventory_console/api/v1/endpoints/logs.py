"""Log endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status

from inventory_console.api.deps import get_data_gateway
from inventory_console.gateway import BaseDataGateway
from inventory_console.schemas.log import LogCreate, LogOptions, LogResponse
from inventory_console.services.record_service import create_record, get_log_options, list_records
from inventory_console.services.tables import LOGS

router = APIRouter()


@router.get("/", response_model=List[LogResponse])
def list_logs(gateway: BaseDataGateway = Depends(get_data_gateway)):
    """List all log entries, newest first."""
    return list_records(gateway, LOGS)


@router.get("/options", response_model=LogOptions)
def list_log_options(gateway: BaseDataGateway = Depends(get_data_gateway)):
    """Users and equipment a log entry can refer to."""
    return get_log_options(gateway)


@router.post("/", response_model=LogResponse, status_code=status.HTTP_201_CREATED)
def create_log(
    log_data: LogCreate,
    gateway: BaseDataGateway = Depends(get_data_gateway),
):
    """
    Create a log entry.

    - **user_id**: User the entry refers to
    - **action**: Free text
    - **equipment_id**: Equipment the entry refers to
    - **timestamp**: Defaults to now
    """
    return create_record(gateway, LOGS, log_data)
