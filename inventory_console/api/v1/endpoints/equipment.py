"""Equipment endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status

from inventory_console.api.deps import get_data_gateway
from inventory_console.gateway import BaseDataGateway
from inventory_console.schemas.equipment import EquipmentCreate, EquipmentResponse
from inventory_console.services.record_service import create_record, list_records
from inventory_console.services.tables import EQUIPMENT

router = APIRouter()


@router.get("/", response_model=List[EquipmentResponse])
def list_equipment(gateway: BaseDataGateway = Depends(get_data_gateway)):
    """List all equipment, newest first."""
    return list_records(gateway, EQUIPMENT)


@router.post("/", response_model=EquipmentResponse, status_code=status.HTTP_201_CREATED)
def create_equipment(
    equipment_data: EquipmentCreate,
    gateway: BaseDataGateway = Depends(get_data_gateway),
):
    """
    Create equipment.

    - **name**: Equipment name
    - **type**: Equipment type
    - **status**: available, booked, maintenance or retired (default: available)
    """
    return create_record(gateway, EQUIPMENT, equipment_data)
