"""Summary endpoints."""

from fastapi import APIRouter, Depends

from inventory_console.api.deps import get_data_gateway
from inventory_console.gateway import BaseDataGateway
from inventory_console.schemas.summary import SummaryResponse
from inventory_console.services.summary_service import get_summary

router = APIRouter()


@router.get("/", response_model=SummaryResponse)
def read_summary(gateway: BaseDataGateway = Depends(get_data_gateway)):
    """Row count per table, fetched fresh on every call."""
    return get_summary(gateway)
