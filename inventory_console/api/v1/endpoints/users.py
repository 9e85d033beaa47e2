"""User endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status

from inventory_console.api.deps import get_data_gateway
from inventory_console.gateway import BaseDataGateway
from inventory_console.schemas.user import UserCreate, UserResponse
from inventory_console.services.record_service import create_record, list_records
from inventory_console.services.tables import USERS

router = APIRouter()


@router.get("/", response_model=List[UserResponse])
def list_users(gateway: BaseDataGateway = Depends(get_data_gateway)):
    """List all users, newest first."""
    return list_records(gateway, USERS)


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    gateway: BaseDataGateway = Depends(get_data_gateway),
):
    """
    Create a user.

    - **name**: Full name
    - **email**: Email address
    - **role**: admin or staff (default: staff)
    """
    return create_record(gateway, USERS, user_data)
