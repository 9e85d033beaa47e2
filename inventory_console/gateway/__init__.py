"""Data gateways for the console's relational store."""

from inventory_console.gateway.base import (
    BaseDataGateway,
    Filter,
    GatewayConnectionError,
    GatewayError,
    GatewayRequestError,
    Order,
    SoftDeleteError,
)
from inventory_console.gateway.factory import get_gateway

__all__ = [
    "BaseDataGateway",
    "Filter",
    "GatewayConnectionError",
    "GatewayError",
    "GatewayRequestError",
    "Order",
    "SoftDeleteError",
    "get_gateway",
]
