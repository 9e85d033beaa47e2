"""Data gateway factory."""

from typing import Optional

from sqlalchemy.orm import Session

from inventory_console.config import settings
from inventory_console.gateway.base import BaseDataGateway, GatewayError
from inventory_console.gateway.rest_gateway import RestDataGateway
from inventory_console.gateway.sql_gateway import SqlDataGateway


def get_gateway(db: Session, access_token: Optional[str] = None) -> BaseDataGateway:
    """Get data gateway for the configured provider.

    Args:
        db: Database session (used by the sql provider)
        access_token: Signed-in user's token (forwarded by the rest provider)

    Returns:
        Configured gateway instance

    Raises:
        GatewayError: If the provider is not supported

    Example:
        >>> gateway = get_gateway(db)
        >>> gateway.count("assets")
    """
    provider = settings.gateway_provider.lower()

    if provider == "sql":
        return SqlDataGateway(db)

    elif provider == "rest":
        if not settings.backend_anon_key:
            raise GatewayError("BACKEND_ANON_KEY is required for the rest gateway")
        return RestDataGateway(
            {
                "url": settings.backend_url,
                "api_key": settings.backend_anon_key,
                "access_token": access_token,
                "timeout": settings.backend_timeout_seconds,
            }
        )

    else:
        raise GatewayError(f"Unsupported gateway provider: {provider}")
