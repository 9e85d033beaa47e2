"""API dependencies."""

import logging
from typing import Generator, NoReturn

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from inventory_console.config import settings
from inventory_console.console import Shell, registry
from inventory_console.database import get_db
from inventory_console.gateway import BaseDataGateway, GatewayError, get_gateway
from inventory_console.services import auth_service
from inventory_console.services.auth_service import (
    AuthError,
    AuthProviderError,
    AuthSession,
    BaseAuthProvider,
    SessionExpiredError,
)

logger = logging.getLogger(__name__)

LOGIN_PATH = "/auth/login"

__all__ = [
    "get_auth_provider",
    "get_console",
    "get_current_session",
    "get_data_gateway",
    "get_db",
]


def get_auth_provider() -> Generator[BaseAuthProvider, None, None]:
    """Get the configured auth provider."""
    try:
        provider = auth_service.get_auth_provider()
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )

    try:
        yield provider
    finally:
        provider.close()


def _reject(request: Request, detail: str) -> NoReturn:
    """Send browsers to the sign-in page and everyone else a 401."""
    if "text/html" in request.headers.get("accept", ""):
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            detail=detail,
            headers={"Location": LOGIN_PATH},
        )
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_session(
    request: Request,
    provider: BaseAuthProvider = Depends(get_auth_provider),
) -> AuthSession:
    """Resolve the session carried by the request."""
    token = getattr(request.state, "access_token", None)
    if not token:
        _reject(request, "Not signed in")

    try:
        return provider.get_session(token)
    except SessionExpiredError as e:
        logger.info(f"Rejected session: {e}")
        _reject(request, "Session expired or invalid")
    except AuthProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        )


def get_data_gateway(
    db: Session = Depends(get_db),
    session: AuthSession = Depends(get_current_session),
) -> Generator[BaseDataGateway, None, None]:
    """Get a data gateway acting for the signed-in user."""
    # Only backend-issued tokens are meaningful to the data API
    access_token = session.access_token if settings.auth_provider.lower() == "rest" else None
    try:
        gateway = get_gateway(db, access_token=access_token)
    except GatewayError as e:
        logger.error(f"Failed to create data gateway: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )

    try:
        yield gateway
    finally:
        gateway.close()


def get_console(session: AuthSession = Depends(get_current_session)) -> Shell:
    """Get the console shell of the signed-in session."""
    return registry.get(session.access_token, expires_at=session.expires_at)
