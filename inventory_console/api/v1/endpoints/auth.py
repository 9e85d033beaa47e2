"""Sign-in endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from inventory_console.api.deps import get_auth_provider, get_current_session
from inventory_console.config import settings
from inventory_console.console import registry
from inventory_console.schemas.auth import AuthMessage, MagicLinkRequest, SessionResponse
from inventory_console.services.auth_service import (
    AuthProviderError,
    AuthSession,
    BaseAuthProvider,
    InvalidMagicLinkError,
)

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/login", response_model=AuthMessage)
def login_info():
    """Where signed-out visitors land."""
    return AuthMessage(message="POST your email to /auth/login to receive a sign-in link.")


@router.post("/login", response_model=AuthMessage)
def request_magic_link(
    request: MagicLinkRequest,
    provider: BaseAuthProvider = Depends(get_auth_provider),
):
    """
    Send a one-time sign-in link.

    - **email**: Address the link is sent to
    """
    try:
        provider.send_magic_link(request.email)
    except AuthProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error sending magic link: {e}",
        )
    return AuthMessage(message="Magic link sent! Check your email.")


@router.get("/callback")
def auth_callback(
    token_hash: str = Query(..., description="Token carried by the sign-in link"),
    provider: BaseAuthProvider = Depends(get_auth_provider),
):
    """Exchange a sign-in link for a session cookie and open the console."""
    try:
        session = provider.exchange(token_hash)
    except InvalidMagicLinkError as e:
        logger.error(f"Error exchanging session: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Sign-in link is invalid or expired",
        )
    except AuthProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        )

    logger.info(f"Signed in {session.email}")
    response = RedirectResponse(settings.post_login_redirect, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        settings.session_cookie_name,
        session.access_token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.environment == "production",
    )
    return response


@router.get("/session", response_model=SessionResponse)
def read_session(session: AuthSession = Depends(get_current_session)):
    """Who is signed in."""
    return SessionResponse(email=session.email, expires_at=session.expires_at)


@router.post("/logout", response_model=AuthMessage)
def logout(request: Request):
    """Drop the console state of the session and clear its cookie."""
    token = getattr(request.state, "access_token", None)
    if token:
        registry.discard(token)

    response = JSONResponse(AuthMessage(message="Signed out").model_dump())
    response.delete_cookie(settings.session_cookie_name)
    return response
