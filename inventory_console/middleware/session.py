"""Session middleware for the signed-in console."""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from inventory_console.config import settings


class SessionMiddleware(BaseHTTPMiddleware):
    """Middleware to pick up the session token."""

    async def dispatch(self, request: Request, call_next):
        """Store the session token (cookie or Bearer header) in request state."""
        token = request.cookies.get(settings.session_cookie_name)

        authorization = request.headers.get("Authorization", "")
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            token = credentials.strip()

        request.state.access_token = token

        response: Response = await call_next(request)
        return response
