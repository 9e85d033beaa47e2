"""Auth schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr


class MagicLinkRequest(BaseModel):
    """Email to send the sign-in link to."""

    email: EmailStr


class AuthMessage(BaseModel):
    """Outcome of an auth action."""

    message: str


class SessionResponse(BaseModel):
    """Current signed-in session."""

    email: str
    expires_at: Optional[datetime] = None
