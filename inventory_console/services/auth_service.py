"""Passwordless email-link authentication."""

import base64
import json
import logging
import smtplib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from email.message import EmailMessage
from typing import Any, Dict, Optional

import httpx
from cryptography.fernet import Fernet, InvalidToken

from inventory_console.config import settings

logger = logging.getLogger(__name__)

MAGIC_LINK_PURPOSE = "magic_link"
SESSION_PURPOSE = "session"


class AuthError(Exception):
    """Base exception for authentication errors."""
    pass


class InvalidMagicLinkError(AuthError):
    """Sign-in link is malformed, tampered with or expired."""
    pass


class SessionExpiredError(AuthError):
    """Session token is missing, invalid or expired."""
    pass


class AuthProviderError(AuthError):
    """Auth backend could not be reached or refused the request."""
    pass


@dataclass
class AuthSession:
    """Signed-in session."""

    access_token: str
    email: str
    expires_at: Optional[datetime] = None


def callback_url() -> str:
    """Where sign-in links send the browser back to."""
    return f"{settings.public_base_url.rstrip('/')}/auth/callback"


class BaseAuthProvider(ABC):
    """Base class for auth providers."""

    @abstractmethod
    def send_magic_link(self, email: str) -> None:
        """Send a sign-in link to ``email``.

        Raises:
            AuthProviderError: If the link could not be sent
        """
        pass

    @abstractmethod
    def exchange(self, token_hash: str) -> AuthSession:
        """Exchange the token carried by a sign-in link for a session.

        Raises:
            InvalidMagicLinkError: If the token is not valid
        """
        pass

    @abstractmethod
    def get_session(self, access_token: str) -> AuthSession:
        """Resolve a session token.

        Raises:
            SessionExpiredError: If the token is not a live session
        """
        pass

    def close(self) -> None:
        """Release network resources held by the provider."""
        pass


def _get_fernet() -> Fernet:
    """Get Fernet instance keyed from the application secret."""
    key = settings.secret_key.encode()
    if len(key) < 32:
        key = key.ljust(32, b"=")
    key = base64.urlsafe_b64encode(key[:32])
    return Fernet(key)


class LocalAuthProvider(BaseAuthProvider):
    """Issues signed links and sessions itself.

    Links are mailed over SMTP when ``smtp_host`` is configured and logged
    otherwise.
    """

    def __init__(self):
        self.fernet = _get_fernet()

    def _issue(self, payload: Dict[str, Any]) -> str:
        return self.fernet.encrypt(json.dumps(payload).encode()).decode()

    def _read(self, token: str, ttl: int) -> Dict[str, Any]:
        try:
            return json.loads(self.fernet.decrypt(token.encode(), ttl=ttl).decode())
        except (InvalidToken, ValueError) as e:
            raise AuthError(f"Invalid token: {e}") from e

    def issue_magic_link_token(self, email: str) -> str:
        """Token embedded in the sign-in link for ``email``."""
        return self._issue({"email": email, "purpose": MAGIC_LINK_PURPOSE})

    def send_magic_link(self, email: str) -> None:
        token = self.issue_magic_link_token(email)
        link = str(httpx.URL(callback_url(), params={"token_hash": token}))

        if not settings.smtp_host:
            logger.info(f"Sign-in link for {email}: {link}")
            return

        message = EmailMessage()
        message["Subject"] = "Your sign-in link"
        message["From"] = settings.smtp_from_email
        message["To"] = email
        message.set_content(f"Follow this link to sign in to the inventory console:\n\n{link}\n")

        try:
            with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=30) as smtp:
                smtp.starttls()
                if settings.smtp_user:
                    smtp.login(settings.smtp_user, settings.smtp_password)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to mail sign-in link to {email}: {e}", exc_info=True)
            raise AuthProviderError(f"Failed to send sign-in link: {e}") from e

        logger.info(f"Mailed sign-in link to {email}")

    def exchange(self, token_hash: str) -> AuthSession:
        try:
            payload = self._read(token_hash, ttl=settings.magic_link_ttl_seconds)
        except AuthError as e:
            raise InvalidMagicLinkError(str(e)) from e
        if payload.get("purpose") != MAGIC_LINK_PURPOSE or not payload.get("email"):
            raise InvalidMagicLinkError("Token is not a sign-in link")

        access_token = self._issue({"email": payload["email"], "purpose": SESSION_PURPOSE})
        return AuthSession(
            access_token=access_token,
            email=payload["email"],
            expires_at=datetime.now(timezone.utc) + timedelta(seconds=settings.session_ttl_seconds),
        )

    def get_session(self, access_token: str) -> AuthSession:
        try:
            payload = self._read(access_token, ttl=settings.session_ttl_seconds)
        except AuthError as e:
            raise SessionExpiredError(str(e)) from e
        if payload.get("purpose") != SESSION_PURPOSE or not payload.get("email"):
            raise SessionExpiredError("Token is not a session")

        issued = self.fernet.extract_timestamp(access_token.encode())
        return AuthSession(
            access_token=access_token,
            email=payload["email"],
            expires_at=datetime.fromtimestamp(issued, timezone.utc)
            + timedelta(seconds=settings.session_ttl_seconds),
        )


class RestAuthProvider(BaseAuthProvider):
    """Delegates sign-in to the hosted backend's auth API.

    Configuration:
        url: Backend base URL (the API lives under ``/auth/v1``)
        api_key: Public API key
        timeout: Request timeout in seconds
    """

    def __init__(self, config: Dict[str, Any], client: Optional[httpx.Client] = None):
        self.base_url = config["url"].rstrip("/") + "/auth/v1"
        self.client = client or httpx.Client(timeout=config.get("timeout", 30.0))
        self.client.headers.update({"apikey": config.get("api_key", "")})

    def close(self) -> None:
        self.client.close()

    def _post(self, path: str, **kwargs) -> httpx.Response:
        try:
            return self.client.post(f"{self.base_url}{path}", **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Auth request {path} failed: {e}", exc_info=True)
            raise AuthProviderError(f"Auth backend unreachable: {e}") from e

    def send_magic_link(self, email: str) -> None:
        response = self._post(
            "/otp",
            params={"redirect_to": callback_url()},
            json={"email": email, "create_user": True},
        )
        if response.status_code >= 400:
            logger.error(f"Sending sign-in link to {email} rejected: {response.text}")
            raise AuthProviderError(f"Error sending magic link ({response.status_code})")
        logger.info(f"Requested sign-in link for {email}")

    def exchange(self, token_hash: str) -> AuthSession:
        response = self._post("/verify", json={"type": "magiclink", "token_hash": token_hash})
        if response.status_code >= 400:
            logger.error(f"Error exchanging session: {response.text}")
            raise InvalidMagicLinkError(f"Sign-in link rejected ({response.status_code})")

        data = response.json()
        expires_in = data.get("expires_in")
        return AuthSession(
            access_token=data["access_token"],
            email=(data.get("user") or {}).get("email", ""),
            expires_at=datetime.now(timezone.utc) + timedelta(seconds=expires_in)
            if expires_in
            else None,
        )

    def get_session(self, access_token: str) -> AuthSession:
        try:
            response = self.client.get(
                f"{self.base_url}/user",
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.HTTPError as e:
            logger.error(f"Session check failed: {e}", exc_info=True)
            raise AuthProviderError(f"Auth backend unreachable: {e}") from e

        if response.status_code in (401, 403):
            raise SessionExpiredError("Session is not valid")
        if response.status_code >= 400:
            raise AuthProviderError(f"Session check rejected ({response.status_code})")

        return AuthSession(access_token=access_token, email=response.json().get("email", ""))


def get_auth_provider() -> BaseAuthProvider:
    """Get the configured auth provider.

    Raises:
        AuthError: If the provider is not supported
    """
    provider = settings.auth_provider.lower()

    if provider == "local":
        return LocalAuthProvider()

    elif provider == "rest":
        return RestAuthProvider(
            {
                "url": settings.backend_url,
                "api_key": settings.backend_anon_key,
                "timeout": settings.backend_timeout_seconds,
            }
        )

    else:
        raise AuthError(f"Unsupported auth provider: {provider}")
