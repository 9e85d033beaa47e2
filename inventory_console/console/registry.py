"""In-process store of console shells, one per session."""

import hashlib
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from inventory_console.config import settings
from inventory_console.console.shell import Shell

logger = logging.getLogger(__name__)


@dataclass
class _Entry:
    shell: Shell
    expires_at: datetime


class ConsoleRegistry:
    """Maps session tokens to their shell.

    Each shell lives until its session expires. Sessions without a known
    expiry are kept for ``idle_seconds`` after their last use. Expired shells
    are dropped on the next ``get``.
    """

    def __init__(self, idle_seconds: Optional[int] = None):
        self._lock = threading.Lock()
        self._shells: Dict[str, _Entry] = {}
        self.idle_seconds = settings.session_ttl_seconds if idle_seconds is None else idle_seconds

    @staticmethod
    def _key(access_token: str) -> str:
        return hashlib.sha256(access_token.encode()).hexdigest()

    def _evict_expired(self, now: datetime) -> None:
        expired = [key for key, entry in self._shells.items() if entry.expires_at <= now]
        for key in expired:
            del self._shells[key]
        if expired:
            logger.debug(f"Dropped {len(expired)} expired console shell(s)")

    def get(self, access_token: str, expires_at: Optional[datetime] = None) -> Shell:
        """Shell for the session, created on first use.

        Args:
            access_token: Session token
            expires_at: When the session ends (aware datetime); unknown when None
        """
        now = datetime.now(timezone.utc)
        if expires_at is None:
            expires_at = now + timedelta(seconds=self.idle_seconds)

        key = self._key(access_token)
        with self._lock:
            self._evict_expired(now)
            entry = self._shells.get(key)
            if entry is None:
                entry = self._shells[key] = _Entry(shell=Shell(), expires_at=expires_at)
            else:
                entry.expires_at = expires_at
            return entry.shell

    def discard(self, access_token: str) -> None:
        with self._lock:
            self._shells.pop(self._key(access_token), None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._shells)


registry = ConsoleRegistry()
