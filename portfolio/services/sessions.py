"""
Server-side login sessions.

Sessions live in process memory: a restart logs everyone out, and a second
worker process will not see sessions created by the first. Each session has a
fixed lifetime counted from login; activity does not extend it.
"""
from __future__ import annotations

import logging
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from portfolio.utils.config import DEFAULT_SESSION_TTL_SECONDS

logger = logging.getLogger(__name__)

TOKEN_BYTES = 32
SWEEP_INTERVAL_SECONDS = 60.0


@dataclass(frozen=True)
class Session:
    token: str
    user_id: int
    expires_at: float


class SessionStore:
    """Thread-safe map of session token to user id with expiry."""

    def __init__(
        self,
        ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
        *,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock or time.monotonic
        self._lock = threading.Lock()
        self._sessions: Dict[str, Session] = {}
        self._last_sweep = self._clock()

    def create(self, user_id: int) -> Session:
        now = self._clock()
        session = Session(token=secrets.token_urlsafe(TOKEN_BYTES), user_id=user_id, expires_at=now + self.ttl_seconds)
        with self._lock:
            self._sweep_locked(now)
            self._sessions[session.token] = session
        return session

    def get(self, token: Optional[str]) -> Optional[Session]:
        """Return the live session for ``token``; expired ones are dropped."""
        if not token:
            return None
        now = self._clock()
        with self._lock:
            session = self._sessions.get(token)
            if session is None:
                return None
            if session.expires_at <= now:
                del self._sessions[token]
                return None
            return session

    def user_id_for(self, token: Optional[str]) -> Optional[int]:
        session = self.get(token)
        return session.user_id if session is not None else None

    def destroy(self, token: Optional[str]) -> bool:
        if not token:
            return False
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _sweep_locked(self, now: float) -> None:
        if now - self._last_sweep < SWEEP_INTERVAL_SECONDS:
            return
        expired = [token for token, session in self._sessions.items() if session.expires_at <= now]
        for token in expired:
            del self._sessions[token]
        self._last_sweep = now
        if expired:
            logger.debug("session_sweep: removed=%d", len(expired))
