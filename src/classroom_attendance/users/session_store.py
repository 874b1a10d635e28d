from __future__ import annotations

import logging
import secrets
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional, Protocol

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_SESSION_TTL_HOURS
from .model import Principal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IssuedToken:
    token: str
    principal: Principal
    expires_at: datetime


class SessionStore(Protocol):
    """Auth token storage: opaque token -> principal, with expiry."""

    def create(self, principal: Principal) -> IssuedToken:
        raise NotImplementedError

    def resolve(self, token: str) -> Optional[Principal]:
        raise NotImplementedError

    def revoke(self, token: str) -> None:
        raise NotImplementedError

    def sweep_expired(self) -> int:
        raise NotImplementedError


class InMemorySessionStore(SessionStore):
    """Process-local token store.

    Expired tokens resolve to None even before the periodic sweep removes them.
    """

    def __init__(
        self,
        *,
        ttl: timedelta = timedelta(hours=DEFAULT_SESSION_TTL_HOURS),
        clock: Callable[[], datetime] = now_local,
    ):
        self._ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._tokens: dict[str, IssuedToken] = {}

    def create(self, principal: Principal) -> IssuedToken:
        issued = IssuedToken(
            token=secrets.token_hex(32),
            principal=principal,
            expires_at=self._clock() + self._ttl,
        )
        with self._lock:
            self._tokens[issued.token] = issued
        return issued

    def resolve(self, token: str) -> Optional[Principal]:
        if not token:
            return None
        with self._lock:
            issued = self._tokens.get(token)
            if issued is None:
                return None
            if issued.expires_at <= self._clock():
                del self._tokens[token]
                return None
            return issued.principal

    def revoke(self, token: str) -> None:
        with self._lock:
            self._tokens.pop(token, None)

    def sweep_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [t for t, issued in self._tokens.items() if issued.expires_at <= now]
            for t in expired:
                del self._tokens[t]
        if expired:
            logger.info("Cleaned up %d expired auth token(s)", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)
