"""
Server-side session store: opaque token -> user id with a fixed lifetime.

The store is independent of the HTTP layer; endpoints only create, look up
and destroy sessions by token. Redis is the production backend; the memory
backend serves single-process development and tests (lost on restart).
"""

import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable

from todo_app.cache.redis_client import get_redis
from todo_app.config import get_settings
from todo_app.core.security import generate_session_token

logger = logging.getLogger(__name__)
settings = get_settings()

SESSION_KEY_PREFIX = "session:"


class SessionStore(ABC):
    """create / get / destroy by token. Lifetime is fixed at creation."""

    def __init__(self, ttl_seconds: int):
        self.ttl_seconds = ttl_seconds

    @abstractmethod
    async def create(self, user_id: int) -> str:
        """Start a session for user_id and return its token."""

    @abstractmethod
    async def get(self, token: str) -> int | None:
        """User id for a live session, None if unknown or expired."""

    @abstractmethod
    async def destroy(self, token: str) -> None:
        """End a session. Unknown tokens are ignored."""


class RedisSessionStore(SessionStore):
    """Sessions as Redis keys with TTL; expiry is handled by Redis itself."""

    def __init__(self, ttl_seconds: int, redis_factory=get_redis):
        super().__init__(ttl_seconds)
        self._redis_factory = redis_factory

    async def create(self, user_id: int) -> str:
        token = generate_session_token()
        client = await self._redis_factory()
        await client.setex(SESSION_KEY_PREFIX + token, self.ttl_seconds, str(user_id))
        return token

    async def get(self, token: str) -> int | None:
        client = await self._redis_factory()
        value = await client.get(SESSION_KEY_PREFIX + token)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            logger.warning("Discarding malformed session value for token prefix %s", token[:6])
            return None

    async def destroy(self, token: str) -> None:
        client = await self._redis_factory()
        await client.delete(SESSION_KEY_PREFIX + token)


class MemorySessionStore(SessionStore):
    """In-process dict of token -> (user_id, expires_at)."""

    def __init__(self, ttl_seconds: int, clock: Callable[[], float] = time.monotonic):
        super().__init__(ttl_seconds)
        self._clock = clock
        self._sessions: dict[str, tuple[int, float]] = {}

    async def create(self, user_id: int) -> str:
        self._purge_expired()
        token = generate_session_token()
        self._sessions[token] = (user_id, self._clock() + self.ttl_seconds)
        return token

    async def get(self, token: str) -> int | None:
        entry = self._sessions.get(token)
        if entry is None:
            return None
        user_id, expires_at = entry
        if self._clock() >= expires_at:
            del self._sessions[token]
            return None
        return user_id

    async def destroy(self, token: str) -> None:
        self._sessions.pop(token, None)

    def __len__(self) -> int:
        return len(self._sessions)

    def _purge_expired(self) -> None:
        now = self._clock()
        for token in [t for t, (_, exp) in self._sessions.items() if now >= exp]:
            del self._sessions[token]


_store: SessionStore | None = None


def build_session_store() -> SessionStore:
    if settings.session_backend == "memory":
        return MemorySessionStore(settings.session_ttl_seconds)
    return RedisSessionStore(settings.session_ttl_seconds)


def get_session_store() -> SessionStore:
    """FastAPI dependency: process-wide store selected by settings.session_backend."""
    global _store
    if _store is None:
        _store = build_session_store()
        logger.info("Using %s session store", type(_store).__name__)
    return _store
