"""Session registry with admission control."""

from __future__ import annotations

import asyncio
import logging
import contextlib

from relay.session import RelaySession

logger = logging.getLogger(__name__)


class SessionStore:
    def __init__(self, *, max_sessions: int) -> None:
        self._max = max(1, int(max_sessions))
        self._lock = asyncio.Lock()
        self._sessions: dict[str, RelaySession] = {}

    @property
    def max_sessions(self) -> int:
        return self._max

    async def register(self, session: RelaySession) -> bool:
        """Admit a session unless the store is at capacity."""
        async with self._lock:
            if len(self._sessions) >= self._max:
                return False
            self._sessions[session.id] = session
            return True

    async def discard(self, session: RelaySession) -> None:
        async with self._lock:
            self._sessions.pop(session.id, None)

    def count(self) -> int:
        return len(self._sessions)

    async def close_all(self) -> None:
        async with self._lock:
            sessions = list(self._sessions.values())
            self._sessions.clear()
        for session in sessions:
            with contextlib.suppress(Exception):
                await session.close()
        if sessions:
            logger.info("closed %d sessions on shutdown", len(sessions))


__all__ = ["SessionStore"]
