"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import httpx

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from relay.state.settings import AppSettings
    from relay.handlers.sessions import SessionStore
    from relay.upstream.interfaces import UpstreamFactory
    from relay.session.session import AnswerSource


@dataclass(slots=True)
class RuntimeDeps:
    sessions: SessionStore
    stt_bridge: UpstreamFactory
    answer_generator: AnswerSource
    settings: AppSettings
    http_client: httpx.AsyncClient | None = None

    async def shutdown(self) -> None:
        try:
            await self.sessions.close_all()
        except Exception:
            logger.exception("session shutdown failed")
        if self.http_client is None:
            return
        try:
            await self.http_client.aclose()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
