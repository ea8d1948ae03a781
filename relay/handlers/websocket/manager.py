"""Primary WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket

from relay.state import RuntimeDeps
from relay.session import RelaySession
from relay.handlers.channel import OutboundChannel
from relay.config.websocket import WS_CLOSE_BUSY_CODE, WS_ERROR_SERVER_AT_CAPACITY

from .errors import reject_connection
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


def _create_session(channel: OutboundChannel, runtime_deps: RuntimeDeps) -> RelaySession:
    stt = runtime_deps.settings.stt
    return RelaySession(
        send=channel.send,
        upstreams=runtime_deps.stt_bridge,
        answers=runtime_deps.answer_generator,
        stop_grace_s=stt.stop_grace_s,
        buffer_window_s=stt.transcript_buffer_seconds,
    )


async def _prepare_connection(ws: WebSocket, session: RelaySession, runtime_deps: RuntimeDeps) -> bool:
    if not await runtime_deps.sessions.register(session):
        logger.warning("rejecting connection: %d sessions active", runtime_deps.sessions.count())
        await reject_connection(ws, message=WS_ERROR_SERVER_AT_CAPACITY, close_code=WS_CLOSE_BUSY_CODE)
        return False

    try:
        await ws.accept()
    except Exception:
        with contextlib.suppress(Exception):
            await runtime_deps.sessions.discard(session)
        raise
    return True


async def handle_websocket_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    channel = OutboundChannel(ws)
    session = _create_session(channel, runtime_deps)
    admitted = False
    try:
        if not await _prepare_connection(ws, session, runtime_deps):
            return
        admitted = True
        channel.start()

        logger.info(
            "WebSocket connection accepted session_id=%s. Active: %s",
            session.id,
            runtime_deps.sessions.count(),
        )
        await run_message_loop(ws, session)
    finally:
        if admitted:
            with contextlib.suppress(Exception):
                await session.close()
            with contextlib.suppress(Exception):
                await channel.aclose()
            with contextlib.suppress(Exception):
                await runtime_deps.sessions.discard(session)
            logger.info(
                "WebSocket connection closed session_id=%s sent=%d dropped=%d. Active: %s",
                session.id,
                channel.sent_count,
                channel.dropped_count,
                runtime_deps.sessions.count(),
            )


__all__ = ["handle_websocket_connection"]
