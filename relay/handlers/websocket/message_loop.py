"""Receive loop for one relay WebSocket connection."""

from __future__ import annotations

import logging

from fastapi import WebSocket, WebSocketDisconnect

from relay.session import RelaySession
from relay.errors import MalformedMessageError

from .parser import parse_client_message
from .dispatch import dispatch_message

logger = logging.getLogger(__name__)

_WS_DISCONNECT = "websocket.disconnect"


async def _recv_text(ws: WebSocket, session: RelaySession) -> tuple[str | None, bool]:
    """Return (text, should_exit). Binary frames yield (None, False)."""
    frame = await ws.receive()
    if frame.get("type") == _WS_DISCONNECT:
        return None, True
    text = frame.get("text")
    if text is None:
        logger.warning("session %s: dropping binary frame (%d bytes)", session.id, len(frame.get("bytes") or b""))
        return None, False
    return text, False


async def run_message_loop(ws: WebSocket, session: RelaySession) -> None:
    try:
        while True:
            raw, should_exit = await _recv_text(ws, session)
            if should_exit:
                return
            if raw is None:
                continue

            try:
                message = parse_client_message(raw)
            except MalformedMessageError as exc:
                logger.warning("session %s: dropping malformed message: %s", session.id, exc)
                continue

            await dispatch_message(session, message)
    except WebSocketDisconnect:
        return


__all__ = ["run_message_loop"]
