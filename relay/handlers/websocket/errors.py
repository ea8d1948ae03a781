"""Send helpers and connection rejection for the relay WebSocket."""

from __future__ import annotations

import logging

from fastapi import WebSocket, WebSocketDisconnect

from relay.messages.server import Error, encode_server_message

logger = logging.getLogger(__name__)


async def safe_send_text(ws: WebSocket, text: str) -> bool:
    try:
        await ws.send_text(text)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def send_error(ws: WebSocket, message: str) -> bool:
    return await safe_send_text(ws, encode_server_message(Error(message=message)))


async def reject_connection(ws: WebSocket, *, message: str, close_code: int) -> None:
    # Accept so the client gets a structured error before the close frame.
    try:
        await ws.accept()
    except Exception:
        return
    await send_error(ws, message)
    try:
        await ws.close(code=close_code, reason=message)
    except Exception:
        return


__all__ = ["reject_connection", "safe_send_text", "send_error"]
