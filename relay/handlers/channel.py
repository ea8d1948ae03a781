"""Ordered, best-effort outbound delivery for one WebSocket."""

from __future__ import annotations

import asyncio
import logging
import contextlib

from fastapi import WebSocket

from relay.config.websocket import WS_OUTBOUND_QUEUE_MAX_MESSAGES
from relay.messages.server import ServerMessage, encode_server_message

from .websocket.errors import safe_send_text

logger = logging.getLogger(__name__)

_CLOSE = object()


class OutboundChannel:
    """Queue-backed sender with a single writer task.

    The read loop, the upstream pump and generation tasks all enqueue through
    `send`, so messages leave in the order they were produced. Once a write
    fails the channel is considered closed and later messages are dropped.
    A client that stops reading fills the queue; messages past
    `max_queued_messages` are dropped.
    """

    def __init__(
        self,
        ws: WebSocket,
        *,
        drain_timeout_s: float = 1.0,
        max_queued_messages: int = WS_OUTBOUND_QUEUE_MAX_MESSAGES,
    ) -> None:
        self._ws = ws
        self._drain_timeout_s = drain_timeout_s
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=max(1, int(max_queued_messages)))
        self._writer: asyncio.Task | None = None
        self._closed = False
        self._sent = 0
        self._dropped = 0

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def sent_count(self) -> int:
        return self._sent

    @property
    def dropped_count(self) -> int:
        return self._dropped

    def start(self) -> None:
        if self._writer is None:
            self._writer = asyncio.create_task(self._run(), name="ws-writer")

    def send(self, message: ServerMessage) -> None:
        if self._closed:
            self._dropped += 1
            logger.debug("outbound channel closed; dropping %s", type(message).__name__)
            return
        try:
            self._queue.put_nowait(message)
        except asyncio.QueueFull:
            self._dropped += 1
            logger.warning("outbound queue full (%d); dropping %s", self._queue.maxsize, type(message).__name__)

    async def _run(self) -> None:
        while True:
            item = await self._queue.get()
            if item is _CLOSE:
                return
            if not await safe_send_text(self._ws, encode_server_message(item)):
                self._closed = True
                self._dropped += 1 + self._queue.qsize()
                logger.debug("client went away; outbound channel closed")
                return
            self._sent += 1

    async def aclose(self) -> None:
        """Flush what is queued (bounded by the drain timeout) and stop the writer."""
        self._closed = True
        writer = self._writer
        if writer is None or writer.done():
            return
        try:
            self._queue.put_nowait(_CLOSE)
            await asyncio.wait_for(asyncio.shield(writer), timeout=self._drain_timeout_s)
        except (asyncio.QueueFull, TimeoutError):
            writer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await writer


__all__ = ["OutboundChannel"]
