"""WebSocket client that streams microphone audio to the relay."""

from __future__ import annotations

import sys
import asyncio
import logging
import threading
import contextlib
from typing import Any
from collections.abc import AsyncIterator

import orjson
import numpy as np
from websockets.asyncio.client import ClientConnection, connect

from relay.audio import AudioFrameProducer
from relay.config.websocket import (
    WS_KEY_TYPE,
    WS_KEY_AUDIO,
    WS_TYPE_STOP,
    WS_TYPE_AUDIO,
    WS_TYPE_START,
    WS_TYPE_GENERATE,
    WS_KEY_TRANSCRIPT,
)

from .view import TranscriptView

logger = logging.getLogger(__name__)


def build_ws_url(server: str, path: str = "/ws", *, secure: bool = False) -> str:
    if server.startswith(("ws://", "wss://")):
        return server
    scheme = "wss" if secure else "ws"
    return f"{scheme}://{server.rstrip('/')}/{path.lstrip('/')}"


def encode_client_message(msg_type: str, **fields: Any) -> str:
    return orjson.dumps({WS_KEY_TYPE: msg_type, **fields}).decode("utf-8")


def _start_stdin_reader(loop: asyncio.AbstractEventLoop, lines: asyncio.Queue[str]) -> None:
    # Daemon thread: a blocking readline must not hold up interpreter exit.
    def _read() -> None:
        for line in sys.stdin:
            loop.call_soon_threadsafe(lines.put_nowait, line)

    threading.Thread(target=_read, name="stdin-reader", daemon=True).start()


class RelayClient:
    """Send `start`, stream audio frames, send `generate` per Enter, `stop` on exit."""

    def __init__(self, url: str, *, view: TranscriptView | None = None) -> None:
        self.url = url
        self.view = view or TranscriptView()
        self.frames_sent = 0

    async def _send_audio(self, ws: ClientConnection, blocks: AsyncIterator[np.ndarray], input_rate: int) -> None:
        producer = AudioFrameProducer(input_rate=input_rate)
        async for block in blocks:
            for pcm in producer.push(block):
                await ws.send(encode_client_message(WS_TYPE_AUDIO, **{WS_KEY_AUDIO: producer.to_base64(pcm)}))
                self.frames_sent += 1

    async def _receive(self, ws: ClientConnection) -> None:
        async for raw in ws:
            try:
                message = orjson.loads(raw)
            except orjson.JSONDecodeError:
                logger.warning("dropping non-JSON server frame")
                continue
            if isinstance(message, dict):
                self.view.handle(message)

    async def _generate_on_enter(self, ws: ClientConnection) -> None:
        lines: asyncio.Queue[str] = asyncio.Queue()
        _start_stdin_reader(asyncio.get_running_loop(), lines)
        while True:
            await lines.get()
            text = self.view.promote_pending()
            await ws.send(encode_client_message(WS_TYPE_GENERATE, **{WS_KEY_TRANSCRIPT: text}))

    async def run(self, blocks: AsyncIterator[np.ndarray], *, input_rate: int) -> None:
        async with connect(self.url, max_size=None) as ws:
            await ws.send(encode_client_message(WS_TYPE_START))
            tasks = [
                asyncio.create_task(self._send_audio(ws, blocks, input_rate)),
                asyncio.create_task(self._receive(ws)),
                asyncio.create_task(self._generate_on_enter(ws)),
            ]
            try:
                await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
            finally:
                for task in tasks:
                    task.cancel()
                self.view.promote_pending()
                with contextlib.suppress(Exception):
                    await ws.send(encode_client_message(WS_TYPE_STOP))
                await asyncio.gather(*tasks, return_exceptions=True)
                await self.view.aclose()
                logger.info("relay client finished (frames_sent=%d)", self.frames_sent)


__all__ = ["RelayClient", "build_ws_url", "encode_client_message"]
