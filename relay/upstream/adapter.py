"""Streaming connection to the speech-to-text provider."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

import orjson
from websockets.protocol import State
from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import (
    InvalidURI,
    InvalidStatus,
    InvalidHandshake,
    ConnectionClosed,
    ConnectionClosedError,
)

from relay.errors import UpstreamError
from relay.config.stt import STT_MSG_TERMINATE

from .events import SttEvent, translate_provider_message

logger = logging.getLogger(__name__)


class SttUpstream:
    """One provider WebSocket, owned by exactly one relay session.

    Audio is forwarded as binary frames only while the socket is open; frames
    arriving earlier are dropped rather than queued, since stale audio is worse
    than missing audio for a live transcript.
    """

    def __init__(
        self,
        *,
        url: str,
        api_key: str,
        format_turns: bool,
        connect_timeout_s: float,
    ) -> None:
        self._url = url
        self._api_key = api_key
        self._format_turns = format_turns
        self._connect_timeout_s = float(connect_timeout_s)
        self._ws: ClientConnection | None = None

    @property
    def is_open(self) -> bool:
        return self._ws is not None and self._ws.state is State.OPEN

    async def open(self) -> None:
        if self._ws is not None:
            raise RuntimeError("stt connection already opened")
        try:
            self._ws = await connect(
                self._url,
                additional_headers={"Authorization": self._api_key},
                open_timeout=self._connect_timeout_s,
                max_size=None,
            )
        except InvalidStatus as exc:
            reason = exc.response.reason_phrase or "handshake rejected"
            raise UpstreamError(f"STT provider rejected the connection: {reason}", status=exc.response.status_code) from exc
        except (InvalidURI, InvalidHandshake) as exc:
            raise UpstreamError(f"STT handshake failed: {exc}") from exc
        except TimeoutError as exc:
            raise UpstreamError("STT connection timed out") from exc
        except OSError as exc:
            raise UpstreamError(f"STT provider unreachable: {exc}") from exc
        logger.info("stt connection opened")

    async def send_audio(self, pcm: bytes) -> bool:
        if not pcm or not self.is_open or self._ws is None:
            return False
        try:
            await self._ws.send(pcm)
        except ConnectionClosed:
            return False
        return True

    async def terminate(self) -> None:
        if not self.is_open or self._ws is None:
            return
        try:
            await self._ws.send(orjson.dumps({"type": STT_MSG_TERMINATE}).decode("utf-8"))
        except ConnectionClosed:
            logger.debug("stt connection closed before terminate was sent")

    async def close(self) -> None:
        if self._ws is None:
            return
        await self._ws.close()
        logger.info("stt connection closed")

    async def events(self) -> AsyncIterator[SttEvent]:
        ws = self._ws
        if ws is None:
            raise RuntimeError("stt connection is not open")
        try:
            async for raw in ws:
                try:
                    event = translate_provider_message(raw, format_turns=self._format_turns)
                except ValueError:
                    logger.warning("dropping unparseable stt frame", exc_info=True)
                    continue
                if event is not None:
                    yield event
        except ConnectionClosedError as exc:
            code = exc.rcvd.code if exc.rcvd is not None else None
            reason = exc.rcvd.reason if exc.rcvd is not None else ""
            raise UpstreamError(f"STT connection lost: {reason or 'no reason given'}", status=code) from exc


__all__ = ["SttUpstream"]
