"""Per-connection relay session: upstream lifecycle, transcript state and answers."""

from __future__ import annotations

import uuid
import asyncio
import logging
from typing import Protocol
from collections.abc import Callable

from relay.errors import UpstreamError
from relay.upstream.events import SttEvent, ProviderError, TranscriptEvent
from relay.transcript import FinalSegmentBuffer, TranscriptReconciler
from relay.upstream.interfaces import UpstreamFactory, UpstreamConnection
from relay.config.generation import NO_TRANSCRIPT_NOTICE, FAILURE_ERROR_MESSAGE
from relay.config.stt import DEFAULT_STT_STOP_GRACE_S, DEFAULT_TRANSCRIPT_BUFFER_SECONDS
from relay.messages.server import Error, Answer, Started, Stopped, Transcript, ServerMessage
from relay.config.websocket import WS_ERROR_START_FAILED, WS_ERROR_TRANSCRIPTION, WS_ERROR_ALREADY_STARTED

from .phase import AUDIO_PHASES, SessionPhase

logger = logging.getLogger(__name__)

SendFn = Callable[[ServerMessage], None]


class AnswerSource(Protocol):
    async def generate(self, transcript: str) -> Answer | Error: ...


class RelaySession:
    """State for one client connection.

    All mutation happens on the event loop between awaits. Only the current
    upstream drives phase changes; a stopped upstream keeps delivering events
    until its grace period ends, then it is closed.
    """

    def __init__(
        self,
        *,
        send: SendFn,
        upstreams: UpstreamFactory,
        answers: AnswerSource,
        stop_grace_s: float = DEFAULT_STT_STOP_GRACE_S,
        buffer_window_s: float = DEFAULT_TRANSCRIPT_BUFFER_SECONDS,
        session_id: str | None = None,
        now_fn: Callable[[], float] | None = None,
    ) -> None:
        self.id = session_id or uuid.uuid4().hex
        self._send = send
        self._upstreams = upstreams
        self._answers = answers
        self._stop_grace_s = max(0.0, float(stop_grace_s))

        self.transcript = TranscriptReconciler()
        self.final_segments = FinalSegmentBuffer(window_seconds=buffer_window_s, now_fn=now_fn)

        self._phase = SessionPhase.IDLE
        self._upstream: UpstreamConnection | None = None
        self._draining: set[UpstreamConnection] = set()
        self._tasks: set[asyncio.Task] = set()
        self._dropped_audio_frames = 0
        self._closed = False

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def upstream(self) -> UpstreamConnection | None:
        return self._upstream

    @property
    def dropped_audio_frames(self) -> int:
        return self._dropped_audio_frames

    @property
    def closed(self) -> bool:
        return self._closed

    def _spawn(self, coro, *, name: str) -> asyncio.Task:
        task = asyncio.create_task(coro, name=f"{name}:{self.id}")
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _detach(self) -> None:
        self._upstream = None
        self._phase = SessionPhase.IDLE

    # ---- client operations ----

    async def start(self) -> None:
        if self._closed:
            return
        if self._upstream is not None:
            self._send(Error(message=WS_ERROR_ALREADY_STARTED))
            return
        upstream = self._upstreams.new_connection()
        self._upstream = upstream
        self._phase = SessionPhase.CONNECTING
        logger.info("session %s: connecting to stt provider", self.id)
        self._spawn(self._pump(upstream), name="stt-pump")

    async def audio(self, pcm: bytes) -> None:
        upstream = self._upstream
        if self._phase not in AUDIO_PHASES or upstream is None or not upstream.is_open:
            self._dropped_audio_frames += 1
            return
        if not await upstream.send_audio(pcm):
            self._dropped_audio_frames += 1

    async def stop(self) -> None:
        upstream = self._upstream
        if upstream is None or self._closed:
            self._send(Stopped())
            return
        self._phase = SessionPhase.STOPPING
        self._draining.add(upstream)
        try:
            await upstream.terminate()
        except UpstreamError as exc:
            logger.warning("session %s: terminate failed: %s", self.id, exc)
        if self._closed:
            return
        if self._upstream is upstream:
            self._detach()
        self._spawn(self._close_after_grace(upstream), name="stt-grace")
        logger.info("session %s: stopped", self.id)
        self._send(Stopped())

    async def generate(self, transcript: str = "", *, is_selection: bool = False) -> None:
        text = self.resolve_generation_text(transcript, is_selection=is_selection)
        if not text:
            self._send(Answer(text=NO_TRANSCRIPT_NOTICE))
            return
        self._spawn(self._run_generation(text), name="generate")

    def resolve_generation_text(self, transcript: str = "", *, is_selection: bool = False) -> str:
        """First non-empty of: message text, stable transcript, buffered finals, trimmed.

        A whitespace-only message still wins over the session transcript and
        resolves to "".
        """
        candidates = [transcript or ""]
        if not is_selection:
            candidates.append(self.transcript.stable)
            candidates.append(self.final_segments.text())
        chosen = next((candidate for candidate in candidates if candidate), "")
        return chosen.strip()

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        upstreams = [u for u in (self._upstream, *self._draining) if u is not None]
        self._detach()
        self._draining.clear()

        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        for upstream in upstreams:
            await self._close_upstream(upstream)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("session %s: closed (dropped_audio_frames=%d)", self.id, self._dropped_audio_frames)

    # ---- background work ----

    async def _pump(self, upstream: UpstreamConnection) -> None:
        try:
            await upstream.open()
        except UpstreamError as exc:
            logger.warning("session %s: stt connect failed: %s", self.id, exc)
            if self._upstream is upstream:
                self._detach()
                self._send(Error(message=f"{WS_ERROR_START_FAILED}: {exc}"))
            return

        if self._upstream is not upstream:
            # Stopped while the handshake was in flight.
            await self._close_upstream(upstream)
            return

        self._phase = SessionPhase.STREAMING
        logger.info("session %s: stt stream open", self.id)
        self._send(Started())
        try:
            async for event in upstream.events():
                self._on_event(event)
        except UpstreamError as exc:
            logger.warning("session %s: stt stream failed: %s", self.id, exc)
            if self._upstream is upstream:
                self._send(Error(message=f"{WS_ERROR_TRANSCRIPTION}: {exc}"))
        finally:
            if self._upstream is upstream:
                self._detach()
                await self._close_upstream(upstream)

    def _on_event(self, event: SttEvent) -> None:
        match event:
            case TranscriptEvent(text=text, is_final=is_final):
                if not text.strip():
                    return
                self._send(Transcript(text=text, is_final=is_final))
                if is_final:
                    self.transcript.commit(text)
                    self.final_segments.append(text)
                else:
                    self.transcript.update_provisional(text)
            case ProviderError(message=message):
                logger.warning("session %s: stt provider error: %s", self.id, message)
                self._send(Error(message=f"{WS_ERROR_TRANSCRIPTION}: {message}"))

    async def _close_after_grace(self, upstream: UpstreamConnection) -> None:
        await asyncio.sleep(self._stop_grace_s)
        self._draining.discard(upstream)
        await self._close_upstream(upstream)

    async def _close_upstream(self, upstream: UpstreamConnection) -> None:
        try:
            await upstream.close()
        except Exception:
            logger.warning("session %s: stt close failed", self.id, exc_info=True)

    async def _run_generation(self, text: str) -> None:
        try:
            result = await self._answers.generate(text)
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("session %s: answer generation crashed", self.id)
            result = Error(message=FAILURE_ERROR_MESSAGE)
        if not self._closed:
            self._send(result)


__all__ = ["AnswerSource", "RelaySession", "SendFn"]
