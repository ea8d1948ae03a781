from __future__ import annotations

import asyncio
from collections.abc import Callable

import pytest

from relay.errors import UpstreamError
from relay.generation import AnswerGenerator
from relay.session import RelaySession, SessionPhase
from relay.upstream.events import ProviderError, TranscriptEvent
from relay.messages.server import Error, Answer, Started, Stopped, Transcript
from relay.config.generation import NO_TRANSCRIPT_NOTICE, TIMEOUT_ERROR_MESSAGE
from relay.config.websocket import WS_ERROR_START_FAILED, WS_ERROR_TRANSCRIPTION, WS_ERROR_ALREADY_STARTED


class _FakeUpstream:
    def __init__(self, *, open_error: Exception | None = None, hold_open: bool = False) -> None:
        self.open_error = open_error
        self.allow_open = asyncio.Event()
        if not hold_open:
            self.allow_open.set()
        self.sent: list[bytes] = []
        self.terminated = False
        self.closed = False
        self._open = False
        self._events: asyncio.Queue = asyncio.Queue()

    @property
    def is_open(self) -> bool:
        return self._open and not self.closed

    async def open(self) -> None:
        await self.allow_open.wait()
        if self.open_error is not None:
            raise self.open_error
        self._open = True

    async def send_audio(self, pcm: bytes) -> bool:
        if not self.is_open:
            return False
        self.sent.append(pcm)
        return True

    async def terminate(self) -> None:
        self.terminated = True

    async def close(self) -> None:
        self.closed = True
        self._events.put_nowait(None)

    def push(self, item: object) -> None:
        self._events.put_nowait(item)

    async def events(self):
        while True:
            item = await self._events.get()
            if item is None:
                return
            if isinstance(item, Exception):
                raise item
            yield item


class _FakeBridge:
    def __init__(self, *upstreams: _FakeUpstream) -> None:
        self._upstreams = list(upstreams)
        self.created: list[_FakeUpstream] = []

    def new_connection(self) -> _FakeUpstream:
        upstream = self._upstreams.pop(0) if self._upstreams else _FakeUpstream()
        self.created.append(upstream)
        return upstream


class _EchoAnswers:
    def __init__(self) -> None:
        self.prompts: list[str] = []

    async def generate(self, transcript: str) -> Answer | Error:
        self.prompts.append(transcript)
        return Answer(text=f"answer: {transcript}")


class _BlockingProvider:
    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.cancelled = False

    async def generate(self, prompt: str) -> str:
        self.started.set()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return "never"


def _session(bridge: _FakeBridge, answers=None, **kwargs) -> tuple[RelaySession, list]:
    sent: list = []
    session = RelaySession(
        send=sent.append,
        upstreams=bridge,
        answers=answers or _EchoAnswers(),
        stop_grace_s=kwargs.pop("stop_grace_s", 0.01),
        **kwargs,
    )
    return session, sent


async def _wait_for(predicate: Callable[[], bool], timeout: float = 1.0) -> None:
    async def _poll() -> None:
        while not predicate():
            await asyncio.sleep(0.001)

    await asyncio.wait_for(_poll(), timeout=timeout)


@pytest.mark.asyncio
async def test_start_opens_upstream_and_reports_started() -> None:
    session, sent = _session(_FakeBridge())
    await session.start()
    await _wait_for(lambda: session.phase is SessionPhase.STREAMING)
    assert sent == [Started()]
    await session.close()


@pytest.mark.asyncio
async def test_audio_before_open_is_dropped() -> None:
    upstream = _FakeUpstream(hold_open=True)
    session, sent = _session(_FakeBridge(upstream))

    await session.audio(b"early")
    await session.start()
    assert session.phase is SessionPhase.CONNECTING
    await session.audio(b"still-early")
    assert upstream.sent == []
    assert session.dropped_audio_frames == 2

    upstream.allow_open.set()
    await _wait_for(lambda: sent == [Started()])
    await session.audio(b"live")
    assert upstream.sent == [b"live"]
    await session.close()


@pytest.mark.asyncio
async def test_finals_accumulate_into_stable_transcript() -> None:
    upstream = _FakeUpstream()
    session, sent = _session(_FakeBridge(upstream))
    await session.start()
    await _wait_for(lambda: session.phase is SessionPhase.STREAMING)

    upstream.push(TranscriptEvent(text="hel", is_final=False))
    upstream.push(TranscriptEvent(text="hello", is_final=True))
    upstream.push(TranscriptEvent(text="world", is_final=True))
    await _wait_for(lambda: len(sent) == 4)

    assert sent[1:] == [
        Transcript(text="hel", is_final=False),
        Transcript(text="hello", is_final=True),
        Transcript(text="world", is_final=True),
    ]
    assert session.transcript.stable == "hello world"
    assert session.transcript.provisional == ""
    assert session.final_segments.text() == "hello world"
    await session.close()


@pytest.mark.asyncio
async def test_second_start_is_rejected_without_touching_upstream() -> None:
    bridge = _FakeBridge()
    session, sent = _session(bridge)
    await session.start()
    await _wait_for(lambda: session.phase is SessionPhase.STREAMING)

    await session.start()
    assert sent[-1] == Error(message=WS_ERROR_ALREADY_STARTED)
    assert len(bridge.created) == 1
    assert session.upstream is bridge.created[0]
    await session.close()


@pytest.mark.asyncio
async def test_stop_terminates_then_closes_after_grace() -> None:
    upstream = _FakeUpstream()
    session, sent = _session(_FakeBridge(upstream), stop_grace_s=0.02)
    await session.start()
    await _wait_for(lambda: session.phase is SessionPhase.STREAMING)

    await session.stop()
    assert upstream.terminated
    assert sent[-1] == Stopped()
    assert session.phase is SessionPhase.IDLE
    assert session.upstream is None

    # Events that arrive during the grace period still reach the client.
    upstream.push(TranscriptEvent(text="last words", is_final=True))
    await _wait_for(lambda: upstream.closed)
    assert Transcript(text="last words", is_final=True) in sent
    await session.close()


@pytest.mark.asyncio
async def test_stop_then_immediate_close_closes_upstream() -> None:
    upstream = _FakeUpstream()
    session, sent = _session(_FakeBridge(upstream), stop_grace_s=10.0)
    await session.start()
    await _wait_for(lambda: session.phase is SessionPhase.STREAMING)

    await session.stop()
    await session.close()

    assert upstream.terminated
    assert upstream.closed
    assert session.closed


@pytest.mark.asyncio
async def test_stop_when_idle_just_reports_stopped() -> None:
    session, sent = _session(_FakeBridge())
    await session.stop()
    assert sent == [Stopped()]
    assert session.phase is SessionPhase.IDLE


@pytest.mark.asyncio
async def test_open_failure_reports_error_and_allows_restart() -> None:
    failing = _FakeUpstream(open_error=UpstreamError("rejected", status=401))
    working = _FakeUpstream()
    session, sent = _session(_FakeBridge(failing, working))

    await session.start()
    await _wait_for(lambda: len(sent) == 1)
    assert sent[0] == Error(message=f"{WS_ERROR_START_FAILED}: rejected (status 401)")
    assert session.phase is SessionPhase.IDLE

    await session.start()
    await _wait_for(lambda: session.phase is SessionPhase.STREAMING)
    assert sent[-1] == Started()
    assert session.upstream is working
    await session.close()


@pytest.mark.asyncio
async def test_stream_failure_reports_error_and_returns_to_idle() -> None:
    upstream = _FakeUpstream()
    session, sent = _session(_FakeBridge(upstream))
    await session.start()
    await _wait_for(lambda: session.phase is SessionPhase.STREAMING)

    upstream.push(UpstreamError("STT connection lost: server error", status=1011))
    await _wait_for(lambda: session.phase is SessionPhase.IDLE)
    assert sent[-1] == Error(message=f"{WS_ERROR_TRANSCRIPTION}: STT connection lost: server error (status 1011)")
    assert upstream.closed
    await session.close()


@pytest.mark.asyncio
async def test_provider_error_event_is_forwarded() -> None:
    upstream = _FakeUpstream()
    session, sent = _session(_FakeBridge(upstream))
    await session.start()
    await _wait_for(lambda: session.phase is SessionPhase.STREAMING)

    upstream.push(ProviderError(message="Invalid audio"))
    await _wait_for(lambda: len(sent) == 2)
    assert sent[-1] == Error(message=f"{WS_ERROR_TRANSCRIPTION}: Invalid audio")
    await session.close()


@pytest.mark.asyncio
async def test_normal_provider_close_returns_to_idle_quietly() -> None:
    upstream = _FakeUpstream()
    session, sent = _session(_FakeBridge(upstream))
    await session.start()
    await _wait_for(lambda: session.phase is SessionPhase.STREAMING)

    upstream.push(None)
    await _wait_for(lambda: session.phase is SessionPhase.IDLE)
    assert sent == [Started()]
    await session.close()


@pytest.mark.asyncio
async def test_blank_generate_answers_without_provider_call() -> None:
    answers = _EchoAnswers()
    session, sent = _session(_FakeBridge(), answers)

    await session.generate("   ")
    assert sent == [Answer(text=NO_TRANSCRIPT_NOTICE)]
    assert answers.prompts == []


@pytest.mark.asyncio
async def test_generate_prefers_message_text_then_stable_transcript() -> None:
    answers = _EchoAnswers()
    session, sent = _session(_FakeBridge(), answers)
    session.transcript.commit("what is asyncio")

    await session.generate("explicit question")
    await session.generate("")
    await _wait_for(lambda: len(sent) == 2)

    assert answers.prompts == ["explicit question", "what is asyncio"]
    await session.close()


@pytest.mark.asyncio
async def test_selection_generate_ignores_session_transcript() -> None:
    answers = _EchoAnswers()
    session, sent = _session(_FakeBridge(), answers)
    session.transcript.commit("not this")

    await session.generate("", is_selection=True)
    assert sent == [Answer(text=NO_TRANSCRIPT_NOTICE)]
    assert answers.prompts == []


@pytest.mark.asyncio
async def test_whitespace_message_wins_over_stable_transcript() -> None:
    answers = _EchoAnswers()
    session, sent = _session(_FakeBridge(), answers)
    session.transcript.commit("hello")

    assert session.resolve_generation_text("   ") == ""
    await session.generate("   ")

    assert sent == [Answer(text=NO_TRANSCRIPT_NOTICE)]
    assert answers.prompts == []
    await session.close()


@pytest.mark.asyncio
async def test_overlapping_generates_are_served_independently() -> None:
    class _GatedAnswers:
        def __init__(self) -> None:
            self.release = asyncio.Event()
            self.waiting = 0
            self.cancelled = 0

        async def generate(self, transcript: str) -> Answer | Error:
            self.waiting += 1
            try:
                await self.release.wait()
            except asyncio.CancelledError:
                self.cancelled += 1
                raise
            return Answer(text=f"answer: {transcript}")

    answers = _GatedAnswers()
    session, sent = _session(_FakeBridge(), answers)

    await session.generate("first question")
    await session.generate("second question")
    await _wait_for(lambda: answers.waiting == 2)
    assert sent == []

    answers.release.set()
    await _wait_for(lambda: len(sent) == 2)

    assert sorted(msg.text for msg in sent) == ["answer: first question", "answer: second question"]
    assert answers.cancelled == 0
    await session.close()


def test_buffered_finals_are_the_last_fallback() -> None:
    session, _sent = _session(_FakeBridge())
    session.final_segments.append("from")
    session.final_segments.append("buffer")
    assert session.resolve_generation_text("") == "from buffer"
    session.transcript.commit("stable")
    assert session.resolve_generation_text("") == "stable"


@pytest.mark.asyncio
async def test_generation_timeout_sends_single_error() -> None:
    class _Slow:
        async def generate(self, prompt: str) -> str:
            await asyncio.sleep(0.1)
            return "too late"

    session, sent = _session(_FakeBridge(), AnswerGenerator(_Slow(), timeout_s=0.02))
    await session.generate("question")
    await _wait_for(lambda: len(sent) == 1)
    assert sent == [Error(message=TIMEOUT_ERROR_MESSAGE)]

    await asyncio.sleep(0.15)
    assert sent == [Error(message=TIMEOUT_ERROR_MESSAGE)]
    await session.close()


@pytest.mark.asyncio
async def test_close_cancels_pending_generation() -> None:
    provider = _BlockingProvider()
    session, sent = _session(_FakeBridge(), AnswerGenerator(provider, timeout_s=5.0))

    await session.generate("question")
    await asyncio.wait_for(provider.started.wait(), timeout=1.0)
    await session.close()

    assert provider.cancelled
    assert sent == []


@pytest.mark.asyncio
async def test_sessions_are_independent() -> None:
    up_a, up_b = _FakeUpstream(), _FakeUpstream()
    session_a, sent_a = _session(_FakeBridge(up_a))
    session_b, sent_b = _session(_FakeBridge(up_b))
    assert session_a.id != session_b.id

    await session_a.start()
    await session_b.start()
    await _wait_for(lambda: session_a.phase is SessionPhase.STREAMING and session_b.phase is SessionPhase.STREAMING)

    up_a.push(TranscriptEvent(text="only a", is_final=True))
    await _wait_for(lambda: len(sent_a) == 2)
    await session_b.stop()

    assert session_a.transcript.stable == "only a"
    assert session_b.transcript.stable == ""
    assert session_a.phase is SessionPhase.STREAMING
    assert not up_a.terminated
    assert sent_b == [Started(), Stopped()]

    await session_a.close()
    await session_b.close()
    assert up_a.closed and up_b.closed
