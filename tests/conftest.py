from __future__ import annotations

from collections.abc import Callable

import pytest

from relay.state.settings import (
    AppSettings,
    SttSettings,
    AuthSettings,
    LimitsSettings,
    WebSocketSettings,
    GenerationSettings,
)


@pytest.fixture
def stt_settings() -> Callable[..., SttSettings]:
    def _build(**overrides) -> SttSettings:
        values = {
            "streaming_url": "wss://streaming.assemblyai.com/v3/ws",
            "sample_rate_hz": 16000,
            "format_turns": False,
            "connect_timeout_s": 2.0,
            "stop_grace_s": 0.01,
            "transcript_buffer_seconds": 60.0,
        }
        values.update(overrides)
        return SttSettings(**values)

    return _build


@pytest.fixture
def app_settings(stt_settings: Callable[..., SttSettings]) -> Callable[..., AppSettings]:
    def _build(*, max_sessions: int = 4) -> AppSettings:
        return AppSettings(
            auth=AuthSettings(assemblyai_api_key="aai", gemini_api_key="gem"),
            stt=stt_settings(streaming_url="ws://stt.invalid/v3/ws"),
            generation=GenerationSettings(model="m", api_base_url="https://gen.invalid", timeout_s=1.0),
            websocket=WebSocketSettings(endpoint_path="/ws", host="127.0.0.1", port=0),
            limits=LimitsSettings(max_concurrent_sessions=max_sessions),
        )

    return _build
