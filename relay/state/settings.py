"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AuthSettings:
    assemblyai_api_key: str
    gemini_api_key: str


@dataclass(frozen=True, slots=True)
class SttSettings:
    streaming_url: str
    sample_rate_hz: int
    format_turns: bool
    connect_timeout_s: float
    stop_grace_s: float
    transcript_buffer_seconds: float


@dataclass(frozen=True, slots=True)
class GenerationSettings:
    model: str
    api_base_url: str
    timeout_s: float


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    endpoint_path: str
    host: str
    port: int


@dataclass(frozen=True, slots=True)
class LimitsSettings:
    max_concurrent_sessions: int


@dataclass(frozen=True, slots=True)
class AppSettings:
    auth: AuthSettings
    stt: SttSettings
    generation: GenerationSettings
    websocket: WebSocketSettings
    limits: LimitsSettings


__all__ = [
    "AppSettings",
    "AuthSettings",
    "GenerationSettings",
    "LimitsSettings",
    "SttSettings",
    "WebSocketSettings",
]
