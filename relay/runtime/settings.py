"""Environment parsing for runtime settings.

Env names and defaults live in `relay/config/*`; this module resolves them into
the frozen dataclasses from `relay/state/settings.py`. Missing credentials are
fatal: the server must refuse to start rather than fail on first use.
"""

from __future__ import annotations

import os

from relay.errors import ConfigurationError
from relay.config.secrets import ENV_GEMINI_API_KEY, ENV_ASSEMBLYAI_API_KEY
from relay.state.settings import (
    AppSettings,
    SttSettings,
    AuthSettings,
    LimitsSettings,
    WebSocketSettings,
    GenerationSettings,
)
from relay.config.websocket import (
    ENV_HOST,
    ENV_PORT,
    DEFAULT_HOST,
    DEFAULT_PORT,
    ENV_WS_ENDPOINT_PATH,
    DEFAULT_WS_ENDPOINT_PATH,
    ENV_MAX_CONCURRENT_SESSIONS,
    DEFAULT_MAX_CONCURRENT_SESSIONS,
)
from relay.config.generation import (
    ENV_GEMINI_MODEL,
    DEFAULT_GEMINI_MODEL,
    ENV_GEMINI_API_BASE_URL,
    ENV_GENERATION_TIMEOUT_S,
    DEFAULT_GEMINI_API_BASE_URL,
    DEFAULT_GENERATION_TIMEOUT_S,
)
from relay.config.stt import (
    ENV_STT_STOP_GRACE_S,
    ENV_STT_FORMAT_TURNS,
    ENV_STT_SAMPLE_RATE_HZ,
    DEFAULT_STT_STOP_GRACE_S,
    DEFAULT_STT_FORMAT_TURNS,
    ENV_STT_CONNECT_TIMEOUT_S,
    DEFAULT_STT_SAMPLE_RATE_HZ,
    ENV_ASSEMBLYAI_STREAMING_URL,
    DEFAULT_STT_CONNECT_TIMEOUT_S,
    ENV_TRANSCRIPT_BUFFER_SECONDS,
    DEFAULT_ASSEMBLYAI_STREAMING_URL,
    DEFAULT_TRANSCRIPT_BUFFER_SECONDS,
)


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _required_env(name: str) -> str:
    value = (os.getenv(name) or "").strip()
    if not value:
        raise ConfigurationError(f"Missing {name} in environment variables")
    return value


def _positive(name: str, value: float) -> float:
    if value <= 0:
        raise ConfigurationError(f"{name} must be > 0, got {value}")
    return value


def _load_auth_settings() -> AuthSettings:
    return AuthSettings(
        assemblyai_api_key=_required_env(ENV_ASSEMBLYAI_API_KEY),
        gemini_api_key=_required_env(ENV_GEMINI_API_KEY),
    )


def _load_stt_settings() -> SttSettings:
    sample_rate = _int_env(ENV_STT_SAMPLE_RATE_HZ, DEFAULT_STT_SAMPLE_RATE_HZ)
    return SttSettings(
        streaming_url=_str_env(ENV_ASSEMBLYAI_STREAMING_URL, DEFAULT_ASSEMBLYAI_STREAMING_URL),
        sample_rate_hz=int(_positive(ENV_STT_SAMPLE_RATE_HZ, sample_rate)),
        format_turns=_bool_env(ENV_STT_FORMAT_TURNS, DEFAULT_STT_FORMAT_TURNS),
        connect_timeout_s=_positive(
            ENV_STT_CONNECT_TIMEOUT_S, _float_env(ENV_STT_CONNECT_TIMEOUT_S, DEFAULT_STT_CONNECT_TIMEOUT_S)
        ),
        stop_grace_s=max(0.0, _float_env(ENV_STT_STOP_GRACE_S, DEFAULT_STT_STOP_GRACE_S)),
        transcript_buffer_seconds=_positive(
            ENV_TRANSCRIPT_BUFFER_SECONDS,
            _float_env(ENV_TRANSCRIPT_BUFFER_SECONDS, DEFAULT_TRANSCRIPT_BUFFER_SECONDS),
        ),
    )


def _load_generation_settings() -> GenerationSettings:
    return GenerationSettings(
        model=_str_env(ENV_GEMINI_MODEL, DEFAULT_GEMINI_MODEL),
        api_base_url=_str_env(ENV_GEMINI_API_BASE_URL, DEFAULT_GEMINI_API_BASE_URL).rstrip("/"),
        timeout_s=_positive(
            ENV_GENERATION_TIMEOUT_S, _float_env(ENV_GENERATION_TIMEOUT_S, DEFAULT_GENERATION_TIMEOUT_S)
        ),
    )


def load_websocket_settings() -> WebSocketSettings:
    path = _str_env(ENV_WS_ENDPOINT_PATH, DEFAULT_WS_ENDPOINT_PATH)
    if not path.startswith("/"):
        path = f"/{path}"
    return WebSocketSettings(
        endpoint_path=path,
        host=_str_env(ENV_HOST, DEFAULT_HOST),
        port=_int_env(ENV_PORT, DEFAULT_PORT),
    )


def _load_limits_settings() -> LimitsSettings:
    max_sessions = _int_env(ENV_MAX_CONCURRENT_SESSIONS, DEFAULT_MAX_CONCURRENT_SESSIONS)
    return LimitsSettings(max_concurrent_sessions=max(1, max_sessions))


def load_settings() -> AppSettings:
    return AppSettings(
        auth=_load_auth_settings(),
        stt=_load_stt_settings(),
        generation=_load_generation_settings(),
        websocket=load_websocket_settings(),
        limits=_load_limits_settings(),
    )


__all__ = ["load_settings", "load_websocket_settings"]
