from __future__ import annotations

import pytest

from relay.errors import ConfigurationError
from relay.runtime.settings import load_settings

_MANAGED_ENV = (
    "ASSEMBLYAI_API_KEY",
    "GEMINI_API_KEY",
    "STT_SAMPLE_RATE_HZ",
    "STT_FORMAT_TURNS",
    "GENERATION_TIMEOUT_S",
    "WS_ENDPOINT_PATH",
    "MAX_CONCURRENT_SESSIONS",
    "PORT",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _MANAGED_ENV:
        monkeypatch.delenv(name, raising=False)


def _with_keys(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ASSEMBLYAI_API_KEY", "aai")
    monkeypatch.setenv("GEMINI_API_KEY", "gem")


def test_missing_assemblyai_key_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "gem")
    with pytest.raises(ConfigurationError, match="ASSEMBLYAI_API_KEY"):
        load_settings()


def test_missing_gemini_key_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ASSEMBLYAI_API_KEY", "aai")
    monkeypatch.setenv("GEMINI_API_KEY", "   ")
    with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
        load_settings()


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    _with_keys(monkeypatch)
    settings = load_settings()

    assert settings.auth.assemblyai_api_key == "aai"
    assert settings.auth.gemini_api_key == "gem"
    assert settings.stt.sample_rate_hz == 16000
    assert settings.stt.format_turns is False
    assert settings.stt.stop_grace_s == 0.5
    assert settings.stt.transcript_buffer_seconds == 60.0
    assert settings.generation.model == "gemini-2.5-flash-lite"
    assert settings.generation.timeout_s == 15.0
    assert settings.websocket.endpoint_path == "/ws"
    assert settings.websocket.port == 3000
    assert settings.limits.max_concurrent_sessions == 100


def test_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    _with_keys(monkeypatch)
    monkeypatch.setenv("STT_FORMAT_TURNS", "true")
    monkeypatch.setenv("GENERATION_TIMEOUT_S", "2.5")
    monkeypatch.setenv("WS_ENDPOINT_PATH", "relay")
    monkeypatch.setenv("MAX_CONCURRENT_SESSIONS", "0")

    settings = load_settings()
    assert settings.stt.format_turns is True
    assert settings.generation.timeout_s == 2.5
    assert settings.websocket.endpoint_path == "/relay"
    assert settings.limits.max_concurrent_sessions == 1


@pytest.mark.parametrize(
    ("name", "value"),
    [("PORT", "eighty"), ("GENERATION_TIMEOUT_S", "soon"), ("STT_SAMPLE_RATE_HZ", "-1")],
)
def test_invalid_values_are_configuration_errors(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    _with_keys(monkeypatch)
    monkeypatch.setenv(name, value)
    with pytest.raises(ConfigurationError, match=name):
        load_settings()
