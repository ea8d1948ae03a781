from __future__ import annotations

import json

import pytest

from relay.upstream.events import ProviderError, TranscriptEvent, translate_provider_message


def _turn(transcript: str, *, end_of_turn: bool = False, formatted: bool = False) -> str:
    return json.dumps({
        "type": "Turn",
        "transcript": transcript,
        "end_of_turn": end_of_turn,
        "turn_is_formatted": formatted,
    })


def test_partial_turn_is_not_final() -> None:
    event = translate_provider_message(_turn("hello wor"), format_turns=False)
    assert event == TranscriptEvent(text="hello wor", is_final=False)


def test_end_of_turn_is_final_when_unformatted() -> None:
    event = translate_provider_message(_turn("hello world", end_of_turn=True), format_turns=False)
    assert event == TranscriptEvent(text="hello world", is_final=True)


def test_formatted_sessions_wait_for_formatted_turn() -> None:
    unformatted = translate_provider_message(_turn("hello world", end_of_turn=True), format_turns=True)
    assert unformatted == TranscriptEvent(text="hello world", is_final=False)

    formatted = translate_provider_message(
        _turn("Hello world.", end_of_turn=True, formatted=True),
        format_turns=True,
    )
    assert formatted == TranscriptEvent(text="Hello world.", is_final=True)


def test_empty_turn_is_ignored() -> None:
    assert translate_provider_message(_turn(""), format_turns=False) is None


@pytest.mark.parametrize(
    "frame",
    [
        {"type": "Begin", "id": "abc", "expires_at": 123},
        {"type": "Termination", "audio_duration_seconds": 3, "session_duration_seconds": 4},
        {"type": "SomethingNew"},
    ],
)
def test_lifecycle_and_unknown_frames_yield_nothing(frame: dict) -> None:
    assert translate_provider_message(json.dumps(frame), format_turns=False) is None


def test_error_field_becomes_provider_error() -> None:
    event = translate_provider_message(json.dumps({"error": "Invalid API key"}), format_turns=False)
    assert event == ProviderError(message="Invalid API key")


@pytest.mark.parametrize("raw", ["not json", "[]", b"\x00\x01"])
def test_unparseable_frames_raise(raw: str | bytes) -> None:
    with pytest.raises(ValueError):
        translate_provider_message(raw, format_turns=False)
