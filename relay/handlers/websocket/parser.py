"""Client message parsing/validation into the tagged message union."""

from __future__ import annotations

import base64
import binascii
from typing import Any
from collections.abc import Callable

import orjson

from relay.errors import MalformedMessageError
from relay.messages.client import (
    StopMessage,
    AudioMessage,
    StartMessage,
    ClientMessage,
    GenerateMessage,
)
from relay.config.websocket import (
    WS_KEY_TYPE,
    WS_KEY_AUDIO,
    WS_TYPE_STOP,
    WS_TYPE_AUDIO,
    WS_TYPE_START,
    WS_TYPE_GENERATE,
    WS_KEY_TRANSCRIPT,
    WS_KEY_IS_SELECTION,
)

ParseFn = Callable[[dict[str, Any]], ClientMessage]


def _parse_start(_msg: dict[str, Any]) -> StartMessage:
    return StartMessage()


def _parse_stop(_msg: dict[str, Any]) -> StopMessage:
    return StopMessage()


def _parse_audio(msg: dict[str, Any]) -> AudioMessage:
    audio = msg.get(WS_KEY_AUDIO)
    if not isinstance(audio, str) or not audio.strip():
        raise MalformedMessageError("audio message missing non-empty base64 'audio'")
    try:
        pcm = base64.b64decode(audio, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedMessageError(f"invalid base64 audio: {exc}") from exc
    return AudioMessage(pcm=pcm)


def _parse_generate(msg: dict[str, Any]) -> GenerateMessage:
    transcript = msg.get(WS_KEY_TRANSCRIPT)
    if transcript is None:
        transcript = ""
    if not isinstance(transcript, str):
        raise MalformedMessageError("generate 'transcript' must be a string")

    is_selection = msg.get(WS_KEY_IS_SELECTION)
    if is_selection is None:
        is_selection = False
    if not isinstance(is_selection, bool):
        raise MalformedMessageError("generate 'isSelection' must be a boolean")

    return GenerateMessage(transcript=transcript, is_selection=is_selection)


PARSERS: dict[str, ParseFn] = {
    WS_TYPE_START: _parse_start,
    WS_TYPE_AUDIO: _parse_audio,
    WS_TYPE_STOP: _parse_stop,
    WS_TYPE_GENERATE: _parse_generate,
}


def parse_client_message(raw: str | bytes) -> ClientMessage:
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise MalformedMessageError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise MalformedMessageError("message must be a JSON object")

    msg_type = msg.get(WS_KEY_TYPE)
    if not isinstance(msg_type, str) or not msg_type.strip():
        raise MalformedMessageError("message missing non-empty 'type'")

    parse = PARSERS.get(msg_type.strip())
    if parse is None:
        raise MalformedMessageError(f"message type '{msg_type.strip()}' is not supported")
    return parse(msg)


__all__ = ["PARSERS", "parse_client_message"]
