"""Server -> client messages and their JSON encoding."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass

import orjson

from relay.config.websocket import (
    WS_KEY_TEXT,
    WS_KEY_TYPE,
    WS_TYPE_ERROR,
    WS_KEY_MESSAGE,
    WS_TYPE_ANSWER,
    WS_KEY_IS_FINAL,
    WS_TYPE_STARTED,
    WS_TYPE_STOPPED,
    WS_TYPE_TRANSCRIPT,
)


@dataclass(frozen=True, slots=True)
class Started:
    pass


@dataclass(frozen=True, slots=True)
class Transcript:
    text: str
    is_final: bool


@dataclass(frozen=True, slots=True)
class Answer:
    text: str


@dataclass(frozen=True, slots=True)
class Error:
    message: str


@dataclass(frozen=True, slots=True)
class Stopped:
    pass


ServerMessage = Started | Transcript | Answer | Error | Stopped


def server_message_to_dict(message: ServerMessage) -> dict[str, Any]:
    match message:
        case Started():
            return {WS_KEY_TYPE: WS_TYPE_STARTED}
        case Transcript(text=text, is_final=is_final):
            return {WS_KEY_TYPE: WS_TYPE_TRANSCRIPT, WS_KEY_TEXT: text, WS_KEY_IS_FINAL: is_final}
        case Answer(text=text):
            return {WS_KEY_TYPE: WS_TYPE_ANSWER, WS_KEY_TEXT: text}
        case Error(message=text):
            return {WS_KEY_TYPE: WS_TYPE_ERROR, WS_KEY_MESSAGE: text}
        case Stopped():
            return {WS_KEY_TYPE: WS_TYPE_STOPPED}
    raise TypeError(f"unsupported server message: {message!r}")


def encode_server_message(message: ServerMessage) -> str:
    return orjson.dumps(server_message_to_dict(message)).decode("utf-8")


__all__ = [
    "Answer",
    "Error",
    "ServerMessage",
    "Started",
    "Stopped",
    "Transcript",
    "encode_server_message",
    "server_message_to_dict",
]
