"""Client -> server messages as a tagged union."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StartMessage:
    pass


@dataclass(frozen=True, slots=True)
class AudioMessage:
    pcm: bytes


@dataclass(frozen=True, slots=True)
class StopMessage:
    pass


@dataclass(frozen=True, slots=True)
class GenerateMessage:
    transcript: str = ""
    is_selection: bool = False


ClientMessage = StartMessage | AudioMessage | StopMessage | GenerateMessage

__all__ = [
    "AudioMessage",
    "ClientMessage",
    "GenerateMessage",
    "StartMessage",
    "StopMessage",
]
