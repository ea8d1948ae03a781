"""Route parsed client messages to session operations."""

from __future__ import annotations

from relay.session import RelaySession
from relay.messages.client import (
    StopMessage,
    AudioMessage,
    StartMessage,
    ClientMessage,
    GenerateMessage,
)


async def dispatch_message(session: RelaySession, message: ClientMessage) -> None:
    match message:
        case StartMessage():
            await session.start()
        case AudioMessage(pcm=pcm):
            await session.audio(pcm)
        case StopMessage():
            await session.stop()
        case GenerateMessage(transcript=transcript, is_selection=is_selection):
            await session.generate(transcript, is_selection=is_selection)
        case _:
            raise TypeError(f"unsupported client message: {message!r}")


__all__ = ["dispatch_message"]
