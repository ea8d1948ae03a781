"""Structural interface for the per-session speech-to-text connection."""

from __future__ import annotations

from typing import Protocol
from collections.abc import AsyncIterator

from .events import SttEvent


class UpstreamConnection(Protocol):
    """Contract the session relies on; tests substitute in-memory fakes."""

    @property
    def is_open(self) -> bool: ...

    async def open(self) -> None:
        """Complete the provider handshake. Raises UpstreamError on failure."""
        ...

    async def send_audio(self, pcm: bytes) -> bool:
        """Forward PCM bytes verbatim. Returns False when the frame was dropped."""
        ...

    async def terminate(self) -> None:
        """Ask the provider to end the session politely."""
        ...

    async def close(self) -> None: ...

    def events(self) -> AsyncIterator[SttEvent]:
        """Translated provider events in emission order until the connection ends."""
        ...


class UpstreamFactory(Protocol):
    def new_connection(self) -> UpstreamConnection: ...


__all__ = ["UpstreamConnection", "UpstreamFactory"]
