"""Time-windowed buffer of final transcript segments."""

from __future__ import annotations

import time
import collections
from collections.abc import Callable

TimeFn = Callable[[], float]


class FinalSegmentBuffer:
    """Keep (text, timestamp) pairs for a trailing window.

    Used as the last-resort transcript source when a generate request carries
    no text and nothing has been committed to the stable transcript.
    """

    def __init__(self, *, window_seconds: float, now_fn: TimeFn | None = None) -> None:
        self.window_seconds = max(0.0, float(window_seconds))
        self._now = now_fn or time.monotonic
        self._entries: collections.deque[tuple[str, float]] = collections.deque()

    def append(self, text: str) -> None:
        text = (text or "").strip()
        if not text:
            return
        self._entries.append((text, self._now()))
        self._prune()

    def _prune(self) -> None:
        cutoff = self._now() - self.window_seconds
        entries = self._entries
        while entries and entries[0][1] <= cutoff:
            entries.popleft()

    def entries(self) -> list[tuple[str, float]]:
        self._prune()
        return list(self._entries)

    def text(self) -> str:
        return " ".join(text for text, _ts in self.entries())

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        self._prune()
        return len(self._entries)


__all__ = ["FinalSegmentBuffer"]
