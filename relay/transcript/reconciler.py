"""Stable/provisional transcript bookkeeping.

The stable transcript is an append-only list of committed segments joined by
single spaces. The provisional fragment is the latest uncommitted text from
the provider; it is overwritten on every update and never overlaps the stable
text: a final event supersedes it and an explicit promotion moves it.
"""

from __future__ import annotations

from relay.config.transcript import PROVISIONAL_OPEN, PROVISIONAL_CLOSE


class TranscriptReconciler:
    def __init__(self) -> None:
        self._segments: list[str] = []
        self._provisional: str = ""

    @property
    def stable(self) -> str:
        return " ".join(self._segments)

    @property
    def provisional(self) -> str:
        return self._provisional

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(self._segments)

    def commit(self, text: str) -> bool:
        """Append a final segment; the provisional fragment it replaces is dropped."""
        text = (text or "").strip()
        if not text:
            return False
        self._segments.append(text)
        self._provisional = ""
        return True

    def update_provisional(self, text: str) -> None:
        self._provisional = (text or "").strip()

    def promote(self) -> bool:
        """Move the provisional fragment into the stable transcript.

        Returns False (and changes nothing) when there is nothing to promote.
        """
        if not self._provisional:
            return False
        self._segments.append(self._provisional)
        self._provisional = ""
        return True

    def full_text(self) -> str:
        if not self._provisional:
            return self.stable
        return " ".join([*self._segments, self._provisional])

    def render(self) -> str:
        stable = self.stable
        if not self._provisional:
            return stable
        suffix = f"{PROVISIONAL_OPEN}{self._provisional}{PROVISIONAL_CLOSE}"
        return f"{stable} {suffix}" if stable else suffix

    def reset(self) -> None:
        self._segments.clear()
        self._provisional = ""


__all__ = ["TranscriptReconciler"]
