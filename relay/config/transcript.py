"""Transcript reconciliation settings."""

from __future__ import annotations

# Provisional text with no update for this long is promoted to stable.
PROVISIONAL_PROMOTION_TIMEOUT_S: float = 3.0

# Markers around the provisional suffix in rendered transcripts.
PROVISIONAL_OPEN = "["
PROVISIONAL_CLOSE = "]"

__all__ = [
    "PROVISIONAL_CLOSE",
    "PROVISIONAL_OPEN",
    "PROVISIONAL_PROMOTION_TIMEOUT_S",
]
