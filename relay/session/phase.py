"""Per-session transcription phases."""

from __future__ import annotations

from enum import Enum


class SessionPhase(str, Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    STREAMING = "streaming"
    STOPPING = "stopping"


# Phases in which client audio is forwarded (when the upstream is open).
AUDIO_PHASES: frozenset[SessionPhase] = frozenset({SessionPhase.CONNECTING, SessionPhase.STREAMING})

__all__ = ["AUDIO_PHASES", "SessionPhase"]
