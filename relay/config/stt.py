"""Speech-to-text provider settings (env names and defaults)."""

from __future__ import annotations

from .audio import TARGET_SAMPLE_RATE_HZ

ENV_ASSEMBLYAI_STREAMING_URL = "ASSEMBLYAI_STREAMING_URL"
ENV_STT_SAMPLE_RATE_HZ = "STT_SAMPLE_RATE_HZ"
ENV_STT_FORMAT_TURNS = "STT_FORMAT_TURNS"
ENV_STT_CONNECT_TIMEOUT_S = "STT_CONNECT_TIMEOUT_S"
ENV_STT_STOP_GRACE_S = "STT_STOP_GRACE_S"
ENV_TRANSCRIPT_BUFFER_SECONDS = "TRANSCRIPT_BUFFER_SECONDS"

DEFAULT_ASSEMBLYAI_STREAMING_URL = "wss://streaming.assemblyai.com/v3/ws"
DEFAULT_STT_SAMPLE_RATE_HZ = TARGET_SAMPLE_RATE_HZ
DEFAULT_STT_FORMAT_TURNS = False
DEFAULT_STT_CONNECT_TIMEOUT_S = 10.0

# Time between the polite Terminate message and the hard close, so the
# provider can flush its last Turn/Termination events.
DEFAULT_STT_STOP_GRACE_S = 0.5

# Trailing window of final segments kept as a fallback transcript source.
DEFAULT_TRANSCRIPT_BUFFER_SECONDS = 60.0

# Provider message vocabulary (AssemblyAI v3 streaming).
STT_MSG_BEGIN = "Begin"
STT_MSG_TURN = "Turn"
STT_MSG_TERMINATION = "Termination"
STT_MSG_TERMINATE = "Terminate"

__all__ = [
    "DEFAULT_ASSEMBLYAI_STREAMING_URL",
    "DEFAULT_STT_CONNECT_TIMEOUT_S",
    "DEFAULT_STT_FORMAT_TURNS",
    "DEFAULT_STT_SAMPLE_RATE_HZ",
    "DEFAULT_STT_STOP_GRACE_S",
    "DEFAULT_TRANSCRIPT_BUFFER_SECONDS",
    "ENV_ASSEMBLYAI_STREAMING_URL",
    "ENV_STT_CONNECT_TIMEOUT_S",
    "ENV_STT_FORMAT_TURNS",
    "ENV_STT_SAMPLE_RATE_HZ",
    "ENV_STT_STOP_GRACE_S",
    "ENV_TRANSCRIPT_BUFFER_SECONDS",
    "STT_MSG_BEGIN",
    "STT_MSG_TERMINATE",
    "STT_MSG_TERMINATION",
    "STT_MSG_TURN",
]
