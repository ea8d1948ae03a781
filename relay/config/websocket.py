"""WebSocket protocol configuration and constants."""

from __future__ import annotations

ENV_WS_ENDPOINT_PATH = "WS_ENDPOINT_PATH"
ENV_MAX_CONCURRENT_SESSIONS = "MAX_CONCURRENT_SESSIONS"
ENV_HOST = "HOST"
ENV_PORT = "PORT"

DEFAULT_WS_ENDPOINT_PATH = "/ws"
DEFAULT_MAX_CONCURRENT_SESSIONS = 100
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000

# Outbound messages buffered per connection before new ones are dropped
WS_OUTBOUND_QUEUE_MAX_MESSAGES = 256

# Message keys
WS_KEY_TYPE = "type"
WS_KEY_AUDIO = "audio"
WS_KEY_TRANSCRIPT = "transcript"
WS_KEY_IS_SELECTION = "isSelection"
WS_KEY_TEXT = "text"
WS_KEY_IS_FINAL = "isFinal"
WS_KEY_MESSAGE = "message"

# Client -> server message types
WS_TYPE_START = "start"
WS_TYPE_AUDIO = "audio"
WS_TYPE_STOP = "stop"
WS_TYPE_GENERATE = "generate"

# Server -> client message types
WS_TYPE_STARTED = "started"
WS_TYPE_TRANSCRIPT = "transcript"
WS_TYPE_ANSWER = "answer"
WS_TYPE_ERROR = "error"
WS_TYPE_STOPPED = "stopped"

# Close codes
WS_CLOSE_BUSY_CODE = 4002

# Error messages surfaced to clients
WS_ERROR_SERVER_AT_CAPACITY = "Server cannot accept new connections. Please try again later."
WS_ERROR_ALREADY_STARTED = "Transcription already started"
WS_ERROR_START_FAILED = "Failed to start transcription"
WS_ERROR_TRANSCRIPTION = "Transcription error"

__all__ = [
    "DEFAULT_HOST",
    "DEFAULT_MAX_CONCURRENT_SESSIONS",
    "DEFAULT_PORT",
    "DEFAULT_WS_ENDPOINT_PATH",
    "ENV_HOST",
    "ENV_MAX_CONCURRENT_SESSIONS",
    "ENV_PORT",
    "ENV_WS_ENDPOINT_PATH",
    "WS_CLOSE_BUSY_CODE",
    "WS_ERROR_ALREADY_STARTED",
    "WS_ERROR_SERVER_AT_CAPACITY",
    "WS_ERROR_START_FAILED",
    "WS_ERROR_TRANSCRIPTION",
    "WS_KEY_AUDIO",
    "WS_KEY_IS_FINAL",
    "WS_KEY_IS_SELECTION",
    "WS_KEY_MESSAGE",
    "WS_KEY_TEXT",
    "WS_KEY_TRANSCRIPT",
    "WS_KEY_TYPE",
    "WS_OUTBOUND_QUEUE_MAX_MESSAGES",
    "WS_TYPE_ANSWER",
    "WS_TYPE_AUDIO",
    "WS_TYPE_ERROR",
    "WS_TYPE_GENERATE",
    "WS_TYPE_START",
    "WS_TYPE_STARTED",
    "WS_TYPE_STOP",
    "WS_TYPE_STOPPED",
    "WS_TYPE_TRANSCRIPT",
]
