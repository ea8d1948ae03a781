"""Logging configuration (env names and defaults)."""

from __future__ import annotations

ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_SHOW_THIRD_PARTY_LOGS = "SHOW_THIRD_PARTY_LOGS"

DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Chatty at INFO/DEBUG; capped unless SHOW_THIRD_PARTY_LOGS is set.
THIRD_PARTY_LOGGERS: tuple[str, ...] = ("websockets", "httpx", "httpcore")

__all__ = [
    "DEFAULT_LOG_LEVEL",
    "ENV_LOG_LEVEL",
    "ENV_SHOW_THIRD_PARTY_LOGS",
    "LOG_FORMAT",
    "THIRD_PARTY_LOGGERS",
]
