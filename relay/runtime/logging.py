"""Logging initialization."""

from __future__ import annotations

import os
import logging

from relay.config.logging import (
    LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    ENV_LOG_LEVEL,
    THIRD_PARTY_LOGGERS,
    ENV_SHOW_THIRD_PARTY_LOGS,
)


def configure_logging() -> None:
    level = (os.getenv(ENV_LOG_LEVEL) or DEFAULT_LOG_LEVEL).strip().upper()
    # websockets logs every frame at DEBUG; keep provider clients quiet unless asked.
    if (os.getenv(ENV_SHOW_THIRD_PARTY_LOGS) or "").strip().lower() not in {"1", "true", "yes"}:
        for name in THIRD_PARTY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)


__all__ = ["configure_logging"]
