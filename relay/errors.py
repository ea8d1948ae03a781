"""Shared error types for the transcription relay."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing or invalid."""


class MalformedMessageError(ValueError):
    """Raised when a client frame cannot be parsed into a known message."""


class UpstreamError(Exception):
    """Raised when the speech-to-text provider connection fails."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        return f"{self.message} (status {self.status})"


class GenerationError(Exception):
    """Raised when the answer provider returns a failure."""


class GenerationTimeoutError(GenerationError):
    """Raised when the answer provider does not respond in time."""


__all__ = [
    "ConfigurationError",
    "GenerationError",
    "GenerationTimeoutError",
    "MalformedMessageError",
    "UpstreamError",
]
