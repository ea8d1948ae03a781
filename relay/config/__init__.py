"""Configuration module exports (env names and defaults only)."""

from .audio import FRAME_SAMPLES, TARGET_SAMPLE_RATE_HZ

__all__ = [
    "FRAME_SAMPLES",
    "TARGET_SAMPLE_RATE_HZ",
]
