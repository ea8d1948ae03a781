"""Audio framing constants shared by the relay and its clients."""

from __future__ import annotations

# The STT provider expects PCM16 mono audio at 16kHz.
TARGET_SAMPLE_RATE_HZ: int = 16000

# Samples buffered at the capture rate before a frame is resampled and sent.
FRAME_SAMPLES: int = 4096

PCM16_MAX_POSITIVE: int = 0x7FFF
PCM16_MAX_NEGATIVE: int = 0x8000

__all__ = [
    "FRAME_SAMPLES",
    "PCM16_MAX_NEGATIVE",
    "PCM16_MAX_POSITIVE",
    "TARGET_SAMPLE_RATE_HZ",
]
