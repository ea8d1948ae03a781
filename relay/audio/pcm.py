"""Float32 -> signed 16-bit little-endian PCM."""

from __future__ import annotations

import numpy as np

from relay.config.audio import PCM16_MAX_NEGATIVE, PCM16_MAX_POSITIVE


def float_to_pcm16(samples: np.ndarray) -> bytes:
    clipped = np.clip(np.asarray(samples, dtype=np.float64), -1.0, 1.0)
    # Asymmetric scale so both -1.0 and 1.0 hit the int16 extremes.
    scaled = np.where(clipped < 0, clipped * PCM16_MAX_NEGATIVE, clipped * PCM16_MAX_POSITIVE)
    return np.trunc(scaled).astype("<i2").tobytes()


__all__ = ["float_to_pcm16"]
