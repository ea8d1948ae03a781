"""Capture-rate float32 blocks -> 16kHz PCM16 frames ready for the relay."""

from __future__ import annotations

import base64

import numpy as np

from relay.config.audio import FRAME_SAMPLES, TARGET_SAMPLE_RATE_HZ

from .pcm import float_to_pcm16
from .framer import FrameAccumulator
from .resample import downsample_buffer


class AudioFrameProducer:
    """Frame, downsample and PCM16-encode microphone audio.

    Frames are cut at the capture rate (`frame_samples` input samples) and then
    downsampled, so each emitted frame covers the same wall-clock duration.
    """

    def __init__(
        self,
        *,
        input_rate: int,
        output_rate: int = TARGET_SAMPLE_RATE_HZ,
        frame_samples: int = FRAME_SAMPLES,
    ) -> None:
        self.input_rate = int(input_rate)
        self.output_rate = int(output_rate)
        self._framer = FrameAccumulator(frame_samples)

    def _encode(self, frame: np.ndarray) -> bytes:
        return float_to_pcm16(downsample_buffer(frame, self.input_rate, self.output_rate))

    def push(self, block: np.ndarray) -> list[bytes]:
        return [self._encode(frame) for frame in self._framer.push(block)]

    def flush(self) -> bytes | None:
        tail = self._framer.flush()
        if tail is None:
            return None
        return self._encode(tail)

    @staticmethod
    def to_base64(pcm: bytes) -> str:
        return base64.b64encode(pcm).decode("ascii")


__all__ = ["AudioFrameProducer"]
