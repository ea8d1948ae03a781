"""Fixed-size frame accumulation."""

from __future__ import annotations

import numpy as np

from relay.config.audio import FRAME_SAMPLES


class FrameAccumulator:
    """Buffer arbitrary-sized sample blocks into frames of exactly `frame_samples`."""

    def __init__(self, frame_samples: int = FRAME_SAMPLES) -> None:
        if frame_samples <= 0:
            raise ValueError("frame_samples must be > 0")
        self.frame_samples = int(frame_samples)
        self._pending = np.zeros(0, dtype=np.float32)

    @property
    def pending_samples(self) -> int:
        return int(self._pending.size)

    def push(self, block: np.ndarray) -> list[np.ndarray]:
        data = np.asarray(block, dtype=np.float32).reshape(-1)
        if self._pending.size:
            data = np.concatenate((self._pending, data))

        n_frames = data.size // self.frame_samples
        cut = n_frames * self.frame_samples
        frames = [data[i : i + self.frame_samples].copy() for i in range(0, cut, self.frame_samples)]
        self._pending = data[cut:].copy()
        return frames

    def flush(self) -> np.ndarray | None:
        if not self._pending.size:
            return None
        tail = self._pending
        self._pending = np.zeros(0, dtype=np.float32)
        return tail


__all__ = ["FrameAccumulator"]
