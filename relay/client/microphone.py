"""Microphone capture with sounddevice."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator

import numpy as np
import sounddevice as sd

from relay.config.audio import FRAME_SAMPLES

logger = logging.getLogger(__name__)

CHANNELS = 1
DTYPE = "float32"


def default_input_rate(device: int | str | None = None) -> int:
    info = sd.query_devices(device, kind="input")
    return int(info["default_samplerate"])


class MicrophoneStream:
    """Mono float32 blocks at the device's native rate.

    The PortAudio callback runs on its own thread; blocks are handed to the
    event loop with `call_soon_threadsafe`.
    """

    def __init__(
        self,
        *,
        device: int | str | None = None,
        sample_rate: int | None = None,
        blocksize: int = FRAME_SAMPLES,
        max_queued_blocks: int = 64,
    ) -> None:
        self.device = device
        self.sample_rate = int(sample_rate or default_input_rate(device))
        self.blocksize = int(blocksize)
        self._queue: asyncio.Queue[np.ndarray] = asyncio.Queue(maxsize=max_queued_blocks)
        self._loop: asyncio.AbstractEventLoop | None = None
        self._stream: sd.InputStream | None = None
        self.dropped_blocks = 0

    def _enqueue(self, block: np.ndarray) -> None:
        try:
            self._queue.put_nowait(block)
        except asyncio.QueueFull:
            self.dropped_blocks += 1

    def _callback(self, indata: np.ndarray, frames: int, time_info, status) -> None:
        if status:
            logger.warning("audio input status: %s", status)
        if self._loop is None:
            return
        self._loop.call_soon_threadsafe(self._enqueue, indata[:, 0].copy())

    def start(self) -> None:
        if self._stream is not None:
            return
        self._loop = asyncio.get_running_loop()
        self._stream = sd.InputStream(
            device=self.device,
            channels=CHANNELS,
            samplerate=self.sample_rate,
            dtype=DTYPE,
            latency="low",
            blocksize=self.blocksize,
            callback=self._callback,
        )
        self._stream.start()
        logger.info("microphone capture started at %d Hz", self.sample_rate)

    def stop(self) -> None:
        stream = self._stream
        self._stream = None
        if stream is None:
            return
        stream.stop()
        stream.close()
        logger.info("microphone capture stopped (dropped_blocks=%d)", self.dropped_blocks)

    async def blocks(self) -> AsyncIterator[np.ndarray]:
        while self._stream is not None:
            yield await self._queue.get()


__all__ = ["MicrophoneStream", "default_input_rate"]
