"""Client-side audio frame production (capture rate float32 -> 16kHz PCM16 frames)."""

from .pcm import float_to_pcm16
from .framer import FrameAccumulator
from .producer import AudioFrameProducer
from .resample import downsample_buffer

__all__ = ["AudioFrameProducer", "FrameAccumulator", "downsample_buffer", "float_to_pcm16"]
