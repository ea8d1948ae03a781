"""Block-average downsampling.

This is a plain box filter, not an anti-aliasing resampler: energy above the
output Nyquist frequency folds back into the band.
"""

from __future__ import annotations

import numpy as np


def _round_half_up(values: np.ndarray) -> np.ndarray:
    # Half-up rounding; np.round would round half to even.
    return np.floor(values + 0.5).astype(np.int64)


def downsample_buffer(buffer: np.ndarray, input_rate: int, output_rate: int) -> np.ndarray:
    """Downsample `buffer` from `input_rate` to `output_rate` by block averaging.

    Output sample i is the mean of the input samples whose index falls in
    [round(i * ratio), round((i + 1) * ratio)), with ratio = input / output.
    Equal rates return the input unchanged.
    """
    if input_rate == output_rate:
        return buffer
    if input_rate <= 0 or output_rate <= 0:
        raise ValueError("sample rates must be > 0")
    if input_rate < output_rate:
        raise ValueError(f"cannot upsample {input_rate}Hz -> {output_rate}Hz with block averaging")

    samples = np.asarray(buffer, dtype=np.float32)
    ratio = input_rate / output_rate
    new_length = int(np.floor(samples.size / ratio + 0.5))
    if new_length == 0:
        return np.zeros(0, dtype=np.float32)

    index = np.arange(new_length, dtype=np.float64)
    starts = np.minimum(_round_half_up(index * ratio), samples.size)
    ends = np.minimum(_round_half_up((index + 1) * ratio), samples.size)
    counts = ends - starts

    cumulative = np.concatenate(([0.0], np.cumsum(samples, dtype=np.float64)))
    sums = cumulative[ends] - cumulative[starts]
    out = np.divide(sums, counts, out=np.zeros(new_length, dtype=np.float64), where=counts > 0)
    return out.astype(np.float32)


__all__ = ["downsample_buffer"]
