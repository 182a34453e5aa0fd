"""Synthetic raw burst input for the burst camera pipeline benchmark.

The burst scenario has no golden gate: it only needs a reproducible stack of
raw sensor frames and the fixed camera parameters the pipeline consumes.
Frames are drawn from an explicitly passed seed so repeated runs time the
operators on identical data.
"""

from dataclasses import dataclass

import jax
import jax.numpy as jnp

from bgubench.core.buffer import ImageBuffer
from bgubench.typing import RawFrames


# Quarter-resolution crop of the reference 5218x3482 sensor.
DEFAULT_BURST_WIDTH: int = 5218 // 4
DEFAULT_BURST_HEIGHT: int = 3482 // 4
DEFAULT_NUM_FRAMES: int = 7

# RGB output of the pipeline.
OUTPUT_CHANNELS: int = 3


@dataclass(frozen=True)
class BurstParameters:
    """Camera constants passed to every burst operator invocation."""

    black_point: int = 2050
    white_point: int = 15464
    white_balance_r: float = 2.29102
    white_balance_g0: float = 1.0
    white_balance_g1: float = 1.0
    white_balance_b: float = 1.26855
    compression: float = 3.8
    gain: float = 1.1

    def __post_init__(self):
        if not 0 <= self.black_point < self.white_point <= 0xFFFF:
            raise ValueError(
                "Expected 0 <= black_point < white_point <= 65535, got "
                f"black_point={self.black_point}, white_point={self.white_point}"
            )

    def as_args(self) -> tuple:
        """Positional arguments in burst operator order."""
        return (
            self.black_point,
            self.white_point,
            self.white_balance_r,
            self.white_balance_g0,
            self.white_balance_g1,
            self.white_balance_b,
            self.compression,
            self.gain,
        )


def make_burst_frames(
    width: int = DEFAULT_BURST_WIDTH,
    height: int = DEFAULT_BURST_HEIGHT,
    num_frames: int = DEFAULT_NUM_FRAMES,
    seed: int = 0,
) -> ImageBuffer:
    """Generate ``num_frames`` uniformly random ``uint16`` raw frames.

    The result depends only on the arguments; the same seed always yields
    bit-identical frames.

    Returns:
        ``width x height x num_frames`` uint16 buffer, one frame per channel.
    """
    frames = ImageBuffer(width, height, num_frames, dtype=jnp.uint16)
    key = jax.random.key(seed)

    def draw(values: RawFrames) -> RawFrames:
        return jax.random.bits(key, values.shape, jnp.uint16)

    return frames.for_each_value(draw)


def make_burst_output(width: int, height: int) -> ImageBuffer:
    """Allocate the ``uint8`` RGB buffer burst operators write into."""
    return ImageBuffer(width, height, OUTPUT_CHANNELS, dtype=jnp.uint8)
