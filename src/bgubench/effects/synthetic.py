"""Synthetic low-resolution effect used as the transfer reference.

Bilateral guided upsampling cheaply transfers an effect computed on a
low-resolution image onto the full-resolution original. To benchmark it we
need a (before, after) low-resolution pair: ``before`` is a box-filtered
downsample of the input and ``after`` is that image pushed through a
straw-man black-box effect (sharpen, smoothstep contrast boost restricted to
the image centre, vignette). The guided upsampler captures the contrast
boost and vignette well and the high-frequency sharpening poorly.

The arithmetic here must reproduce the stored golden fixtures, so every step
runs in float32 and the mask centre uses floor division, exactly as the
fixtures were generated.

All functions operate on HWC arrays; ``generate_low_res_pair`` wraps them in
``ImageBuffer`` objects.
"""

import logging
from dataclasses import dataclass

import jax
import jax.numpy as jnp

from bgubench.core.buffer import ImageBuffer
from bgubench.typing import FloatImage

logger = logging.getLogger(__name__)

# Low-res dimensions are floor(high-res dimension / DOWNSAMPLE_FACTOR).
DOWNSAMPLE_FACTOR: int = 8

# The mask centre sits at (W / 16, H / 16), i.e. half the low-res extent.
_MASK_CENTER_DIVISOR: int = 2 * DOWNSAMPLE_FACTOR


@dataclass
class LowResPair:
    """Low-resolution reference pair derived from one high-resolution input.

    Attributes:
        before: Box-downsampled input.
        after: ``before`` with the synthetic effect applied.
    """

    before: ImageBuffer
    after: ImageBuffer


def box_downsample(high_res: FloatImage, factor: int = DOWNSAMPLE_FACTOR) -> FloatImage:
    """Average each ``factor x factor`` block of the input.

    Rows and columns beyond the last complete block are ignored.
    """
    height, width, channels = high_res.shape
    low_h, low_w = height // factor, width // factor
    blocks = high_res[: low_h * factor, : low_w * factor].astype(jnp.float32)
    blocks = blocks.reshape(low_h, factor, low_w, factor, channels)
    return blocks.sum(axis=(1, 3)) / (factor * factor)


def sharpen(image: FloatImage) -> FloatImage:
    """Unsharp-style sharpen against the 4-neighbourhood mean.

    Border pixels are passed through unchanged.
    """
    centre = image[1:-1, 1:-1]
    neighbours = image[1:-1, :-2] + image[1:-1, 2:] + image[:-2, 1:-1] + image[2:, 1:-1]
    return image.at[1:-1, 1:-1].set(2 * centre - neighbours / 4)


def smoothstep(val: jax.Array) -> jax.Array:
    """Cubic S-curve ``val^2 (3 - 2 val)`` used for contrast enhancement."""
    return val * val * (3 - 2 * val)


def radial_mask(x: jax.Array, y: jax.Array, high_res_width: int, high_res_height: int) -> jax.Array:
    """Distance from the low-res image centre, in units of the mask radius.

    The value is 0 at the centre and grows without bound towards the
    corners; it is intentionally not clamped to [0, 1].
    """
    center_x = high_res_width // _MASK_CENTER_DIVISOR
    center_y = high_res_height // _MASK_CENTER_DIVISOR
    radius = jnp.float32(min(center_x, center_y))
    mask_x = (x - center_x).astype(jnp.float32) / radius
    mask_y = (y - center_y).astype(jnp.float32) / radius
    return jnp.sqrt(mask_x * mask_x + mask_y * mask_y)


def blend_and_vignette(val: jax.Array, boosted: jax.Array, mask: jax.Array) -> jax.Array:
    """Blend boosted/original by ``mask``, vignette, and clamp to [0, 1]."""
    val = val * mask + boosted * (1 - mask)
    val = val * ((2 - mask) / 2)
    return jnp.clip(val, 0.0, 1.0)


def apply_black_box_effect(
    before: FloatImage, high_res_width: int, high_res_height: int
) -> FloatImage:
    """Run the full sharpen/boost/mask/vignette chain on a low-res image."""
    low_h, low_w, _ = before.shape
    val = sharpen(before)
    boosted = smoothstep(val)
    mask = ImageBuffer(low_w, low_h, 1).for_each_element(
        lambda x, y, c: radial_mask(x, y, high_res_width, high_res_height)
    )
    return blend_and_vignette(val, boosted, mask.data)


def generate_low_res_pair(high_res: ImageBuffer) -> LowResPair:
    """Derive the low-resolution (before, after) pair from a high-res input.

    Args:
        high_res: Full-resolution input image.

    Returns:
        LowResPair whose buffers are ``floor(W / 8) x floor(H / 8)`` with the
        input's channel count.

    Raises:
        ValueError: If the input is smaller than 16 pixels in either
            dimension, which leaves the radial mask with a zero radius.
    """
    width, height = high_res.width, high_res.height
    if min(width, height) < _MASK_CENTER_DIVISOR:
        raise ValueError(
            f"High-res input must be at least {_MASK_CENTER_DIVISOR}x{_MASK_CENTER_DIVISOR}, "
            f"got {width}x{height}"
        )

    before = ImageBuffer.from_array(box_downsample(high_res.data), dtype=jnp.float32)
    after = ImageBuffer(before.width, before.height, before.channels, dtype=jnp.float32)
    after.assign(apply_black_box_effect(before.data, width, height))

    logger.debug(
        "Generated %dx%dx%d low-res pair from %dx%d input",
        before.width,
        before.height,
        before.channels,
        width,
        height,
    )
    return LowResPair(before=before, after=after)
