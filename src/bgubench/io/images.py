"""Image file I/O for harness buffers.

Decoding and encoding are delegated to OpenCV, read with
``IMREAD_UNCHANGED`` so 16-bit colour images keep their full depth. Loaded
images are converted to float32 in [0, 1] and to RGB channel order. Float
buffers are clamped and quantised to 16 bits for formats that store them
(PNG, TIFF, PNM) and to 8 bits otherwise. ``.npy`` files bypass OpenCV and
round-trip the raw array, which makes them the lossless choice for golden
fixtures.
"""

import logging
from pathlib import Path
from typing import Union

import cv2
import jax.numpy as jnp
import numpy as np

from bgubench.core.buffer import ImageBuffer

logger = logging.getLogger(__name__)

_RAW_SUFFIX = ".npy"

# Formats OpenCV can write at 16 bits per sample.
_SIXTEEN_BIT_SUFFIXES = frozenset({".png", ".tif", ".tiff", ".pgm", ".ppm", ".pnm"})

# OpenCV stores colour as BGR(A).
_TO_RGB = {3: cv2.COLOR_BGR2RGB, 4: cv2.COLOR_BGRA2RGBA}
_FROM_RGB = {3: cv2.COLOR_RGB2BGR, 4: cv2.COLOR_RGBA2BGRA}


def _to_unit_float(array: np.ndarray) -> np.ndarray:
    """Scale integer samples by their type's full range."""
    if np.issubdtype(array.dtype, np.floating):
        return array.astype(np.float32)
    return array.astype(np.float32) / float(np.iinfo(array.dtype).max)


def _quantise(array: np.ndarray, dtype: type) -> np.ndarray:
    """Convert samples to ``dtype`` (uint8 or uint16) over its full range."""
    if array.dtype == dtype:
        return array
    target_max = float(np.iinfo(dtype).max)
    if np.issubdtype(array.dtype, np.floating):
        scaled = np.clip(array, 0.0, 1.0) * target_max
    else:
        scaled = array.astype(np.float64) * (target_max / np.iinfo(array.dtype).max)
    return np.round(scaled).astype(dtype)


def load_and_convert_image(path: Union[str, Path]) -> ImageBuffer:
    """Load an image file as a float32 buffer in [0, 1].

    Args:
        path: Image file readable by OpenCV, or a ``.npy`` array.

    Returns:
        ImageBuffer with one channel per image band, colour in RGB order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If OpenCV cannot decode the file.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    if path.suffix == _RAW_SUFFIX:
        array = np.load(path)
    else:
        array = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        if array is None:
            raise ValueError(f"Cannot decode image: {path}")
        if array.ndim == 3 and array.shape[2] in _TO_RGB:
            array = cv2.cvtColor(array, _TO_RGB[array.shape[2]])

    buffer = ImageBuffer.from_array(_to_unit_float(array), dtype=jnp.float32)
    logger.debug("Loaded %s (%s) as %r", path, array.dtype, buffer)
    return buffer


def convert_and_save_image(buffer: ImageBuffer, path: Union[str, Path]) -> None:
    """Write a buffer to an image file.

    Float buffers are clamped to [0, 1] and quantised to 16 bits where the
    format allows it, 8 bits otherwise. ``uint8`` buffers are written as-is;
    wider integer types are kept at 16 bits or rescaled to 8 bits the same
    way. ``.npy`` paths store the array unchanged. The buffer is synced
    before it is read.

    Args:
        buffer: Buffer to save.
        path: Destination file; parent directories are created.

    Raises:
        ValueError: If OpenCV cannot encode to the requested format.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    array = buffer.device_sync().copy_to_host()

    if path.suffix == _RAW_SUFFIX:
        np.save(path, array)
        logger.info("Saved raw %r to %s", buffer, path)
        return

    if array.dtype == np.uint8:
        depth = np.uint8
    elif path.suffix.lower() in _SIXTEEN_BIT_SUFFIXES:
        depth = np.uint16
    else:
        depth = np.uint8
    array = _quantise(array, depth)

    channels = array.shape[2]
    if channels in _FROM_RGB:
        array = cv2.cvtColor(array, _FROM_RGB[channels])
    elif channels == 1:
        array = array[:, :, 0]

    if not cv2.imwrite(str(path), array):
        raise ValueError(f"Cannot encode image: {path}")
    logger.info("Saved %r to %s at %d bits", buffer, path, array.dtype.itemsize * 8)
