"""Dense image buffer addressed by (x, y, channel).

The harness passes every image between stages as an ``ImageBuffer``: the
high-resolution input, the low-resolution before/after pair and the
high-resolution output all share this container. Storage is a JAX array in
HWC layout (``height x width x channels``), matching the convention of the
JAX image APIs, while element access uses the ``(x, y, c)`` order.

Because JAX dispatches work asynchronously, a buffer written by an operator
may not hold its final contents yet. ``device_sync()`` is the completion
barrier; ``copy_to_host()`` returns a materialised numpy array.
"""

from __future__ import annotations

from typing import Any, Callable

import jax
import jax.numpy as jnp
import numpy as np

from bgubench.typing import ImageArray


CoordinateFn = Callable[[jax.Array, jax.Array, jax.Array], Any]


class ImageBuffer:
    """Fixed-size, channel-indexed image container.

    Args:
        width: Number of columns (x extent).
        height: Number of rows (y extent).
        channels: Number of channels (c extent).
        dtype: Sample type, float32 for the effect pipeline and uint16/uint8
            for raw sensor input and encoded output.

    Raises:
        ValueError: If any dimension is not a positive integer.
    """

    def __init__(
        self,
        width: int,
        height: int,
        channels: int = 1,
        dtype: Any = jnp.float32,
    ):
        for name, extent in (("width", width), ("height", height), ("channels", channels)):
            if not isinstance(extent, (int, np.integer)) or extent <= 0:
                raise ValueError(f"ImageBuffer {name} must be a positive integer, got {extent!r}")
        self._data: jax.Array = jnp.zeros((int(height), int(width), int(channels)), dtype=dtype)

    @classmethod
    def from_array(cls, array: Any, dtype: Any = None) -> ImageBuffer:
        """Wrap an HWC (or HW grayscale) array.

        Args:
            array: Array-like with shape ``(height, width)`` or
                ``(height, width, channels)``.
            dtype: Optional sample type to cast to.

        Returns:
            A new buffer holding a copy of ``array``.
        """
        data = jnp.asarray(array, dtype=dtype)
        if data.ndim == 2:
            data = data[:, :, None]
        if data.ndim != 3:
            raise ValueError(f"Expected a 2D or 3D image array, got shape {data.shape}")
        height, width, channels = data.shape
        buffer = cls(width, height, channels, dtype=data.dtype)
        buffer._data = data
        return buffer

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def channels(self) -> int:
        return self._data.shape[2]

    @property
    def dtype(self) -> Any:
        return self._data.dtype

    @property
    def shape(self) -> tuple[int, int, int]:
        """Storage shape ``(height, width, channels)``."""
        return self._data.shape

    @property
    def data(self) -> ImageArray:
        """Underlying HWC array."""
        return self._data

    def __getitem__(self, index: tuple[int, int, int]) -> jax.Array:
        x, y, c = index
        if not (0 <= x < self.width and 0 <= y < self.height and 0 <= c < self.channels):
            raise IndexError(
                f"Coordinate ({x}, {y}, {c}) outside buffer of size "
                f"{self.width}x{self.height}x{self.channels}"
            )
        return self._data[y, x, c]

    def __repr__(self) -> str:
        return (
            f"ImageBuffer(width={self.width}, height={self.height}, "
            f"channels={self.channels}, dtype={self.dtype})"
        )

    def coordinates(self) -> tuple[jax.Array, jax.Array, jax.Array]:
        """Return broadcast ``(x, y, c)`` index arrays, each of storage shape."""
        y, x, c = jnp.meshgrid(
            jnp.arange(self.height),
            jnp.arange(self.width),
            jnp.arange(self.channels),
            indexing="ij",
        )
        return x, y, c

    def sample(self, x: Any, y: Any, c: Any) -> jax.Array:
        """Gather values at (possibly array-valued) coordinates."""
        return self._data[y, x, c]

    def fill(self, value: Any) -> ImageBuffer:
        """Set every element to ``value``."""
        self._data = jnp.full(self.shape, value, dtype=self.dtype)
        return self

    def for_each_element(self, fn: CoordinateFn) -> ImageBuffer:
        """Recompute every element from its coordinates.

        ``fn`` receives the ``(x, y, c)`` coordinate arrays from
        :meth:`coordinates` and returns the new values, either as an array
        of storage shape or anything broadcastable to it. Every coordinate
        is visited exactly once; ``fn`` may read this or other buffers (via
        :meth:`sample`) but must not depend on visiting order.
        """
        x, y, c = self.coordinates()
        values = jnp.asarray(fn(x, y, c), dtype=self.dtype)
        self._data = jnp.broadcast_to(values, self.shape)
        return self

    def for_each_value(self, fn: Callable[[jax.Array], Any]) -> ImageBuffer:
        """Map ``fn`` over the stored values."""
        self._data = jnp.asarray(fn(self._data), dtype=self.dtype).reshape(self.shape)
        return self

    def assign(self, values: Any) -> ImageBuffer:
        """Replace the contents with ``values`` of identical storage shape.

        This is how operator implementations write their output buffer.
        """
        values = jnp.asarray(values, dtype=self.dtype)
        if values.shape != self.shape:
            raise ValueError(f"Cannot assign array of shape {values.shape} to buffer {self.shape}")
        self._data = values
        return self

    def device_sync(self) -> ImageBuffer:
        """Block until all pending writes to this buffer have completed."""
        self._data.block_until_ready()
        return self

    def copy_to_host(self) -> np.ndarray:
        """Return the contents as a host numpy array in HWC layout."""
        return np.asarray(jax.device_get(self._data))
