"""Type definitions for bgubench.

Provides array aliases for the image buffers used throughout the harness and
the callable protocols every benchmarked operator implementation satisfies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol, TypeAlias, runtime_checkable

import jax
from jaxtyping import Float, Shaped, UInt16

if TYPE_CHECKING:
    from bgubench.core.buffer import ImageBuffer

# Image arrays are stored height-major (HWC), see ImageBuffer.
ImageArray: TypeAlias = Shaped[jax.Array, "height width channels"]
FloatImage: TypeAlias = Float[jax.Array, "height width channels"]
RawFrames: TypeAlias = UInt16[jax.Array, "height width frames"]

# Zero-argument unit of work and completion barrier.
WorkFn: TypeAlias = Callable[[], None]
SyncFn: TypeAlias = Callable[[], None]


@runtime_checkable
class TransferOperator(Protocol):
    """Bilateral guided upsampling operator contract.

    Implementations transfer the low-resolution ``low_res_in -> low_res_out``
    effect onto ``high_res_in`` and write the result into ``high_res_out``.
    They may return before the work has finished on the device; callers
    must call ``high_res_out.device_sync()`` before reading the output.
    """

    def __call__(
        self,
        r_sigma: float,
        s_sigma: int,
        low_res_in: ImageBuffer,
        low_res_out: ImageBuffer,
        high_res_in: ImageBuffer,
        high_res_out: ImageBuffer,
    ) -> None: ...


@runtime_checkable
class BurstOperator(Protocol):
    """Burst camera pipeline contract.

    Merges a stack of raw ``uint16`` frames into a ``uint8`` RGB output
    buffer, written in place.
    """

    def __call__(
        self,
        inputs: ImageBuffer,
        black_point: int,
        white_point: int,
        white_balance_r: float,
        white_balance_g0: float,
        white_balance_g1: float,
        white_balance_b: float,
        compression: float,
        gain: float,
        output: ImageBuffer,
    ) -> None: ...
