"""Golden-fixture validation of the low-resolution intermediates.

Timing an operator is only meaningful if the reference pipeline feeding it
is correct, so the harness compares the computed before/after buffers with
stored fixtures before any benchmark runs. Every coordinate is checked and
every mismatch is reported, so one run surfaces the full disagreement set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import jax.numpy as jnp
import numpy as np

from bgubench.core.buffer import ImageBuffer

logger = logging.getLogger(__name__)

DEFAULT_EPSILON: float = 1e-4


@dataclass(frozen=True)
class Mismatch:
    """One coordinate where the computed value left the tolerance band."""

    x: int
    y: int
    c: int
    reference: float
    computed: float

    def format(self) -> str:
        """Render as the ``x y c: reference vs computed`` diagnostic line."""
        return f"{self.x} {self.y} {self.c}: {self.reference:f} vs {self.computed:f}"


@dataclass
class ValidationResult:
    """Outcome of comparing one buffer with its golden fixture.

    Attributes:
        name: Label of the fixture that was compared.
        mismatches: Every out-of-tolerance coordinate, in x-fastest order.
        epsilon: Absolute tolerance that was applied.
    """

    name: str
    mismatches: list[Mismatch] = field(default_factory=list)
    epsilon: float = DEFAULT_EPSILON

    @property
    def passed(self) -> bool:
        return not self.mismatches

    def __bool__(self) -> bool:
        return self.passed


class ValidationFailure(Exception):
    """Raised when a computed buffer disagrees with its golden fixture."""

    def __init__(self, results: list[ValidationResult]):
        self.results = results
        failed = [r for r in results if not r.passed]
        total = sum(len(r.mismatches) for r in failed)
        names = ", ".join(r.name for r in failed)
        super().__init__(f"{total} golden mismatch(es) in: {names}")


@dataclass(frozen=True)
class GoldenFixture:
    """Expected values loaded from an external resource.

    The values are held as a read-only host array; ``buffer`` hands out a
    fresh device copy, so writing to it never alters the fixture.
    """

    name: str
    path: Path
    array: np.ndarray

    def __post_init__(self):
        array = np.array(self.array, copy=True)
        array.flags.writeable = False
        object.__setattr__(self, "array", array)

    @property
    def buffer(self) -> ImageBuffer:
        return ImageBuffer.from_array(self.array)

    @classmethod
    def load(
        cls, path: str | Path, loader: Callable[[str | Path], ImageBuffer], name: str | None = None
    ) -> GoldenFixture:
        """Load a fixture with the given image loader.

        Raises:
            FileNotFoundError: If the fixture does not exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Golden fixture not found: {path}")
        return cls(name=name or path.stem, path=path, array=loader(path).copy_to_host())


def validate_against_golden(
    computed: ImageBuffer,
    reference: ImageBuffer,
    epsilon: float = DEFAULT_EPSILON,
    name: str = "buffer",
    on_mismatch: Callable[[Mismatch], None] | None = None,
) -> ValidationResult:
    """Compare ``computed`` with ``reference`` elementwise.

    A coordinate fails when ``|reference - computed| > epsilon`` or when
    either side is NaN. The verdict does not depend on argument order.

    Args:
        computed: Buffer produced by the pipeline.
        reference: Golden buffer of the same shape.
        epsilon: Absolute tolerance.
        name: Label used in the result and log messages.
        on_mismatch: Called once per mismatch, in x-fastest order.

    Returns:
        ValidationResult listing every mismatch.

    Raises:
        ValueError: If the buffers differ in shape.
    """
    if computed.shape != reference.shape:
        raise ValueError(
            f"Cannot validate {name}: computed shape {computed.shape} "
            f"!= reference shape {reference.shape}"
        )

    computed_values = computed.data.astype(jnp.float32)
    reference_values = reference.data.astype(jnp.float32)
    within = jnp.abs(reference_values - computed_values) <= epsilon
    x, y, c = computed.coordinates()

    # Visit order matches (c, y, x) iteration with x fastest.
    bad = np.asarray(~within).transpose(2, 0, 1)
    order = np.nonzero(bad)
    picks = [np.asarray(axis).transpose(2, 0, 1)[order] for axis in (x, y, c)]
    refs = np.asarray(reference_values).transpose(2, 0, 1)[order]
    comps = np.asarray(computed_values).transpose(2, 0, 1)[order]

    result = ValidationResult(name=name, epsilon=epsilon)
    for xi, yi, ci, ref, comp in zip(*picks, refs, comps):
        mismatch = Mismatch(int(xi), int(yi), int(ci), float(ref), float(comp))
        result.mismatches.append(mismatch)
        if on_mismatch is not None:
            on_mismatch(mismatch)

    if result.passed:
        logger.info("Golden check for %s passed (epsilon=%g)", name, epsilon)
    else:
        logger.warning(
            "Golden check for %s failed at %d coordinate(s)", name, len(result.mismatches)
        )
    return result
