"""bgubench: a correctness-checked, multi-variant benchmark harness.

bgubench times interchangeable implementations of an image-space transfer
operator (bilateral guided upsampling) against each other. Before any timing
it derives a low-resolution before/after pair from the input with a
deterministic synthetic effect and checks that pair against golden fixtures.
"""

from bgubench.benchmarking import BenchReport, BenchRunner, Variant, VariantId, VariantRegistry
from bgubench.core.buffer import ImageBuffer
from bgubench.effects.synthetic import LowResPair, generate_low_res_pair
from bgubench.validation.golden import ValidationFailure, validate_against_golden

__version__ = "0.1.0"

__all__ = [
    "BenchReport",
    "BenchRunner",
    "ImageBuffer",
    "LowResPair",
    "ValidationFailure",
    "Variant",
    "VariantId",
    "VariantRegistry",
    "generate_low_res_pair",
    "validate_against_golden",
]
