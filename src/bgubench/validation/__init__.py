"""Golden-fixture validation for bgubench."""

from bgubench.validation.golden import (
    DEFAULT_EPSILON,
    GoldenFixture,
    Mismatch,
    ValidationFailure,
    ValidationResult,
    validate_against_golden,
)


__all__ = [
    "DEFAULT_EPSILON",
    "GoldenFixture",
    "Mismatch",
    "ValidationFailure",
    "ValidationResult",
    "validate_against_golden",
]
