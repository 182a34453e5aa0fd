"""Shared test factories for benchmarking tests.

Provides a TimingSample factory and fake operators that record their calls
and write a recognisable value into their output buffer.
"""

from collections.abc import Callable

import pytest

from bgubench.benchmarking.timing import TimingSample
from bgubench.core.buffer import ImageBuffer


def make_timing(**overrides) -> TimingSample:
    """Create a TimingSample with sensible defaults."""
    defaults = {
        "wall_clock_sec": 0.5,
        "per_sample_times": [0.1, 0.12, 0.11, 0.09, 0.08],
        "best_sec": 0.08,
        "num_samples": 5,
        "iterations": 1,
    }
    defaults.update(overrides)
    return TimingSample(**defaults)


def make_transfer_operator(value: float, calls: list) -> Callable[..., None]:
    """Guided upsampling stand-in that fills ``high_res_out`` with ``value``."""

    def operator(r_sigma, s_sigma, low_res_in, low_res_out, high_res_in, high_res_out):
        calls.append((value, r_sigma, s_sigma, low_res_in, low_res_out, high_res_in, high_res_out))
        high_res_out.fill(value)

    return operator


@pytest.fixture
def call_log() -> list:
    return []


@pytest.fixture
def filter_buffers() -> dict[str, ImageBuffer]:
    return {
        "low_res_in": ImageBuffer(2, 2, 3),
        "low_res_out": ImageBuffer(2, 2, 3),
        "high_res_in": ImageBuffer(16, 16, 3),
        "high_res_out": ImageBuffer(16, 16, 3),
    }
