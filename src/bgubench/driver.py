"""End-to-end harness runs.

``run_filter_harness`` performs one guided upsampling benchmark: load the
high-res input, derive the low-res before/after pair, gate on the golden
fixtures, time every configured operator variant over the shared buffers,
and write the high-res output. ``run_burst_harness`` does the same for the
burst camera pipeline, which has no golden gate.

Both print the user-facing report (mismatch lines, timing table) to standard
output and return the BenchReport.
"""

import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Union

import jax.numpy as jnp

from bgubench.benchmarking.runner import BenchReport, BenchRunner
from bgubench.benchmarking.variants import (
    VariantId,
    build_burst_registry,
    build_filter_registry,
    resolve_operators,
)
from bgubench.config.settings import FilterConfig, HarnessConfig
from bgubench.core.buffer import ImageBuffer
from bgubench.effects.burst import make_burst_frames, make_burst_output
from bgubench.effects.synthetic import LowResPair, generate_low_res_pair
from bgubench.io.images import convert_and_save_image, load_and_convert_image
from bgubench.validation.golden import (
    GoldenFixture,
    ValidationFailure,
    ValidationResult,
    validate_against_golden,
)

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_USAGE = 1
# Surfaces as 255 at the process boundary.
EXIT_VALIDATION_FAILURE = -1

PathLike = Union[str, Path]


def validate_low_res_pair(
    pair: LowResPair,
    filter_config: FilterConfig,
    emit: Callable[[str], Any] = print,
) -> list[ValidationResult]:
    """Check both low-res buffers against their golden fixtures.

    Every mismatch of both buffers is emitted before failing.

    Raises:
        ValidationFailure: If either buffer is out of tolerance.
        FileNotFoundError: If a fixture is missing.
    """
    checks = (
        (pair.before, filter_config.before_fixture_path),
        (pair.after, filter_config.after_fixture_path),
    )
    results = []
    for computed, fixture_path in checks:
        fixture = GoldenFixture.load(fixture_path, loader=load_and_convert_image)
        results.append(
            validate_against_golden(
                computed,
                fixture.buffer,
                epsilon=filter_config.epsilon,
                name=fixture.name,
                on_mismatch=lambda m: emit(m.format()),
            )
        )

    if not all(r.passed for r in results):
        raise ValidationFailure(results)
    return results


def run_filter_harness(
    input_path: PathLike,
    output_path: PathLike | None = None,
    config: HarnessConfig | None = None,
    operators: Mapping[VariantId, Callable[..., Any]] | None = None,
    runner: BenchRunner | None = None,
) -> BenchReport:
    """Validate the low-res pipeline and benchmark the guided upsamplers.

    Args:
        input_path: High-resolution input image.
        output_path: Where to write the high-res output; skipped if None.
        config: Harness settings; defaults if None.
        operators: Operator per variant id. If None, resolved from
            ``config.operators.filter``.
        runner: Bench runner. If None, built from ``config.bench``.

    Returns:
        BenchReport with one entry per available variant.

    Raises:
        ValidationFailure: If the low-res pair disagrees with the fixtures;
            no variant is run in that case.
    """
    config = config or HarnessConfig()
    filter_config = config.filter

    high_res_in = load_and_convert_image(input_path)
    high_res_out = ImageBuffer(
        high_res_in.width, high_res_in.height, high_res_in.channels, dtype=jnp.float32
    )

    pair = generate_low_res_pair(high_res_in)
    validate_low_res_pair(pair, filter_config)
    logger.info("Low-res pair matches golden fixtures")

    if operators is None:
        operators = resolve_operators(config.operators.filter)
    registry = build_filter_registry(
        operators,
        filter_config.r_sigma,
        filter_config.s_sigma,
        pair.before,
        pair.after,
        high_res_in,
        high_res_out,
    )

    runner = runner or BenchRunner.from_config(config.bench)
    report = runner.run(registry)
    print(report.format_table())

    # Variants may have returned before finishing their writes.
    high_res_out.device_sync()
    if output_path is not None:
        convert_and_save_image(high_res_out, output_path)
    return report


def run_burst_harness(
    output_path: PathLike | None = None,
    config: HarnessConfig | None = None,
    operators: Mapping[VariantId, Callable[..., Any]] | None = None,
    runner: BenchRunner | None = None,
) -> BenchReport:
    """Benchmark the burst camera pipeline variants on seeded raw frames.

    Args:
        output_path: Where to write the RGB output; skipped if None.
        config: Harness settings; defaults if None.
        operators: Operator per variant id. If None, resolved from
            ``config.operators.burst``.
        runner: Bench runner. If None, built from ``config.bench``.

    Returns:
        BenchReport with one entry per available variant.
    """
    config = config or HarnessConfig()
    burst_config = config.burst

    inputs = make_burst_frames(
        burst_config.width, burst_config.height, burst_config.num_frames, seed=burst_config.seed
    )
    output = make_burst_output(burst_config.width, burst_config.height)

    if operators is None:
        operators = resolve_operators(config.operators.burst)
    registry = build_burst_registry(operators, inputs, burst_config.parameters(), output)

    runner = runner or BenchRunner.from_config(config.bench)
    report = runner.run(registry)
    print(report.format_table())

    output.device_sync()
    if output_path is not None:
        convert_and_save_image(output, output_path)
    return report
