"""Timing of a single unit of work with an explicit completion barrier.

Operators may return as soon as their work is dispatched (JAX runs device
computations asynchronously), so each timed invocation is followed by the
caller's sync_fn before the clock is read. Uses time.perf_counter()
exclusively.
"""

import time
from dataclasses import dataclass
from collections.abc import Callable


@dataclass
class TimingSample:
    """Result of timing repeated invocations of one unit of work.

    Attributes:
        wall_clock_sec: Total wall-clock time across all samples, excluding
            warmup.
        per_sample_times: Seconds per invocation for each sample (the sample's
            duration divided by its iteration count).
        best_sec: Minimum of ``per_sample_times``, the reported figure.
        num_samples: Number of timed samples.
        iterations: Invocations per sample.
    """

    wall_clock_sec: float
    per_sample_times: list[float]
    best_sec: float
    num_samples: int
    iterations: int


class TimingCollector:
    """Times a zero-argument callable under a uniform protocol.

    Args:
        sync_fn: Completion barrier called after each invocation, before the
            clock is read. For JAX buffers: ``buffer.device_sync``.
            For synchronous backends: None (default, a no-op).
    """

    def __init__(self, sync_fn: Callable[[], None] | None = None):
        """Initialize TimingCollector.

        Args:
            sync_fn: Completion barrier called after each invocation.
        """
        self.sync_fn = sync_fn or (lambda: None)

    def measure_call(
        self,
        work: Callable[[], None],
        num_samples: int = 1,
        iterations: int = 1,
        warmup: int = 0,
    ) -> TimingSample:
        """Time ``work`` over ``num_samples`` samples of ``iterations`` calls.

        Args:
            work: Unit of work to time.
            num_samples: Number of timed samples (at least 1).
            iterations: Invocations per sample (at least 1).
            warmup: Untimed invocations run first, e.g. to trigger JIT
                compilation.

        Returns:
            TimingSample with timing data.
        """
        if num_samples < 1 or iterations < 1:
            raise ValueError(
                f"num_samples and iterations must be >= 1, got {num_samples} and {iterations}"
            )
        if warmup < 0:
            raise ValueError(f"warmup must be >= 0, got {warmup}")

        for _ in range(warmup):
            work()
            self.sync_fn()

        per_sample_times: list[float] = []
        overall_start = time.perf_counter()

        for _ in range(num_samples):
            sample_start = time.perf_counter()
            for _ in range(iterations):
                work()
                self.sync_fn()
            sample_end = time.perf_counter()
            per_sample_times.append((sample_end - sample_start) / iterations)

        wall_clock = time.perf_counter() - overall_start

        return TimingSample(
            wall_clock_sec=wall_clock,
            per_sample_times=per_sample_times,
            best_sec=min(per_sample_times),
            num_samples=num_samples,
            iterations=iterations,
        )
