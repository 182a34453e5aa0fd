"""Multi-way benchmark runner.

Runs every registered variant, in registration order, under the same timing
protocol and collects one duration per variant into a ``BenchReport``.
Variants run strictly one at a time; each one's completion barrier is part
of its timed region, so asynchronous backends are charged for the work they
actually do rather than for dispatching it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from bgubench.benchmarking.statistics import StatisticalAnalyzer, StatisticalResult
from bgubench.benchmarking.timing import TimingCollector, TimingSample
from bgubench.benchmarking.variants import VariantId, VariantRegistry

logger = logging.getLogger(__name__)


@dataclass
class BenchEntry:
    """Timing of one variant.

    Attributes:
        name: Variant report label.
        seconds: Best per-invocation time in seconds.
        timing: Raw timing data.
        summary: Statistics over the per-sample times.
        variant_id: Implementation the variant wraps, if known.
        p_value: Welch's t-test p-value against the first entry, when both
            have at least two samples.
    """

    name: str
    seconds: float
    timing: TimingSample
    summary: StatisticalResult
    variant_id: VariantId | None = None
    p_value: float | None = None


@dataclass
class BenchReport:
    """Ordered per-variant timings of one benchmark run."""

    entries: list[BenchEntry] = field(default_factory=list)

    def __iter__(self) -> Iterator[BenchEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def fastest(self) -> BenchEntry | None:
        if not self.entries:
            return None
        return min(self.entries, key=lambda e: e.seconds)

    def relative_to_first(self) -> dict[str, float]:
        """Speedup of each entry over the first one (>1 means faster)."""
        if not self.entries:
            return {}
        baseline = self.entries[0].seconds
        return {
            e.name: (baseline / e.seconds if e.seconds > 0 else float("inf"))
            for e in self.entries
        }

    def as_dict(self) -> dict[str, float]:
        """Map variant name to best time in seconds, in registration order."""
        return {e.name: e.seconds for e in self.entries}

    def format_table(self) -> str:
        """Render the report as a fixed-width text table.

        Multi-sample entries also show the 95% bootstrap CI of the mean and
        are flagged ``unstable`` when their coefficient of variation is at
        or above ``STABILITY_CV_THRESHOLD``.
        """
        if not self.entries:
            return "No variants registered."

        name_width = max(len("Variant"), *(len(e.name) for e in self.entries))
        header = (
            f"{'Variant':<{name_width}}  {'Best (ms)':>10}  {'Mean (ms)':>10}  "
            f"{'Samples':>7}  {'vs first':>8}"
        )
        lines = [header, "-" * len(header)]
        speedups = self.relative_to_first()
        for entry in self.entries:
            summary = entry.summary
            line = (
                f"{entry.name:<{name_width}}  {entry.seconds * 1000:>10.3f}  "
                f"{summary.mean * 1000:>10.3f}  "
                f"{entry.timing.num_samples:>7d}  {speedups[entry.name]:>7.2f}x"
            )
            if entry.timing.num_samples > 1:
                line += f"  [CI {summary.ci_lower * 1000:.3f}-{summary.ci_upper * 1000:.3f}]"
                if not summary.is_stable:
                    line += f" unstable (cv={summary.cv:.0%})"
            if entry.p_value is not None:
                line += f"  (p={entry.p_value:.3g})"
            lines.append(line)

        fastest = self.fastest
        lines.append(f"Fastest: {fastest.name}")
        return "\n".join(lines)


class BenchRunner:
    """Times each registered variant with a TimingCollector.

    Args:
        num_samples: Timed samples per variant.
        iterations: Invocations per sample.
        warmup: Untimed invocations before sampling.
        analyzer: Statistics over per-sample times. If None, creates a
            ``StatisticalAnalyzer`` with default settings.
    """

    def __init__(
        self,
        num_samples: int = 1,
        iterations: int = 1,
        warmup: int = 0,
        analyzer: StatisticalAnalyzer | None = None,
    ):
        self.num_samples = num_samples
        self.iterations = iterations
        self.warmup = warmup
        self.analyzer = analyzer or StatisticalAnalyzer()

    def run(self, registry: VariantRegistry) -> BenchReport:
        """Benchmark every variant in registration order.

        An empty registry yields an empty report.
        """
        report = BenchReport()
        baseline_times: list[float] | None = None

        for variant in registry:
            logger.info("Benchmarking %s", variant.name)
            collector = TimingCollector(sync_fn=variant.sync)
            sample = collector.measure_call(
                variant.work,
                num_samples=self.num_samples,
                iterations=self.iterations,
                warmup=self.warmup,
            )

            p_value = None
            if baseline_times is None:
                baseline_times = sample.per_sample_times
            else:
                test = self.analyzer.welch_t_test(baseline_times, sample.per_sample_times)
                if test is not None:
                    p_value = test[1]

            report.entries.append(
                BenchEntry(
                    name=variant.name,
                    seconds=sample.best_sec,
                    timing=sample,
                    summary=self.analyzer.summarize(sample.per_sample_times),
                    variant_id=variant.variant_id,
                    p_value=p_value,
                )
            )
            logger.info("%s: %.3f ms", variant.name, sample.best_sec * 1000)

        return report

    @classmethod
    def from_config(cls, bench_config: Any) -> BenchRunner:
        """Build a runner from a ``BenchConfig``."""
        return cls(
            num_samples=bench_config.samples,
            iterations=bench_config.iterations,
            warmup=bench_config.warmup,
        )
