"""Benchmarking of interchangeable operator implementations.

- timing.py: TimingCollector, perf_counter timing with a completion barrier
- statistics.py: StatisticalAnalyzer for per-sample timing summaries
- variants.py: VariantId, Variant and VariantRegistry, operator resolution
- runner.py: BenchRunner and BenchReport for multi-way comparison
"""

from bgubench.benchmarking.runner import BenchEntry, BenchReport, BenchRunner
from bgubench.benchmarking.statistics import StatisticalAnalyzer, StatisticalResult
from bgubench.benchmarking.timing import TimingCollector, TimingSample
from bgubench.benchmarking.variants import (
    Variant,
    VariantId,
    VariantRegistry,
    build_burst_registry,
    build_filter_registry,
    load_operator,
    resolve_operators,
)


__all__ = [
    # Timing
    "TimingCollector",
    "TimingSample",
    # Statistics
    "StatisticalAnalyzer",
    "StatisticalResult",
    # Variants
    "Variant",
    "VariantId",
    "VariantRegistry",
    "build_burst_registry",
    "build_filter_registry",
    "load_operator",
    "resolve_operators",
    # Runner
    "BenchEntry",
    "BenchReport",
    "BenchRunner",
]
