"""Statistical aggregation of per-sample operator timings.

When a variant is timed with more than one sample, the report carries a
summary with a bootstrap confidence interval and, relative to the first
registered variant, a Welch's t-test p-value so a reader can tell whether a
speedup is larger than the run-to-run noise.
"""

from dataclasses import dataclass
from collections.abc import Sequence

import numpy as np
from scipy import stats as scipy_stats

# Coefficient of variation below which a timing is considered stable.
STABILITY_CV_THRESHOLD: float = 0.10

# alpha=0.05 gives a 95% CI: [2.5th percentile, 97.5th percentile].
BOOTSTRAP_CI_ALPHA: float = 0.05


@dataclass
class StatisticalResult:
    """Summary statistics of one variant's per-sample times, in seconds.

    Attributes:
        mean: Arithmetic mean.
        median: Median value.
        std: Sample standard deviation (ddof=1), 0 for a single sample.
        min: Minimum value.
        max: Maximum value.
        cv: Coefficient of variation (std / mean).
        ci_lower: 95% bootstrap CI lower bound of the mean.
        ci_upper: 95% bootstrap CI upper bound of the mean.
        n: Number of samples.
        is_stable: True when CV < 10%.
    """

    mean: float
    median: float
    std: float
    min: float
    max: float
    cv: float
    ci_lower: float
    ci_upper: float
    n: int
    is_stable: bool


class StatisticalAnalyzer:
    """Summaries and significance tests for benchmark timings.

    Args:
        bootstrap_resamples: Number of bootstrap resamples for CI computation.
        seed: Seed for reproducible bootstrap sampling.
    """

    def __init__(self, bootstrap_resamples: int = 1000, seed: int = 0):
        self._bootstrap_resamples = bootstrap_resamples
        self._rng = np.random.default_rng(seed)

    def summarize(self, samples: Sequence[float]) -> StatisticalResult:
        """Compute summary statistics with bootstrap CI.

        Args:
            samples: Per-sample times (at least 1).

        Returns:
            StatisticalResult with all computed statistics.
        """
        arr = np.array(samples, dtype=np.float64)
        if arr.size == 0:
            raise ValueError("Cannot summarize an empty sample set")
        n = len(arr)
        mean = float(np.mean(arr))
        std = float(np.std(arr, ddof=1)) if n > 1 else 0.0
        cv = std / mean if mean != 0 else 0.0

        if n <= 1:
            ci_lower, ci_upper = mean, mean
        else:
            resampled = self._rng.choice(arr, size=(self._bootstrap_resamples, n), replace=True)
            bootstrap_means = resampled.mean(axis=1)
            lo = (BOOTSTRAP_CI_ALPHA / 2) * 100
            hi = (1 - BOOTSTRAP_CI_ALPHA / 2) * 100
            ci_lower = float(np.percentile(bootstrap_means, lo))
            ci_upper = float(np.percentile(bootstrap_means, hi))

        return StatisticalResult(
            mean=mean,
            median=float(np.median(arr)),
            std=std,
            min=float(np.min(arr)),
            max=float(np.max(arr)),
            cv=cv,
            ci_lower=ci_lower,
            ci_upper=ci_upper,
            n=n,
            is_stable=cv < STABILITY_CV_THRESHOLD,
        )

    def welch_t_test(
        self, baseline: Sequence[float], candidate: Sequence[float]
    ) -> tuple[float, float] | None:
        """Welch's t-test for unequal variances.

        Returns:
            Tuple of (t_statistic, p_value), or None when either side has
            fewer than two samples.
        """
        if len(baseline) < 2 or len(candidate) < 2:
            return None
        result = scipy_stats.ttest_ind(baseline, candidate, equal_var=False)
        return (float(result.statistic), float(result.pvalue))
