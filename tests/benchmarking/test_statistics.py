"""Tests for StatisticalAnalyzer and StatisticalResult.

Verifies: summary statistics, bootstrap CI, stability flag, Welch's t-test,
and edge cases (single sample, all-same values, empty input).
"""

import pytest

from bgubench.benchmarking.statistics import (
    STABILITY_CV_THRESHOLD,
    StatisticalAnalyzer,
)


class TestSummarize:
    """Tests for StatisticalAnalyzer.summarize()."""

    def setup_method(self):
        self.analyzer = StatisticalAnalyzer(seed=42)

    def test_basic_statistics(self):
        result = self.analyzer.summarize([0.010, 0.020, 0.030])

        assert result.mean == pytest.approx(0.020)
        assert result.median == pytest.approx(0.020)
        assert result.min == pytest.approx(0.010)
        assert result.max == pytest.approx(0.030)
        assert result.std == pytest.approx(0.010)
        assert result.n == 3

    def test_single_sample_has_degenerate_ci(self):
        result = self.analyzer.summarize([0.25])

        assert result.std == 0.0
        assert result.ci_lower == result.ci_upper == 0.25
        assert result.is_stable

    def test_ci_brackets_mean(self):
        result = self.analyzer.summarize([0.9, 1.0, 1.1, 1.05, 0.95, 1.02])
        assert result.ci_lower <= result.mean <= result.ci_upper

    def test_stability_threshold(self):
        assert STABILITY_CV_THRESHOLD == 0.10
        assert self.analyzer.summarize([1.0, 1.01, 0.99]).is_stable
        assert not self.analyzer.summarize([1.0, 3.0, 0.2]).is_stable

    def test_seeded_bootstrap_is_reproducible(self):
        samples = [0.1, 0.3, 0.2, 0.25]
        first = StatisticalAnalyzer(seed=1).summarize(samples)
        second = StatisticalAnalyzer(seed=1).summarize(samples)
        assert (first.ci_lower, first.ci_upper) == (second.ci_lower, second.ci_upper)

    def test_empty_samples_rejected(self):
        with pytest.raises(ValueError, match="empty"):
            self.analyzer.summarize([])


class TestWelchTTest:
    """Tests for StatisticalAnalyzer.welch_t_test()."""

    def setup_method(self):
        self.analyzer = StatisticalAnalyzer()

    def test_clearly_different_samples(self):
        t_stat, p_value = self.analyzer.welch_t_test(
            [1.0, 1.1, 0.9, 1.05, 0.95], [2.0, 2.1, 1.9, 2.05, 1.95]
        )
        assert t_stat < 0
        assert p_value < 0.01

    def test_needs_two_samples_per_side(self):
        assert self.analyzer.welch_t_test([1.0], [1.0, 2.0]) is None
        assert self.analyzer.welch_t_test([1.0, 2.0], [3.0]) is None
