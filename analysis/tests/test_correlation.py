"""
Tests for Pearson correlation - known relationships and degenerate inputs.
Cross-checked against scipy where the formula is well defined.
"""

import numpy as np
import pytest
from scipy import stats

from analysis.calculations.correlation import correlation


class TestCorrelationKnownValues:
    """Correlation on series with known relationships."""

    def test_identical_series(self):
        """A series is perfectly correlated with itself."""
        prices = [101.5, 99.2, 103.8, 100.4, 98.9, 104.1]

        assert correlation(prices, prices) == pytest.approx(1.0)

    def test_negated_series(self):
        """A series and its negation are perfectly anti-correlated."""
        prices = [3.0, 7.5, 1.25, 9.0, 4.4]
        negated = [-p for p in prices]

        assert correlation(prices, negated) == pytest.approx(-1.0)

    def test_opposite_trends(self):
        """X rising, Y falling in lockstep."""
        x = [10, 20, 30, 40, 50]
        y = [50, 40, 30, 20, 10]

        assert correlation(x, y) == pytest.approx(-1.0)

    def test_positive_linear_transform(self):
        """Scale and shift do not change correlation."""
        x = [2.0, 4.5, 3.1, 8.8, 6.0]
        y = [3 * p + 100 for p in x]

        assert correlation(x, y) == pytest.approx(1.0)

    def test_matches_scipy(self):
        """Agrees with scipy.stats.pearsonr on noisy data."""
        rng = np.random.default_rng(7)
        x = rng.normal(100, 5, size=50)
        y = 0.6 * x + rng.normal(0, 3, size=50)

        expected, _ = stats.pearsonr(x, y)

        assert correlation(x.tolist(), y.tolist()) == pytest.approx(expected, abs=1e-10)

    def test_symmetric(self):
        """Argument order does not matter."""
        x = [1.0, 4.0, 2.0, 8.0, 5.0]
        y = [3.0, 1.0, 4.0, 1.0, 5.0]

        assert correlation(x, y) == correlation(y, x)


class TestCorrelationDegenerate:
    """Degenerate inputs resolve to 0."""

    def test_constant_series(self):
        """Zero variance in X gives 0 regardless of Y."""
        assert correlation([1, 1, 1], [1, 2, 3]) == 0.0

    def test_constant_second_series(self):
        assert correlation([1, 2, 3, 4], [7, 7, 7, 7]) == 0.0

    def test_both_constant(self):
        assert correlation([2, 2], [9, 9]) == 0.0

    def test_single_element(self):
        """Fewer than 2 aligned elements gives 0."""
        assert correlation([5.0], [6.0]) == 0.0

    def test_single_element_after_alignment(self):
        """Alignment to length 1 is degenerate even if one side is long."""
        assert correlation([1.0, 2.0, 3.0], [4.0]) == 0.0

    def test_empty(self):
        assert correlation([], []) == 0.0
        assert correlation([], [1.0, 2.0]) == 0.0


class TestCorrelationAlignment:
    """Unequal lengths use the leading common prefix."""

    def test_longer_first_truncated(self):
        """correlation(a, b) with len(a)=5, len(b)=3 equals correlation(a[:3], b)."""
        a = [10.0, 12.0, 11.0, 50.0, -20.0]
        b = [1.0, 3.0, 2.5]

        assert correlation(a, b) == correlation(a[:3], b)

    def test_longer_second_truncated(self):
        a = [5.0, 1.0, 4.0]
        b = [2.0, 0.5, 3.0, 100.0, 200.0]

        assert correlation(a, b) == correlation(a, b[:3])

    def test_tail_ignored(self):
        """Values beyond the common length do not affect the result."""
        a = [1.0, 2.0, 3.0]

        assert correlation(a, [2.0, 4.0, 6.0, -1000.0]) == pytest.approx(1.0)
