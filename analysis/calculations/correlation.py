"""
Pearson correlation between two price sequences.
Pure function - insufficient or zero-variance data returns 0.
"""

import math
import numpy as np
from typing import Sequence

from analysis.calculations.alignment import align_series


def correlation(prices_a: Sequence[float], prices_b: Sequence[float]) -> float:
    """
    Pearson product-moment correlation coefficient.

    Formula: r = Σ(a_i - ā)(b_i - b̄) / sqrt(Σ(a_i - ā)² · Σ(b_i - b̄)²)

    Sequences of unequal length are truncated to the shorter one before
    any statistic is computed. The result is not clamped, so rounding can
    land fractionally outside [-1, 1] for near-deterministic inputs.

    Args:
        prices_a: First price sequence
        prices_b: Second price sequence

    Returns:
        Correlation coefficient, or 0.0 when fewer than 2 aligned prices
        or either aligned sequence has zero variance
    """
    a, b = align_series(prices_a, prices_b)
    n = len(a)

    if n < 2:
        return 0.0

    # Means over the aligned prefixes only
    diff_a = a - a.mean()
    diff_b = b - b.mean()

    numerator = float(np.sum(diff_a * diff_b))
    sum_sq_a = float(np.sum(diff_a * diff_a))
    sum_sq_b = float(np.sum(diff_b * diff_b))

    denominator = math.sqrt(sum_sq_a * sum_sq_b)

    if denominator == 0:
        return 0.0

    return numerator / denominator
