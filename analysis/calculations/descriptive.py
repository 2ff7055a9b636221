"""
Descriptive statistics for a single price sequence.
Pure functions - degenerate input yields 0 instead of raising.
"""

import math
import numpy as np
from typing import Any, Dict, Sequence


def average(prices: Sequence[float]) -> float:
    """
    Arithmetic mean of a price sequence.

    Args:
        prices: Prices in chronological order

    Returns:
        Mean price, or 0.0 for an empty sequence
    """
    if len(prices) == 0:
        return 0.0

    return float(np.mean(np.asarray(prices, dtype=np.float64)))


def standard_deviation(prices: Sequence[float]) -> float:
    """
    Sample standard deviation with Bessel's correction.

    Formula: s = sqrt(Σ(x_i - mean)² / (n - 1))

    Args:
        prices: Prices in chronological order

    Returns:
        Sample standard deviation, or 0.0 when fewer than 2 prices
    """
    if len(prices) < 2:
        return 0.0

    price_array = np.asarray(prices, dtype=np.float64)
    mean = price_array.mean()

    # Bessel's correction: divide by n - 1
    variance = np.sum((price_array - mean) ** 2) / (len(price_array) - 1)

    return float(math.sqrt(variance))


def calculate_descriptive_stats(prices: Sequence[float]) -> Dict[str, Any]:
    """
    Summary statistics for the single-instrument view.

    Args:
        prices: Prices in chronological order

    Returns:
        Dictionary with count, average, std_dev, min, max and latest
        (min/max/latest are None for an empty sequence)
    """
    count = len(prices)

    if count == 0:
        return {
            'count': 0,
            'average': 0.0,
            'std_dev': 0.0,
            'min': None,
            'max': None,
            'latest': None
        }

    return {
        'count': count,
        'average': average(prices),
        'std_dev': standard_deviation(prices),
        'min': float(min(prices)),
        'max': float(max(prices)),
        'latest': float(prices[-1])
    }
