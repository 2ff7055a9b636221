"""
Series alignment utilities.
Positional truncation only - timestamps are never matched.
"""

import numpy as np
from typing import Sequence, Tuple


def align_series(
    prices_a: Sequence[float],
    prices_b: Sequence[float]
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Truncate two price sequences to their common length.

    Keeps the leading n = min(len(a), len(b)) elements of each.

    Args:
        prices_a: First price sequence
        prices_b: Second price sequence

    Returns:
        Tuple of float64 arrays, both of length n
    """
    a = np.asarray(prices_a, dtype=np.float64)
    b = np.asarray(prices_b, dtype=np.float64)

    n = min(len(a), len(b))

    return a[:n], b[:n]
