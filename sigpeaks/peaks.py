# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Sliding-window maxima.
"""

from typing import List

import numpy as np


def is_max(x: np.ndarray, i: int, lo: int, hi: int) -> bool:
    """
    Check whether x[i] is the maximum of x[lo:hi].

    Earlier samples must be strictly smaller and later samples no larger, so
    of several equal maxima only the first one counts.
    """
    lo = max(lo, 0)
    hi = min(hi, len(x))
    if lo < i and np.any(x[lo:i] >= x[i]):
        return False
    if i + 1 < hi and np.any(x[i+1:hi] > x[i]):
        return False
    return True


def find_peaks(x, sep: int) -> List[int]:
    """
    Find the samples that are the maximum of their neighbourhood.

    Args:
        x (array_like): Input signal
        sep (int): Minimum distance between two peaks; peaks closer than sep
            are merged to the lower index

    Returns:
        list: Peak indices in increasing order
    """
    if sep < 1:
        raise ValueError(f"sep must be >= 1, got {sep}")
    x = np.asarray(x, dtype=np.float64)
    return [i for i in range(len(x)) if is_max(x, i, i - sep, i + sep)]
