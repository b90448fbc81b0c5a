# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Vector utilities used by the wavelet transform and the peak detectors.
"""

from typing import List, Sequence

import numpy as np
from scipy import signal as sp_signal

from .errors import DownSampleError, LengthMismatchError

# Integer samples are scaled into [-1, 1] by the largest int64
INT64_MAX = float(2**63 - 1)


def pow2(n: int) -> int:
    """
    Return 2**n.

    Args:
        n: Non-negative exponent

    Returns:
        2 raised to n

    Raises:
        ValueError: If n is negative
    """
    if n < 0:
        raise ValueError(f"Exponent must be >= 0, got {n}")
    return 1 << n


def log2(n: int) -> int:
    """Integer log base 2 of n, rounded down. log2(12) == 3."""
    if n < 1:
        raise ValueError(f"log2 is undefined for {n}")
    return int(n).bit_length() - 1


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def downsample(x, n: int) -> np.ndarray:
    """
    Decimate x by n, keeping every n-th sample starting at index 0.

    Args:
        x: Input vector
        n: Downsample factor, a power of two

    Returns:
        numpy.ndarray: Vector of length len(x) // n

    Raises:
        DownSampleError: If n is not a power of two or len(x) is not an
            integer multiple of n
    """
    x = np.asarray(x, dtype=np.float64)
    if not is_power_of_two(n):
        raise DownSampleError(
            len(x), n, f"Downsample factor must be a power of two, got {n}"
        )
    if len(x) % n != 0:
        raise DownSampleError(len(x), n)
    return x[::n].copy()


def downsample_all(xs: Sequence) -> List[np.ndarray]:
    """
    Downsample every vector in xs to the length of the shortest one.

    The length ratios must be powers of two.
    """
    if len(xs) == 0:
        return []
    shortest = min(len(x) for x in xs)
    if shortest == 0:
        return [np.zeros(0) for _ in xs]
    return [downsample(x, len(x) // shortest) for x in xs]


def to_float(x) -> np.ndarray:
    """
    Convert integer samples to float64 scaled by the largest int64 value.

    Args:
        x: Sequence of integers

    Returns:
        numpy.ndarray: Scaled float64 samples
    """
    return np.asarray(x, dtype=np.float64) / INT64_MAX


def normalise(x) -> np.ndarray:
    """Return x / max(x)."""
    x = np.asarray(x, dtype=np.float64)
    if len(x) == 0:
        return x.copy()
    return x / np.max(x)


def remove_average(x) -> np.ndarray:
    """
    Subtract the mean of x and clamp negative results to 0.

    Args:
        x: Input vector

    Returns:
        numpy.ndarray: max(x - mean(x), 0) for every sample
    """
    x = np.asarray(x, dtype=np.float64)
    if len(x) == 0:
        return x.copy()
    return np.maximum(x - np.mean(x), 0.0)


def lowpass_filter(x, alpha: float) -> np.ndarray:
    """
    First order recursive lowpass filter.

    y[0] = alpha * x[0], y[i] = y[i-1] + alpha * (x[i] - y[i-1])

    Args:
        x: Input vector
        alpha: Smoothing factor in (0, 1]

    Returns:
        numpy.ndarray: Filtered signal
    """
    x = np.asarray(x, dtype=np.float64)
    if len(x) == 0:
        return x.copy()
    # y[i] = alpha * x[i] + (1 - alpha) * y[i-1]
    return sp_signal.lfilter([alpha], [1.0, alpha - 1.0], x)


def moving_average(x, w: int) -> np.ndarray:
    """
    Centred moving average sum(x[i-w:i+w]) / (2w).

    Samples closer than w to either end are left at 0.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.zeros_like(x)
    if w < 1 or len(x) <= 2 * w:
        return y
    csum = np.concatenate(([0.0], np.cumsum(x)))
    i = np.arange(w, len(x) - w)
    y[w:len(x) - w] = (csum[i + w] - csum[i - w]) / (2 * w)
    return y


def subtract(x, y) -> np.ndarray:
    """
    Return x - y.

    Raises:
        LengthMismatchError: If x and y differ in length
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    if len(x) != len(y):
        raise LengthMismatchError(f"len(x) ({len(x)}) != len(y) ({len(y)})")
    return x - y


def sum_vectors(xs: Sequence) -> np.ndarray:
    """
    Element-wise sum of equal-length vectors.

    Args:
        xs: Sequence of vectors

    Returns:
        numpy.ndarray: Sum of the vectors

    Raises:
        LengthMismatchError: If the vectors do not all have the same length
    """
    if len(xs) == 0:
        return np.zeros(0)
    n = len(xs[0])
    for i, x in enumerate(xs):
        if len(x) != n:
            raise LengthMismatchError(f"N={n} but len(xs[{i}])={len(x)}")
    return np.sum(np.asarray(xs, dtype=np.float64), axis=0)
