# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Sectioned Daubechies-4 discrete wavelet transform.

The transform uses the lifting scheme (split, update, predict, update,
normalise) applied in place to a private working buffer. A signal of
arbitrary length is cut into contiguous power-of-two sections which are
transformed independently, so no padding is needed. Samples left over at
the end, too short to make a section deep enough for the requested number
of levels, are kept untransformed.

Layout of a transformed section of size N at level L::

    [ approx (N/2^L) | detail L (N/2^L) | ... | detail 2 (N/4) | detail 1 (N/2) ]
"""

import logging
import math
from typing import List, NamedTuple, Sequence

import numpy as np
import matplotlib.pyplot as plt

from .errors import InvalidLevelError
from .vector import downsample, is_power_of_two, log2, pow2

logger = logging.getLogger(__name__)

# Lifting constants, closed form
SQRT3 = math.sqrt(3.0)
SQRT2 = math.sqrt(2.0)
PREDICT_CENTRE = SQRT3 / 4
PREDICT_LEFT = (SQRT3 - 2) / 4
NORM_APPROX = (SQRT3 - 1) / SQRT2
NORM_DETAIL = (SQRT3 + 1) / SQRT2

# A section must hold at least this many samples per level of halving
DEFAULT_MIN_SECTION_FACTOR = 64


class TransformSection(NamedTuple):
    """A contiguous, power-of-two sized run of the signal."""
    start: int
    size: int

    @property
    def end(self) -> int:
        return self.start + self.size


def get_transform_sections(
    length: int,
    level: int,
    min_section_factor: int = DEFAULT_MIN_SECTION_FACTOR
) -> List[TransformSection]:
    """
    Partition a signal of the given length into transform sections.

    Starting at index 0 the largest power-of-two chunk of the remaining
    samples is taken for as long as the remainder holds at least
    ``min_section_factor * 2**level`` samples. The undersized tail is
    not part of any section.

    A length that is itself a power of two, and deep enough for ``level``
    halvings, is always transformed as one section.

    Args:
        length (int): Number of samples in the signal
        level (int): Number of decomposition levels
        min_section_factor (int): Minimum section size in units of 2**level

    Returns:
        list: TransformSection objects in signal order
    """
    if level < 0:
        raise InvalidLevelError(level)

    min_size = min_section_factor * pow2(level)
    sections = []
    start = 0
    remaining = length
    while remaining > 0 and remaining >= min_size:
        size = pow2(log2(remaining))
        sections.append(TransformSection(start, size))
        start += size
        remaining -= size

    if not sections and is_power_of_two(length) and length >= pow2(level):
        sections.append(TransformSection(0, length))

    return sections


def split(s: np.ndarray) -> None:
    """
    Deinterleave s in place: even samples to the front half, odd samples
    to the back half, each half keeping its original order.

    Args:
        s (numpy.ndarray): Window of even length, modified in place
    """
    s[:] = np.concatenate((s[0::2], s[1::2]))


def merge(s: np.ndarray) -> None:
    """Inverse of split: interleave the front and back halves of s in place."""
    half = len(s) // 2
    merged = np.empty_like(s)
    merged[0::2] = s[:half]
    merged[1::2] = s[half:]
    s[:] = merged


def lift(s: np.ndarray) -> None:
    """
    Daubechies-4 lifting step on a split window, in place.

    The front half holds the even samples and the back half the odd
    samples. Afterwards the front half holds the approximation and the back
    half the detail coefficients. After Ripples in Mathematics, section 3.4.

    Args:
        s (numpy.ndarray): Window of even length >= 2
    """
    half = len(s) // 2

    # Update 1
    s[:half] = s[:half] + SQRT3 * s[half:]

    # Predict
    s[half] = s[half] - PREDICT_CENTRE * s[0] - PREDICT_LEFT * s[half-1]
    s[half+1:] = s[half+1:] - PREDICT_CENTRE * s[1:half] - PREDICT_LEFT * s[:half-1]

    # Update 2
    s[:half-1] = s[:half-1] - s[half+1:]
    s[half-1] = s[half-1] - s[half]

    # Normalise
    s[:half] = NORM_APPROX * s[:half]
    s[half:] = NORM_DETAIL * s[half:]


def unlift(s: np.ndarray) -> None:
    """Undo lift() in place, running its steps backwards."""
    half = len(s) // 2

    s[:half] = s[:half] / NORM_APPROX
    s[half:] = s[half:] / NORM_DETAIL

    s[half-1] = s[half-1] + s[half]
    s[:half-1] = s[:half-1] + s[half+1:]

    s[half+1:] = s[half+1:] + PREDICT_CENTRE * s[1:half] + PREDICT_LEFT * s[:half-1]
    s[half] = s[half] + PREDICT_CENTRE * s[0] + PREDICT_LEFT * s[half-1]

    s[:half] = s[:half] - SQRT3 * s[half:]


class Daubechies4Transform:
    """
    Multi-level Daubechies-4 lifting transform of a complete signal.

    The transform is computed once at construction. Coefficient getters
    only read the working buffer.

    Attributes:
        level (int): Number of decomposition levels
        sections (tuple): TransformSection objects covering the signal
    """

    def __init__(
        self,
        signal: Sequence[float],
        level: int,
        min_section_factor: int = DEFAULT_MIN_SECTION_FACTOR
    ):
        """
        Transform a signal.

        Args:
            signal (array_like): Input samples, converted to float64
            level (int): Number of decomposition levels, >= 0
            min_section_factor (int): Minimum section size in units of 2**level

        Raises:
            InvalidLevelError: If level is negative
        """
        if isinstance(level, bool) or not isinstance(level, (int, np.integer)) or level < 0:
            raise InvalidLevelError(level)

        self.level = int(level)
        self._st = np.array(signal, dtype=np.float64).ravel()
        self.sections = tuple(
            get_transform_sections(len(self._st), level, min_section_factor)
        )

        if not self.sections and len(self._st) > 0:
            logger.warning(
                "Signal of %d samples is too short for a level %d transform; "
                "no section was transformed", len(self._st), level
            )
        elif self.transformed_length < len(self._st):
            logger.warning(
                "Level %d transform drops the last %d of %d samples; "
                "they are kept untransformed",
                level, len(self._st) - self.transformed_length, len(self._st)
            )
        else:
            logger.debug(
                "Level %d transform: %d sections over %d of %d samples",
                level, len(self.sections), self.transformed_length, len(self._st)
            )

        for section in self.sections:
            self._forward_section(section)

    def _forward_section(self, section: TransformSection) -> None:
        size = section.size
        for _ in range(self.level):
            window = self._st[section.start:section.start + size]
            split(window)
            lift(window)
            size //= 2

    def __len__(self) -> int:
        return len(self._st)

    def __repr__(self) -> str:
        return (
            f"Daubechies4Transform(length={len(self._st)}, level={self.level}, "
            f"sections={len(self.sections)})"
        )

    @property
    def transformed_length(self) -> int:
        """Number of samples covered by sections."""
        return sum(section.size for section in self.sections)

    def _band(self, lo_shift: int, hi_shift: int) -> np.ndarray:
        parts = [
            self._st[s.start + (s.size >> lo_shift):s.start + (s.size >> hi_shift)]
            for s in self.sections
        ]
        if not parts:
            return np.zeros(0)
        return np.concatenate(parts)

    def get_coefficients(self) -> List[np.ndarray]:
        """
        Get the detail coefficients of every level.

        Returns:
            list: ``level`` arrays; entry i holds the level i+1 band,
            concatenated across sections in signal order. Level 1 is the
            finest band and has the most coefficients.
        """
        return [self._band(l, l - 1) for l in range(1, self.level + 1)]

    def get_downsampled_coefficients(self) -> List[np.ndarray]:
        """
        Get the detail coefficients of every level decimated to the length
        of the deepest level.

        Returns:
            list: ``level`` arrays of equal length
        """
        cfs = self.get_coefficients()
        for i in range(len(cfs) - 1):
            cfs[i] = downsample(cfs[i], pow2(self.level - i - 1))
        return cfs

    def get_approximation(self) -> np.ndarray:
        """Get the approximation coefficients of the deepest level."""
        parts = [self._st[s.start:s.start + (s.size >> self.level)] for s in self.sections]
        if not parts:
            return np.zeros(0)
        return np.concatenate(parts)

    def get_decomposition(self) -> np.ndarray:
        """
        Get the raw working buffer.

        Each section holds its coefficients in the lifting layout described
        in the module docstring; samples after the last section are the
        untransformed input.

        Returns:
            numpy.ndarray: Read-only view of the buffer
        """
        view = self._st.view()
        view.flags.writeable = False
        return view

    def to_sample_index(self, level: int, index: int) -> int:
        """
        Map an index into the level ``level`` band to the position in the
        original signal where that coefficient's support starts.

        Args:
            level (int): 1-based band level
            index (int): Index into get_coefficients()[level - 1]

        Returns:
            int: Sample index in the input signal
        """
        if not 1 <= level <= self.level:
            raise ValueError(f"level must be in [1, {self.level}], got {level}")
        offset = index
        for section in self.sections:
            band_len = section.size >> level
            if offset < band_len:
                return section.start + (offset << level)
            offset -= band_len
        raise IndexError(f"Coefficient index {index} out of range for level {level}")

    def inverse(self) -> np.ndarray:
        """
        Reconstruct the input signal from the decomposition.

        Returns:
            numpy.ndarray: Reconstructed signal, same length as the input
        """
        out = self._st.copy()
        for section in self.sections:
            size = section.size >> max(self.level - 1, 0)
            for _ in range(self.level):
                window = out[section.start:section.start + size]
                unlift(window)
                merge(window)
                size *= 2
        return out

    def plot(self, signal=None, show=True):
        """
        Plot the decomposition, one subplot per level.

        Args:
            signal (numpy.ndarray): Original signal to plot on top, optional
            show (bool): Whether to call plt.show()

        Returns:
            matplotlib.figure.Figure: The figure
        """
        cfs = self.get_coefficients()
        rows = len(cfs) + 1 + (signal is not None)
        fig = plt.figure(figsize=(12, 2 * rows))
        row = 1

        if signal is not None:
            plt.subplot(rows, 1, row)
            plt.plot(signal)
            plt.title('Original Signal')
            plt.grid(True)
            row += 1

        plt.subplot(rows, 1, row)
        plt.plot(self.get_approximation())
        plt.title(f'Approximation (Level {self.level})')
        plt.grid(True)
        row += 1

        for i, detail in enumerate(cfs):
            plt.subplot(rows, 1, row + i)
            plt.plot(detail)
            plt.title(f'Detail (Level {i+1})')
            plt.grid(True)

        plt.tight_layout()
        if show:
            plt.show()
        return fig


def daubechies4(
    signal: Sequence[float],
    level: int,
    min_section_factor: int = DEFAULT_MIN_SECTION_FACTOR
) -> Daubechies4Transform:
    """
    Compute the sectioned Daubechies-4 transform of signal to level.

    Args:
        signal (array_like): Input samples
        level (int): Number of decomposition levels
        min_section_factor (int): Minimum section size in units of 2**level

    Returns:
        Daubechies4Transform: The transform
    """
    return Daubechies4Transform(signal, level, min_section_factor)
