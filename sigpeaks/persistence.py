# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Peak detection by 0-dimensional persistent homology.

A horizontal water level is lowered across the signal. Each time it drops
below a local maximum a peak is born. Samples uncovered next to an existing
peak extend that peak. When a sample joins two peaks, the one with the lower
birth value dies at that sample (the saddle) and its span is absorbed by the
other. The persistence of a peak, birth value minus the value at its saddle,
measures how significant it is. The global maximum never dies.

See https://www.sthu.org/blog/13-perstopology-peakdetection/index.html
"""

import logging
import math
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .vector import to_float

logger = logging.getLogger(__name__)

# Marks an index no peak has claimed yet
_UNASSIGNED = -1


class Peak:
    """
    A peak found by the persistence sweep.

    Attributes:
        born (int): Index of the local maximum where the peak appeared
        left (int): First index of the span owned by the peak
        right (int): Last index of the span owned by the peak
        died (int or None): Saddle index where the peak merged into a higher
            peak, None if it survived the sweep
    """

    __slots__ = ("born", "left", "right", "died")

    def __init__(self, start_idx: int) -> None:
        self.born = start_idx
        self.left = start_idx
        self.right = start_idx
        self.died: Optional[int] = None

    @property
    def alive(self) -> bool:
        return self.died is None

    def persistence(self, seq: Sequence[float]) -> float:
        """
        Birth value minus death value.

        Args:
            seq: The sequence the peak was found in

        Returns:
            float: seq[born] - seq[died], or inf for a peak that never died
        """
        if self.died is None:
            return math.inf
        return float(seq[self.born] - seq[self.died])

    def __repr__(self) -> str:
        return (
            f"Peak(born={self.born}, died={self.died}, "
            f"left={self.left}, right={self.right})"
        )


class Peaks:
    """
    Result of a persistence sweep: the peaks in increasing order of ``born``
    together with the sequence they were found in.
    """

    def __init__(self, peaks: List[Peak], seq: np.ndarray) -> None:
        self._peaks = tuple(peaks)
        self._seq = seq

    @property
    def peaks(self) -> Tuple[Peak, ...]:
        return self._peaks

    @property
    def sequence(self) -> np.ndarray:
        return self._seq

    def __len__(self) -> int:
        return len(self._peaks)

    def __iter__(self) -> Iterator[Peak]:
        return iter(self._peaks)

    def __getitem__(self, i: int) -> Peak:
        return self._peaks[i]

    def __repr__(self) -> str:
        return f"Peaks(n={len(self._peaks)}, length={len(self._seq)})"

    def persistences(self) -> np.ndarray:
        """Persistence of every peak, in peak order."""
        return np.array(
            [pk.persistence(self._seq) for pk in self._peaks], dtype=np.float64
        )

    def min_max_persistence(self) -> Tuple[float, float]:
        """
        Get the minimum persistence over all peaks and the maximum finite
        persistence.

        Returns:
            tuple: (min, max); (inf, -inf) when there is nothing to compare
        """
        lo, hi = math.inf, -math.inf
        for prs in self.persistences():
            if hi < prs < math.inf:
                hi = float(prs)
            if prs < lo:
                lo = float(prs)
        return lo, hi

    def get_indices(self, frac_of_max_persistence: float) -> List[int]:
        """
        Get the indices of the peaks with
        persistence / max(finite persistence) >= frac_of_max_persistence.

        A peak that never died always qualifies. When no peak has a positive
        finite persistence the ratio is undefined and finite peaks qualify
        only for a fraction <= 0.

        Args:
            frac_of_max_persistence (float): Threshold in [0, 1]

        Returns:
            list: ``born`` indices in increasing order
        """
        _, max_persistence = self.min_max_persistence()
        indices = []
        for pk in self._peaks:
            prs = pk.persistence(self._seq)
            if math.isinf(prs):
                qualifies = True
            elif max_persistence > 0:
                qualifies = prs / max_persistence >= frac_of_max_persistence
            else:
                qualifies = frac_of_max_persistence <= 0
            if qualifies:
                indices.append(pk.born)
        return indices

    def max(self, frac_of_max_persistence: float) -> Optional[int]:
        """
        Get the index of the highest qualifying peak.

        See get_indices for frac_of_max_persistence.

        Returns:
            int or None: Index into the sequence, None if no peak qualifies
        """
        biggest, val = None, -math.inf
        for idx in self.get_indices(frac_of_max_persistence):
            if biggest is None or self._seq[idx] > val:
                biggest, val = idx, self._seq[idx]
        return biggest


def get_peaks(seq: Sequence[float]) -> Peaks:
    """
    Detect the peaks in seq by persistent homology.

    Samples are visited in decreasing order of value, ties in increasing
    index order. Peaks are kept in an arena list and every index maps to
    the arena position of the peak that owns it.

    Args:
        seq (array_like): 1-D sequence of finite values

    Returns:
        Peaks: Peaks in increasing order of their ``born`` index

    Raises:
        ValueError: If seq contains NaN
    """
    seq = np.array(seq, dtype=np.float64).ravel()
    if np.isnan(seq).any():
        raise ValueError("Sequence contains NaN values")

    n = len(seq)
    peaks: List[Peak] = []
    idx_to_peak = [_UNASSIGNED] * n
    order = np.argsort(-seq, kind="stable")

    for idx in order.tolist():
        il = idx_to_peak[idx - 1] if idx > 0 else _UNASSIGNED
        ir = idx_to_peak[idx + 1] if idx < n - 1 else _UNASSIGNED
        left_done = il != _UNASSIGNED
        right_done = ir != _UNASSIGNED

        if not left_done and not right_done:
            # New peak born
            peaks.append(Peak(idx))
            idx_to_peak[idx] = len(peaks) - 1
        elif left_done and not right_done:
            peaks[il].right = idx
            idx_to_peak[idx] = il
        elif right_done and not left_done:
            peaks[ir].left = idx
            idx_to_peak[idx] = ir
        elif seq[peaks[il].born] > seq[peaks[ir].born]:
            # Left is higher: right dies here
            peaks[ir].died = idx
            peaks[il].right = peaks[ir].right
            idx_to_peak[peaks[il].right] = il
            idx_to_peak[idx] = il
        else:
            # Right is higher or equal: left dies here
            peaks[il].died = idx
            peaks[ir].left = peaks[il].left
            idx_to_peak[peaks[ir].left] = ir
            idx_to_peak[idx] = ir

    peaks.sort(key=lambda pk: pk.born)
    logger.debug("Persistence sweep found %d peaks in %d samples", len(peaks), n)

    return Peaks(peaks, seq)


def get_peaks_int(seq: Sequence[int]) -> Peaks:
    """
    Detect the peaks in a sequence of integer samples.

    The samples are scaled to float with vector.to_float first.
    """
    return get_peaks(to_float(seq))
