# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Wavelet + persistence analysis of a complete signal.
"""

import logging
from typing import Any, Dict, Optional

import numpy as np

from .config import AnalysisConfig
from .persistence import get_peaks
from .wavelet import Daubechies4Transform

logger = logging.getLogger(__name__)


def analyze_signal(
    signal,
    config: Optional[AnalysisConfig] = None,
    sample_rate: int = 0
) -> Dict[str, Any]:
    """
    Find the significant events of a signal.

    The signal is decomposed with the sectioned Daubechies-4 transform and
    the persistence peaks of the absolute coefficients of one band are
    extracted. With level 0 the absolute signal itself is searched.

    Args:
        signal (array_like): Input samples
        config (AnalysisConfig): Analysis parameters, defaults if None
        sample_rate (int): Sample rate in Hz, 0 if unknown

    Returns:
        dict: Dictionary with analysis results
    """
    config = config or AnalysisConfig()
    config.validate()
    signal = np.asarray(signal, dtype=np.float64)

    transform = Daubechies4Transform(signal, config.level, config.min_section_factor)
    if config.level == 0:
        band = 0
        values = np.abs(signal)
    else:
        band = config.band or config.level
        values = np.abs(transform.get_coefficients()[band - 1])

    peaks = get_peaks(values)
    indices = peaks.get_indices(config.persistence_fraction)
    strongest = peaks.max(config.persistence_fraction)

    if band == 0:
        to_sample = int
    else:
        def to_sample(i):
            return transform.to_sample_index(band, i)

    sample_indices = [to_sample(i) for i in indices]
    min_persistence, max_persistence = peaks.min_max_persistence()
    logger.info(
        "Band %d: %d of %d peaks at fraction %.3f",
        band, len(indices), len(peaks), config.persistence_fraction
    )

    result = {
        "config": config.to_dict(),
        "length": len(signal),
        "sample_rate": sample_rate,
        "sections": [[s.start, s.size] for s in transform.sections],
        "band": band,
        "band_length": len(values),
        "num_peaks": len(peaks),
        "peak_indices": indices,
        "sample_indices": sample_indices,
        "strongest": None if strongest is None else to_sample(strongest),
        "min_persistence": min_persistence,
        "max_persistence": max_persistence,
    }
    if sample_rate > 0:
        result["times"] = [i / sample_rate for i in sample_indices]

    if config.plot:
        transform.plot(signal)

    return result
