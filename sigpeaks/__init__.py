# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
sigpeaks

Signal processing toolkit for locating significant events in a signal.

Key components:
- Sectioned Daubechies-4 lifting wavelet transform for signals of any length
- Peak detection by persistent homology
- Sliding-window maxima
- Vector utilities and signal file I/O
"""

from .errors import (
    SignalError,
    InvalidLevelError,
    DownSampleError,
    LengthMismatchError,
    SignalFormatError
)

from .config import AnalysisConfig

from .wavelet import (
    TransformSection,
    Daubechies4Transform,
    daubechies4,
    get_transform_sections
)

from .persistence import (
    Peak,
    Peaks,
    get_peaks,
    get_peaks_int
)

from .peaks import find_peaks

from .analysis import analyze_signal

# Version information
__version__ = '0.1.0'
