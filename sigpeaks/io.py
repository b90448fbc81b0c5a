# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Reading and writing signals: text vectors and WAV files.
"""

import logging
import os
from typing import Sequence, Tuple

import numpy as np
from scipy.io import wavfile

from .errors import SignalFormatError

logger = logging.getLogger(__name__)


def load_floats(path: str) -> np.ndarray:
    """
    Read a text file holding one float per line.

    Blank lines are skipped.

    Args:
        path: File to read

    Returns:
        numpy.ndarray: The values as float64

    Raises:
        SignalFormatError: If a line is not a number
    """
    try:
        values = np.loadtxt(path, dtype=np.float64, ndmin=1)
    except ValueError as e:
        raise SignalFormatError(f"{path}: {e}") from e
    logger.debug("Loaded %d samples from %s", len(values), path)
    return values


def write_floats(x: Sequence[float], path: str) -> None:
    """Write x to a text file, one value per line, at full precision."""
    _ensure_parent(path)
    np.savetxt(path, np.asarray(x, dtype=np.float64), fmt="%.18e")


def write_ints(x: Sequence[int], path: str) -> None:
    """Write x to a text file, one integer per line."""
    _ensure_parent(path)
    np.savetxt(path, np.asarray(x, dtype=np.int64), fmt="%d")


def write_int_matrix(rows: Sequence[Sequence[int]], path: str) -> None:
    """Write an integer matrix to a CSV file, one row per line."""
    _ensure_parent(path)
    np.savetxt(path, np.asarray(rows, dtype=np.int64), fmt="%d", delimiter=",")


def read_wav(path: str) -> Tuple[int, np.ndarray]:
    """
    Read a WAV file.

    Integer PCM is scaled to [-1, 1]; float PCM is returned as is.

    Args:
        path: WAV file to read

    Returns:
        tuple: (sample_rate, samples) where samples has shape
        (channels, frames) and dtype float64
    """
    try:
        rate, data = wavfile.read(path)
    except ValueError as e:
        raise SignalFormatError(f"{path}: {e}") from e

    if np.issubdtype(data.dtype, np.integer):
        info = np.iinfo(data.dtype)
        if info.min == 0:
            # 8-bit PCM is unsigned
            mid = (info.max + 1) / 2.0
            samples = (data.astype(np.float64) - mid) / mid
        else:
            samples = data.astype(np.float64) / float(info.max)
    else:
        samples = data.astype(np.float64)

    samples = samples.T if samples.ndim > 1 else samples[np.newaxis, :]
    logger.info(
        "Read %s: %d Hz, %d channels, %d frames",
        path, rate, samples.shape[0], samples.shape[1]
    )
    return rate, samples


def load_signal(path: str, channel: int = 0) -> Tuple[int, np.ndarray]:
    """
    Load one channel of a signal from a WAV or text file.

    Args:
        path: Input file; ``.wav`` files are decoded, anything else is read
            with load_floats
        channel: Channel to return for multi-channel WAV files

    Returns:
        tuple: (sample_rate, samples); sample_rate is 0 for text files
    """
    if os.path.splitext(path)[1].lower() == ".wav":
        rate, samples = read_wav(path)
        if not 0 <= channel < samples.shape[0]:
            raise ValueError(
                f"Channel {channel} out of range for {samples.shape[0]} channels"
            )
        return rate, samples[channel]
    return 0, load_floats(path)


def _ensure_parent(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)
