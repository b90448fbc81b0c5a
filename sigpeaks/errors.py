# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Exceptions raised by the sigpeaks package.

Every error is also a ``ValueError`` so code that guards calls with
``except ValueError`` keeps working.
"""


class SignalError(Exception):
    """Base class for all sigpeaks errors."""


class InvalidLevelError(SignalError, ValueError):
    """Raised when a wavelet decomposition level is negative."""

    def __init__(self, level):
        super().__init__(f"Decomposition level must be >= 0, got {level}")
        self.level = level


class DownSampleError(SignalError, ValueError):
    """
    Raised when a downsample factor is not a power of two or does not divide
    the vector length.
    """

    def __init__(self, length, factor, message=None):
        if message is None:
            message = f"len(x) ({length}) is not an integer multiple of n ({factor})"
        super().__init__(message)
        self.length = length
        self.factor = factor


class LengthMismatchError(SignalError, ValueError):
    """Raised when vectors that must share a length do not."""


class SignalFormatError(SignalError, ValueError):
    """Raised when a signal file cannot be parsed."""
