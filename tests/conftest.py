# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Global pytest configuration.
"""

import os
import sys

import matplotlib
import numpy as np
import pytest

# Plots must never open a window during tests
matplotlib.use("Agg")

# Add the project root to the Python path so tests can import modules properly
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


@pytest.fixture
def rng():
    """Seeded random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def spike_signal():
    """2048 zero samples with a single spike at index 1000."""
    signal = np.zeros(2048)
    signal[1000] = 10.0
    return signal


@pytest.fixture
def temp_output_dir(tmp_path):
    """Fixture to provide a temporary directory for test outputs."""
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    return output_dir


@pytest.fixture
def clean_env(monkeypatch):
    """Remove SIGPEAKS_* variables from the environment."""
    for key in list(os.environ):
        if key.startswith("SIGPEAKS_"):
            monkeypatch.delenv(key)
