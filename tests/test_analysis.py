# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Tests for the wavelet + persistence analysis and the command line.
"""

import json
import os

import numpy as np
import pytest

from sigpeaks.analysis import analyze_signal
from sigpeaks.cli import main
from sigpeaks.config import AnalysisConfig
from sigpeaks.io import write_floats


def make_config(**values):
    return AnalysisConfig.from_dict(values)


class TestAnalyzeSignal:
    """Tests for analyze_signal."""

    def test_spike_found(self, spike_signal):
        """Test that the strongest event is at the spike."""
        result = analyze_signal(spike_signal, make_config(level=2))
        assert result["sections"] == [[0, 2048]]
        assert result["band"] == 2
        assert result["band_length"] == 512
        assert abs(result["strongest"] - 1000) <= 16
        assert all(i % 4 == 0 for i in result["sample_indices"])
        assert result["strongest"] in result["sample_indices"]

    def test_finer_band(self, spike_signal):
        result = analyze_signal(spike_signal, make_config(level=3, band=1), sample_rate=1000)
        assert result["band_length"] == 1024
        assert abs(result["strongest"] - 1000) <= 8
        assert result["times"] == [i / 1000 for i in result["sample_indices"]]

    def test_level_zero_searches_signal(self):
        signal = np.array([1.0, -3.0, 2.0, 5.0, 2.0, -4.0, 1.0])
        result = analyze_signal(signal, make_config(level=0, persistence_fraction=0.0))
        assert result["band"] == 0
        assert result["peak_indices"] == [1, 3, 5]
        assert result["sample_indices"] == [1, 3, 5]
        assert result["strongest"] == 3

    def test_short_signal(self):
        """Test that a signal too short to transform gives no peaks."""
        result = analyze_signal(np.arange(100.0), make_config(level=2))
        assert result["sections"] == []
        assert result["num_peaks"] == 0
        assert result["strongest"] is None

    def test_invalid_config(self, spike_signal):
        with pytest.raises(ValueError):
            analyze_signal(spike_signal, make_config(level=2, band=5))


class TestCLI:
    """Tests for the sigpeaks command."""

    def test_text_input(self, spike_signal, tmp_path, temp_output_dir, clean_env, capsys):
        path = str(tmp_path / "spike.txt")
        write_floats(spike_signal, path)

        code = main([path, "--level", "2", "--output-dir", str(temp_output_dir)])

        assert code == 0
        out_file = os.path.join(str(temp_output_dir), "peaks.json")
        with open(out_file) as f:
            result = json.load(f)
        assert result["band"] == 2
        assert abs(result["strongest"] - 1000) <= 16
        assert "Peaks:" in capsys.readouterr().out

    def test_env_override(self, spike_signal, tmp_path, clean_env, monkeypatch, capsys):
        path = str(tmp_path / "spike.txt")
        write_floats(spike_signal, path)
        monkeypatch.setenv("SIGPEAKS_LEVEL", "3")

        assert main([path]) == 0
        assert "band: 3" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, clean_env, capsys):
        code = main([str(tmp_path / "missing.txt")])
        assert code == 1
        assert "not found" in capsys.readouterr().err

    def test_invalid_band(self, spike_signal, tmp_path, clean_env, capsys):
        path = str(tmp_path / "spike.txt")
        write_floats(spike_signal, path)
        assert main([path, "--level", "2", "--band", "5"]) == 1
        assert "band" in capsys.readouterr().err
