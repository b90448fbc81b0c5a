# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Tests for signal file I/O.
"""

import numpy as np
import pytest
from scipy.io import wavfile

from sigpeaks.errors import SignalFormatError
from sigpeaks.io import (
    load_floats,
    write_floats,
    write_ints,
    write_int_matrix,
    read_wav,
    load_signal,
)


class TestTextFiles:
    """Tests for one-value-per-line text vectors."""

    def test_write_and_load(self, tmp_path):
        path = str(tmp_path / "sub" / "x.txt")
        write_floats([1.5, -2.25, 0.0], path)
        np.testing.assert_array_equal(load_floats(path), [1.5, -2.25, 0.0])

    def test_blank_lines_skipped(self, tmp_path):
        path = tmp_path / "x.txt"
        path.write_text("1.0\n\n2.0\n")
        np.testing.assert_array_equal(load_floats(str(path)), [1.0, 2.0])

    def test_bad_line(self, tmp_path):
        path = tmp_path / "x.txt"
        path.write_text("1.0\nabc\n")
        with pytest.raises(SignalFormatError, match="x.txt"):
            load_floats(str(path))

    def test_small_values_round_trip(self, tmp_path):
        path = str(tmp_path / "x.txt")
        x = np.array([1e-7, 0.123456789, -3.0517578125e-05])
        write_floats(x, path)
        np.testing.assert_array_equal(load_floats(path), x)

    def test_single_value(self, tmp_path):
        path = tmp_path / "x.txt"
        path.write_text("2.5\n")
        values = load_floats(str(path))
        assert values.shape == (1,)
        assert values[0] == 2.5

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_floats(str(tmp_path / "missing.txt"))

    def test_write_ints(self, tmp_path):
        path = tmp_path / "i.txt"
        write_ints([1, -2, 3], str(path))
        assert path.read_text() == "1\n-2\n3\n"

    def test_write_int_matrix(self, tmp_path):
        path = tmp_path / "m.csv"
        write_int_matrix([[1, 2], [3, 4]], str(path))
        assert path.read_text() == "1,2\n3,4\n"


class TestWav:
    """Tests for WAV decoding."""

    @pytest.fixture
    def stereo_wav(self, tmp_path):
        data = np.array([[0, 32767], [16384, -32767], [-16384, 0]], dtype=np.int16)
        path = str(tmp_path / "stereo.wav")
        wavfile.write(path, 8000, data)
        return path, data

    def test_read_stereo(self, stereo_wav):
        path, data = stereo_wav
        rate, samples = read_wav(path)
        assert rate == 8000
        assert samples.shape == (2, 3)
        np.testing.assert_allclose(samples, data.T / 32767.0)

    def test_read_mono_float(self, tmp_path):
        path = str(tmp_path / "mono.wav")
        wavfile.write(path, 100, np.array([0.5, -0.25], dtype=np.float32))
        rate, samples = read_wav(path)
        assert rate == 100
        np.testing.assert_allclose(samples, [[0.5, -0.25]])

    def test_load_signal_channel(self, stereo_wav):
        path, data = stereo_wav
        rate, x = load_signal(path, channel=1)
        assert rate == 8000
        np.testing.assert_allclose(x, data[:, 1] / 32767.0)
        with pytest.raises(ValueError):
            load_signal(path, channel=2)

    def test_load_signal_text(self, tmp_path):
        path = str(tmp_path / "x.txt")
        write_floats([1.0, 2.0], path)
        rate, x = load_signal(path)
        assert rate == 0
        np.testing.assert_array_equal(x, [1.0, 2.0])

    def test_not_a_wav(self, tmp_path):
        path = tmp_path / "bad.wav"
        path.write_bytes(b"not a wav file at all")
        with pytest.raises(SignalFormatError):
            read_wav(str(path))
