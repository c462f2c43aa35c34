"""Tests for magnitude spectra."""

from __future__ import annotations

import numpy as np
import pytest

from songscope.core.audio.frames import FrameSequence
from songscope.core.audio.spectral import (
    average_spectrum,
    compute_spectrum,
    db_to_magnitude,
    spectrum_frequencies,
)


class TestComputeSpectrum:
    """Tests for compute_spectrum function."""

    def test_output_length(self) -> None:
        """Spectrum has fft_size // 2 + 1 bins."""
        spectrum = compute_spectrum(np.ones(1024), 2048)

        assert spectrum.shape == (1025,)

    def test_peak_at_sine_frequency(self) -> None:
        """A bin-centred sine peaks in its bin."""
        sr, n = 8000, 1024
        bin_index = 64
        t = np.arange(n) / sr
        frame = np.sin(2 * np.pi * bin_index * sr / n * t)

        spectrum = compute_spectrum(frame, n)

        assert int(np.argmax(spectrum)) == bin_index

    def test_non_negative(self) -> None:
        """Magnitudes are non-negative."""
        frame = np.random.default_rng(1).standard_normal(512)

        assert np.all(compute_spectrum(frame, 512) >= 0)

    def test_rectangular_window(self) -> None:
        """window=None leaves a constant frame's energy in the DC bin."""
        spectrum = compute_spectrum(np.ones(256), 256, window=None)

        assert spectrum[0] == pytest.approx(256.0)
        assert np.all(spectrum[1:] < 1e-9)

    def test_silence(self) -> None:
        """Zero frame gives zero spectrum."""
        assert np.all(compute_spectrum(np.zeros(256), 256) == 0.0)


class TestSpectrumHelpers:
    """Tests for frequency and dB helpers."""

    def test_frequencies(self) -> None:
        """Bin frequencies run from 0 to Nyquist."""
        freqs = spectrum_frequencies(8000, 1024)

        assert freqs.shape == (513,)
        assert freqs[0] == 0.0
        assert freqs[-1] == pytest.approx(4000.0)

    def test_db_to_magnitude(self) -> None:
        """0 dB is 1.0 and 20 dB is 10.0."""
        np.testing.assert_allclose(db_to_magnitude(np.array([0.0, 20.0, -20.0])), [1.0, 10.0, 0.1])


class TestAverageSpectrum:
    """Tests for average_spectrum function."""

    def test_single_frame_equals_frame_spectrum(self) -> None:
        """Averaging one frame returns that frame's spectrum."""
        frame = np.random.default_rng(2).standard_normal(256)
        frames = FrameSequence(frame, frame_size=256, hop_size=256)

        np.testing.assert_allclose(average_spectrum(frames, 256), compute_spectrum(frame, 256))

    def test_empty_frames(self) -> None:
        """No frames gives a zero spectrum of the right length."""
        frames = FrameSequence(np.array([]), frame_size=256, hop_size=128)

        result = average_spectrum(frames, 256)

        assert result.shape == (129,)
        assert np.all(result == 0.0)
