"""Magnitude spectra of individual frames."""

from __future__ import annotations

from functools import lru_cache

import librosa
import numpy as np

from songscope.core.audio.frames import FrameSequence


@lru_cache(maxsize=16)
def _window(name: str, size: int) -> np.ndarray:
    win: np.ndarray = librosa.filters.get_window(name, size, fftbins=True).astype(np.float64)
    win.setflags(write=False)
    return win


def compute_spectrum(frame: np.ndarray, fft_size: int, *, window: str | None = "hann") -> np.ndarray:
    """Linear magnitude spectrum of one frame.

    The frame is windowed over its own length, then zero-padded (or
    truncated) to ``fft_size`` before the real FFT.

    Args:
        frame: Frame samples
        fft_size: FFT length
        window: Window name understood by librosa, or None for rectangular

    Returns:
        Magnitudes of shape ``(fft_size // 2 + 1,)``
    """
    x = np.asarray(frame, dtype=np.float64)
    if window is not None and x.size > 0:
        x = x * _window(window, x.size)
    return np.abs(np.fft.rfft(x, n=fft_size))


def spectrum_frequencies(sample_rate: int, fft_size: int) -> np.ndarray:
    """Center frequency in Hz of every bin returned by compute_spectrum."""
    return np.asarray(librosa.fft_frequencies(sr=sample_rate, n_fft=fft_size), dtype=np.float64)


def db_to_magnitude(db: np.ndarray) -> np.ndarray:
    """Convert decibel values to linear magnitude (``10^(dB/20)``)."""
    return np.power(10.0, np.asarray(db, dtype=np.float64) / 20.0)


def average_spectrum(
    frames: FrameSequence, fft_size: int, *, window: str | None = "hann"
) -> np.ndarray:
    """Mean magnitude spectrum across all frames.

    Args:
        frames: Frames to analyse
        fft_size: FFT length
        window: Window name, or None for rectangular

    Returns:
        Mean magnitudes of shape ``(fft_size // 2 + 1,)``
    """
    total = np.zeros(fft_size // 2 + 1, dtype=np.float64)
    count = 0
    for frame in frames:
        total += compute_spectrum(frame, fft_size, window=window)
        count += 1
    if count == 0:
        return total
    return total / count
