"""Chromagram engine: magnitude spectrum to 12-bin pitch-class energy.

Each bin in the analysis band contributes its magnitude at its own pitch
and, with decreasing weight, at the pitches of its harmonics. Energy that
falls between two semitones is shared between the two nearest pitch
classes. The raw vector is then smoothed circularly and scaled so the
strongest class is 1.0.
"""

from __future__ import annotations

import logging

import librosa
import numpy as np
from scipy import ndimage

from songscope.core.audio.errors import NoDetectionError
from songscope.core.audio.spectral.spectrum import compute_spectrum, spectrum_frequencies
from songscope.core.config.models import ChromaConfig

logger = logging.getLogger(__name__)

N_CHROMA = 12


def _distribute(chroma: np.ndarray, midi: np.ndarray, energy: np.ndarray) -> None:
    """Accumulate energy at fractional MIDI pitches into ``chroma`` in place.

    A pitch exactly on a semitone goes entirely to its class; a pitch a
    quarter-tone away is split evenly with the neighbour on that side.
    """
    nearest = np.round(midi)
    deviation = midi - nearest
    pitch_class = nearest.astype(np.int64) % N_CHROMA
    neighbour = (pitch_class + np.where(deviation >= 0, 1, -1)) % N_CHROMA

    side = np.sin(np.pi * deviation / 2.0) ** 2
    np.add.at(chroma, pitch_class, energy * (1.0 - side))
    np.add.at(chroma, neighbour, energy * side)


def raw_chromagram(
    magnitudes: np.ndarray,
    sample_rate: int,
    fft_size: int,
    config: ChromaConfig | None = None,
) -> np.ndarray:
    """Unsmoothed, unnormalized pitch-class energy of one magnitude spectrum.

    Args:
        magnitudes: Linear magnitudes of shape ``(fft_size // 2 + 1,)``
        sample_rate: Sample rate in Hz
        fft_size: FFT length used to produce ``magnitudes``
        config: Chroma parameters (defaults used if None)

    Returns:
        Non-negative array of 12 values (index 0 = C)
    """
    config = config or ChromaConfig()
    mags = np.asarray(magnitudes, dtype=np.float64)
    freqs = spectrum_frequencies(sample_rate, fft_size)
    if mags.shape != freqs.shape:
        raise ValueError(
            f"Spectrum has {mags.shape[0]} bins, expected {freqs.shape[0]} for fft_size={fft_size}"
        )

    chroma = np.zeros(N_CHROMA, dtype=np.float64)
    band = (
        (freqs > 0.0)
        & (freqs >= config.min_frequency)
        & (freqs <= config.max_frequency)
        & (mags > 0.0)
    )
    base_freqs = freqs[band]
    base_mags = mags[band]
    # librosa assumes A4 = 440 Hz; rescale for other tunings
    tuning = 440.0 / config.reference_frequency

    for harmonic, weight in enumerate(config.harmonic_weights, start=1):
        if weight <= 0.0:
            continue
        harmonic_freqs = base_freqs * harmonic
        keep = harmonic_freqs <= config.max_frequency
        if not np.any(keep):
            break
        midi = librosa.hz_to_midi(harmonic_freqs[keep] * tuning)
        _distribute(chroma, np.asarray(midi, dtype=np.float64), base_mags[keep] * weight)

    return chroma


def smooth_chromagram(chroma: np.ndarray, config: ChromaConfig | None = None) -> np.ndarray:
    """Circular Gaussian smoothing across neighbouring pitch classes.

    Args:
        chroma: 12-element chroma vector
        config: Chroma parameters (defaults used if None)

    Returns:
        Smoothed 12-element vector (input is not modified)
    """
    config = config or ChromaConfig()
    values = np.asarray(chroma, dtype=np.float64)
    if config.smoothing_radius == 0:
        return values.copy()

    offsets = np.arange(-config.smoothing_radius, config.smoothing_radius + 1, dtype=np.float64)
    kernel = np.exp(-config.smoothing * offsets**2)
    return ndimage.convolve1d(values, kernel, mode="wrap")


def normalize_chromagram(chroma: np.ndarray) -> np.ndarray:
    """Scale a chroma vector so its largest value is 1.0.

    Raises:
        NoDetectionError: If the vector carries no energy
        ValueError: If the vector contains non-finite values
    """
    values = np.asarray(chroma, dtype=np.float64)
    if not np.all(np.isfinite(values)):
        raise ValueError("Chroma vector contains non-finite values")
    peak = float(values.max()) if values.size else 0.0
    if peak <= 0.0:
        raise NoDetectionError("No pitched energy in analysis band", stage="chromagram")
    return np.clip(values / peak, 0.0, 1.0)


def chromagram(
    magnitudes: np.ndarray,
    sample_rate: int,
    fft_size: int,
    config: ChromaConfig | None = None,
) -> np.ndarray:
    """Normalized 12-bin chromagram of one magnitude spectrum.

    Args:
        magnitudes: Linear magnitudes of shape ``(fft_size // 2 + 1,)``
        sample_rate: Sample rate in Hz
        fft_size: FFT length used to produce ``magnitudes``
        config: Chroma parameters (defaults used if None)

    Returns:
        Array of 12 values in [0, 1], index 0 = C

    Raises:
        NoDetectionError: If the spectrum has no energy in the analysis band
    """
    raw = raw_chromagram(magnitudes, sample_rate, fft_size, config)
    return normalize_chromagram(smooth_chromagram(raw, config))


def frame_chromagram(
    frame: np.ndarray,
    sample_rate: int,
    fft_size: int | None = None,
    config: ChromaConfig | None = None,
) -> np.ndarray:
    """Chromagram of a single time-domain frame (Hann-windowed)."""
    n_fft = fft_size or len(frame)
    return chromagram(compute_spectrum(frame, n_fft), sample_rate, n_fft, config)
