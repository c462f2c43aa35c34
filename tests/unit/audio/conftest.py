"""Audio-specific test fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable

import numpy as np
import pytest

from songscope.core.audio.models import SignalView

# Equal-tempered frequencies (A4 = 440 Hz)
C4 = 261.63
E4 = 329.63
F4 = 349.23
G4 = 392.00
A3 = 220.00
A4 = 440.00
B4 = 493.88
C5 = 523.25
D5 = 587.33

C_MAJOR = (C4, E4, G4)
A_MINOR = (A3, C4, E4)
F_MAJOR = (F4, A4, C5)
G_MAJOR = (G4, B4, D5)

# ============================================================================
# Synthetic Audio Fixtures
# ============================================================================


@pytest.fixture
def sample_rate() -> int:
    """Standard sample rate for tests."""
    return 44100


def make_tones(freqs: tuple[float, ...], duration: float, sample_rate: int) -> np.ndarray:
    """Sum of equal-amplitude sines."""
    t = np.arange(int(duration * sample_rate)) / sample_rate
    return sum(0.3 * np.sin(2 * np.pi * f * t) for f in freqs)


@pytest.fixture
def tones() -> Callable[[tuple[float, ...], float, int], np.ndarray]:
    """Factory for sums of sines: tones(freqs, duration, sample_rate)."""
    return make_tones


@pytest.fixture
def c_major_triad(sample_rate: int) -> SignalView:
    """4 seconds of a C major triad (C4, E4, G4)."""
    return SignalView.from_array(make_tones(C_MAJOR, 4.0, sample_rate), sample_rate)


@pytest.fixture
def a_minor_triad(sample_rate: int) -> SignalView:
    """4 seconds of an A minor triad (A3, C4, E4)."""
    return SignalView.from_array(make_tones(A_MINOR, 4.0, sample_rate), sample_rate)


@pytest.fixture
def c_f_g_c_progression(sample_rate: int) -> SignalView:
    """C, F, G, C major triads, one second each."""
    samples = np.concatenate(
        [make_tones(chord, 1.0, sample_rate) for chord in (C_MAJOR, F_MAJOR, G_MAJOR, C_MAJOR)]
    )
    return SignalView.from_array(samples, sample_rate)


@pytest.fixture
def impulse_train_120bpm(sample_rate: int) -> SignalView:
    """4 seconds of unit impulses every 0.5 s (120 BPM)."""
    samples = np.zeros(4 * sample_rate)
    samples[:: sample_rate // 2] = 1.0
    return SignalView.from_array(samples, sample_rate)


@pytest.fixture
def decaying_bursts_120bpm(sample_rate: int) -> SignalView:
    """4 seconds of short damped sine bursts every 0.5 s (120 BPM)."""
    j = np.arange(100)
    burst = np.sin(0.1 * j) * np.exp(-0.1 * j)
    samples = np.zeros(4 * sample_rate)
    for start in range(0, len(samples) - len(burst), sample_rate // 2):
        samples[start : start + len(burst)] = burst
    return SignalView.from_array(samples, sample_rate)


@pytest.fixture
def silence(sample_rate: int) -> SignalView:
    """4 seconds of digital silence."""
    return SignalView.from_array(np.zeros(4 * sample_rate), sample_rate)


@pytest.fixture
def white_noise(sample_rate: int) -> SignalView:
    """4 seconds of seeded white noise."""
    rng = np.random.default_rng(42)
    return SignalView.from_array(rng.standard_normal(4 * sample_rate) * 0.1, sample_rate)


@pytest.fixture
def short_signal(sample_rate: int) -> SignalView:
    """500 samples: shorter than any detector frame."""
    return SignalView.from_array(make_tones(C_MAJOR, 500 / sample_rate, sample_rate), sample_rate)


# ============================================================================
# Invalid Input Fixtures
# ============================================================================


@pytest.fixture
def empty_signal(sample_rate: int) -> SignalView:
    """Signal with no samples."""
    return SignalView.from_array(np.array([], dtype=np.float64), sample_rate)


@pytest.fixture
def zero_rate_signal() -> SignalView:
    """Signal with a non-positive sample rate."""
    return SignalView.from_array(np.ones(44100), 0)


# ============================================================================
# Chroma Fixtures
# ============================================================================


@pytest.fixture
def c_major_chroma() -> np.ndarray:
    """Idealized chroma of a C major triad with some leakage."""
    chroma = np.full(12, 0.05)
    chroma[0] = 1.0  # C
    chroma[4] = 0.8  # E
    chroma[7] = 0.9  # G
    return chroma
