"""Musical key detection by profile matching on an averaged chromagram."""

from __future__ import annotations

import logging
from typing import NamedTuple

import numpy as np

from songscope.core.audio.errors import analysis_stage
from songscope.core.audio.frames import extract_frames
from songscope.core.audio.harmonic.chroma import N_CHROMA, chromagram
from songscope.core.audio.models.enums import Mode
from songscope.core.audio.models.results import KeyEstimate
from songscope.core.audio.models.signal import SignalView
from songscope.core.audio.spectral.spectrum import average_spectrum
from songscope.core.audio.validation.validator import validate_signal
from songscope.core.config.models import KeyConfig
from songscope.core.utils.logging import log_performance
from songscope.core.utils.math import clamp, unit_vector

logger = logging.getLogger(__name__)

DETECTOR = "key"

MIN_CONFIDENCE = 0.5
MAX_CONFIDENCE = 0.95
THIRD_EPSILON = 0.001

# Scale degrees relative to the tonic
FIFTH = 7
_THIRDS: dict[Mode, tuple[int, int]] = {
    # (mode third, opposite-mode third)
    Mode.MAJOR: (4, 3),
    Mode.MINOR: (3, 4),
}


class KeyCandidate(NamedTuple):
    """Score of one (tonic, mode) hypothesis."""

    tonic: int
    mode: Mode
    score: float
    mode_strength: float  # in [0, 1]


def _position_weights(mode: Mode, config: KeyConfig) -> np.ndarray:
    weights = np.ones(N_CHROMA, dtype=np.float64)
    weights[0] = config.tonic_weight
    weights[_THIRDS[mode][0]] = config.third_weight
    weights[FIFTH] = config.fifth_weight
    return weights / weights.max()


def score_candidates(chroma: np.ndarray, config: KeyConfig | None = None) -> list[KeyCandidate]:
    """Score all 24 key hypotheses against a normalized chromagram.

    For every tonic the chroma is rotated so the tonic sits at index 0 and
    compared with the mode profile using a cosine similarity emphasising
    tonic, mode third and fifth. A strong mode third over the opposite
    third earns a capped bonus, and major candidates get a small bias.

    Args:
        chroma: 12-element chromagram (index 0 = C)
        config: Key detector parameters (defaults used if None)

    Returns:
        Candidates ordered by tonic (C..B), major before minor
    """
    config = config or KeyConfig()
    values = np.asarray(chroma, dtype=np.float64)
    if values.shape != (N_CHROMA,):
        raise ValueError(f"Expected 12-element chroma, got shape {values.shape}")

    chroma_unit = unit_vector(values)
    peak = float(values.max())
    mode_terms = {}
    for mode in Mode:
        profile = unit_vector(np.asarray(config.profiles.for_mode(mode), dtype=np.float64))
        mode_terms[mode] = profile * _position_weights(mode, config)

    candidates: list[KeyCandidate] = []
    for tonic in range(N_CHROMA):
        # rotated[j] is the energy j semitones above the tonic
        rotated = np.roll(values, -tonic)
        rotated_unit = np.roll(chroma_unit, -tonic)
        for mode in Mode:
            score = float(np.dot(rotated_unit, mode_terms[mode]))

            third, other_third = _THIRDS[mode]
            ratio = (rotated[third] + THIRD_EPSILON) / (rotated[other_third] + THIRD_EPSILON)
            score *= 1.0 + clamp(float(ratio) - 1.0, 0.0, config.third_ratio_max_bonus)
            if mode is Mode.MAJOR:
                score *= config.major_bias

            # Margin of the mode third over the opposite third, relative to the peak
            mode_strength = 0.0
            if peak > 0.0:
                mode_strength = clamp(
                    float(rotated[third] - rotated[other_third]) / peak, 0.0, 1.0
                )
            candidates.append(KeyCandidate(tonic, mode, score, mode_strength))

    return candidates


def classify_key(chroma: np.ndarray, config: KeyConfig | None = None) -> KeyEstimate:
    """Pick the best key for a chromagram and derive its confidence.

    Confidence combines the margin over the runner-up with the strength of
    the winning mode's third, clamped to [0.5, 0.95]. Ties resolve to the
    earlier candidate (lower tonic, major first).

    Args:
        chroma: 12-element chromagram
        config: Key detector parameters (defaults used if None)

    Returns:
        KeyEstimate for the best candidate
    """
    config = config or KeyConfig()
    candidates = score_candidates(chroma, config)
    ranked = sorted(candidates, key=lambda c: c.score, reverse=True)
    best, runner_up = ranked[0], ranked[1]
    if not np.isfinite(best.score):
        raise ValueError(f"Non-finite key score for {best}")

    gap = best.score - runner_up.score
    confidence = clamp(
        config.gap_weight * gap + config.mode_strength_weight * best.mode_strength,
        MIN_CONFIDENCE,
        MAX_CONFIDENCE,
    )
    return KeyEstimate(tonic=best.tonic, mode=best.mode, confidence=confidence)


@log_performance
def detect_key(signal: SignalView, config: KeyConfig | None = None) -> KeyEstimate:
    """Detect the musical key of a signal.

    Frames the first channel, averages the magnitude spectra of all frames,
    reduces that to one chromagram and matches it against 24 key profiles.

    Args:
        signal: Input signal
        config: Key detector parameters (defaults used if None)

    Returns:
        KeyEstimate with tonic, mode and confidence in [0.5, 0.95]

    Raises:
        InvalidInputError: If the signal is missing or empty
        InsufficientSignalError: If the signal is shorter than one frame
        NoDetectionError: If there is no pitched energy to analyse
        InternalComputationError: On numeric failure
    """
    config = config or KeyConfig()
    validate_signal(signal, detector=DETECTOR)

    with analysis_stage(DETECTOR, "chromagram"):
        frames = extract_frames(signal.mono(), config.frame_size, config.hop_size, detector=DETECTOR)
        spectrum = average_spectrum(frames, config.n_fft)
        chroma = chromagram(spectrum, signal.sample_rate, config.n_fft, config.chroma)

    with analysis_stage(DETECTOR, "classify"):
        estimate = classify_key(chroma, config)

    logger.debug(f"Key: {estimate.label} (confidence={estimate.confidence:.2f}, frames={len(frames)})")
    return estimate
