"""Tempo estimation from energy-based onsets."""

from __future__ import annotations

import logging

import numpy as np

from songscope.core.audio.errors import NoDetectionError, analysis_stage
from songscope.core.audio.frames import FrameSequence, extract_frames
from songscope.core.audio.models.results import TempoEstimate
from songscope.core.audio.models.signal import SignalView
from songscope.core.audio.validation.validator import validate_signal
from songscope.core.config.models import TempoConfig
from songscope.core.utils.logging import log_performance
from songscope.core.utils.math import clamp

logger = logging.getLogger(__name__)

DETECTOR = "tempo"


def frame_rms(frames: FrameSequence) -> np.ndarray:
    """Root-mean-square level of every frame."""
    return np.fromiter(
        (np.sqrt(np.mean(frame * frame)) for frame in frames),
        dtype=np.float64,
        count=len(frames),
    )


def onset_times(signal: SignalView, config: TempoConfig | None = None) -> np.ndarray:
    """Start times (seconds) of frames where the level jumps.

    A frame is an onset when its RMS exceeds ``onset_threshold`` and is more
    than ``onset_relative_threshold`` times the previous frame's RMS (the frame before
    the first counts as silent).

    Args:
        signal: Validated input signal
        config: Tempo detector parameters (defaults used if None)

    Returns:
        Increasing array of onset times
    """
    config = config or TempoConfig()
    frames = extract_frames(signal.mono(), config.frame_size, config.hop_size, detector=DETECTOR)
    rms = frame_rms(frames)
    previous = np.concatenate(([0.0], rms[:-1]))
    is_onset = (rms > config.onset_threshold) & (rms > config.onset_relative_threshold * previous)
    return frames.frame_times(signal.sample_rate)[is_onset]


def estimate_bpm(onsets: np.ndarray, config: TempoConfig | None = None) -> TempoEstimate:
    """Tempo from inter-onset intervals.

    Each interval is converted to BPM; values outside [min_bpm, max_bpm]
    are discarded. The estimate is the median of the rest and confidence
    is ``1 - std/mean`` of the same values, clamped to [0, 1].

    Args:
        onsets: Onset times in seconds, increasing
        config: Tempo detector parameters (defaults used if None)

    Returns:
        TempoEstimate

    Raises:
        NoDetectionError: If fewer than two onsets or no plausible interval
    """
    config = config or TempoConfig()
    onsets = np.asarray(onsets, dtype=np.float64)
    if onsets.size < 2:
        raise NoDetectionError(
            f"Found {onsets.size} onset(s), need at least 2", stage="onsets", detector=DETECTOR
        )

    intervals = np.diff(onsets)
    intervals = intervals[intervals > 0.0]
    bpms = 60.0 / intervals
    bpms = bpms[(bpms >= config.min_bpm) & (bpms <= config.max_bpm)]
    if bpms.size == 0:
        raise NoDetectionError(
            f"No inter-onset interval within {config.min_bpm:g}-{config.max_bpm:g} BPM",
            stage="aggregate",
            detector=DETECTOR,
        )

    bpm = float(np.median(bpms))
    mean = float(np.mean(bpms))
    confidence = clamp(1.0 - float(np.std(bpms)) / mean, 0.0, 1.0)
    if not (np.isfinite(bpm) and np.isfinite(confidence)):
        raise ValueError(f"Non-finite tempo estimate: bpm={bpm}, confidence={confidence}")

    return TempoEstimate(bpm=bpm, confidence=confidence, onset_count=int(onsets.size))


@log_performance
def detect_tempo(signal: SignalView, config: TempoConfig | None = None) -> TempoEstimate:
    """Estimate the tempo of a signal in beats per minute.

    Args:
        signal: Input signal
        config: Tempo detector parameters (defaults used if None)

    Returns:
        TempoEstimate with bpm in [min_bpm, max_bpm]

    Raises:
        InvalidInputError: If the signal is missing or empty
        InsufficientSignalError: If the signal is shorter than one frame
        NoDetectionError: If too few onsets or no plausible interval
        InternalComputationError: On numeric failure
    """
    config = config or TempoConfig()
    validate_signal(signal, detector=DETECTOR)

    with analysis_stage(DETECTOR, "onsets"):
        onsets = onset_times(signal, config)

    with analysis_stage(DETECTOR, "aggregate"):
        estimate = estimate_bpm(onsets, config)

    logger.debug(
        f"Tempo: {estimate.bpm:.2f} BPM (confidence={estimate.confidence:.2f}, "
        f"onsets={estimate.onset_count})"
    )
    return estimate
