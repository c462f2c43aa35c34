"""Chord recognition by template correlation on per-frame chromagrams."""

from __future__ import annotations

from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
import logging
from typing import NamedTuple

import numpy as np

from songscope.core.audio.errors import NoDetectionError, analysis_stage
from songscope.core.audio.frames import extract_frames
from songscope.core.audio.harmonic.chroma import (
    N_CHROMA,
    normalize_chromagram,
    raw_chromagram,
    smooth_chromagram,
)
from songscope.core.audio.models.enums import ChordQuality
from songscope.core.audio.models.results import NO_CHORD, ChordEvent, chord_label
from songscope.core.audio.models.signal import SignalView
from songscope.core.audio.spectral.spectrum import compute_spectrum
from songscope.core.audio.templates import ChordTemplates, rotate
from songscope.core.audio.validation.validator import validate_signal
from songscope.core.config.models import ChordConfig
from songscope.core.utils.logging import log_performance

logger = logging.getLogger(__name__)

DETECTOR = "chords"


class FrameChord(NamedTuple):
    """Classification of a single frame."""

    label: str
    root: int | None
    quality: ChordQuality | None
    score: float


class ChordRun(NamedTuple):
    """Consecutive frames sharing one label: ``frames[start:start + length]``."""

    label: str
    start: int
    length: int


_NO_CHORD_FRAME = FrameChord(NO_CHORD, None, None, 0.0)


def correlation(a: np.ndarray, b: np.ndarray) -> float:
    """Pearson correlation of two vectors (0.0 if either is constant)."""
    x = np.asarray(a, dtype=np.float64)
    y = np.asarray(b, dtype=np.float64)
    dx = x - x.mean()
    dy = y - y.mean()
    denom = float(np.sqrt(np.sum(dx * dx) * np.sum(dy * dy)))
    if denom == 0.0:
        return 0.0
    return float(np.sum(dx * dy) / denom)


def classify_chroma(
    chroma: np.ndarray,
    templates: ChordTemplates | None = None,
    threshold: float = 0.5,
) -> FrameChord:
    """Best-matching chord for one chromagram.

    Every template is tried at all 12 roots. Ties keep the first match
    (lower root, then template declaration order).

    Args:
        chroma: 12-element chromagram
        templates: Chord templates (defaults used if None)
        threshold: Minimum correlation to accept a chord

    Returns:
        FrameChord, labelled no-chord when the best correlation is below threshold
    """
    templates = templates or ChordTemplates()
    best = _NO_CHORD_FRAME
    best_score = -np.inf
    for root in range(N_CHROMA):
        for quality, template in templates.items():
            score = correlation(chroma, np.asarray(rotate(template, root)))
            if score > best_score:
                best_score = score
                best = FrameChord(chord_label(root, quality), root, quality, score)

    if best_score < threshold:
        return FrameChord(NO_CHORD, None, None, float(best_score))
    return best


def _classify_frame(
    frame: np.ndarray, sample_rate: int, config: ChordConfig
) -> FrameChord:
    rms = float(np.sqrt(np.mean(frame * frame)))
    if rms < config.silence_rms or rms == 0.0:
        return _NO_CHORD_FRAME

    spectrum = compute_spectrum(frame, config.n_fft)
    raw = raw_chromagram(spectrum, sample_rate, config.n_fft, config.chroma)
    if float(raw.sum()) <= 0.0:
        return _NO_CHORD_FRAME

    chroma = normalize_chromagram(smooth_chromagram(raw, config.chroma))
    return classify_chroma(chroma, config.templates, config.correlation_threshold)


def classify_frames(signal: SignalView, config: ChordConfig | None = None) -> list[FrameChord]:
    """Classify every analysis frame of a signal, in frame order.

    Args:
        signal: Validated input signal
        config: Chord detector parameters (defaults used if None)

    Returns:
        One FrameChord per frame
    """
    config = config or ChordConfig()
    frames = extract_frames(signal.mono(), config.frame_size, config.hop_size, detector=DETECTOR)

    if config.max_workers > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            # map() yields results in submission order
            return list(
                pool.map(lambda f: _classify_frame(f, signal.sample_rate, config), frames)
            )
    return [_classify_frame(f, signal.sample_rate, config) for f in frames]


def collapse_runs(labels: Sequence[str], min_run_length: int = 4) -> list[ChordRun]:
    """Debounce a per-frame label sequence into chord runs.

    Runs shorter than ``min_run_length`` and no-chord runs are dropped, then
    neighbouring survivors with the same label are merged. A merged run
    spans from its first frame through the last frame of its last piece.

    Example:
        >>> [r.label for r in collapse_runs(list("CCCCGCCCCFFFF"), 4)]
        ['C', 'F']

    Args:
        labels: Per-frame labels
        min_run_length: Shortest run kept

    Returns:
        Runs in time order; no two neighbours share a label
    """
    runs: list[ChordRun] = []
    start = 0
    for i in range(1, len(labels) + 1):
        if i == len(labels) or labels[i] != labels[start]:
            runs.append(ChordRun(labels[start], start, i - start))
            start = i

    kept = [r for r in runs if r.length >= min_run_length and r.label != NO_CHORD]

    merged: list[ChordRun] = []
    for run in kept:
        if merged and merged[-1].label == run.label:
            prev = merged[-1]
            merged[-1] = ChordRun(prev.label, prev.start, run.start + run.length - prev.start)
        else:
            merged.append(run)
    return merged


def _events_from_runs(
    runs: Sequence[ChordRun],
    frame_chords: Sequence[FrameChord],
    signal: SignalView,
    hop_size: int,
) -> list[ChordEvent]:
    events: list[ChordEvent] = []
    sr = signal.sample_rate
    for run in runs:
        members = [
            fc for fc in frame_chords[run.start : run.start + run.length] if fc.label == run.label
        ]
        head = members[0]
        start_time = run.start * hop_size / sr
        end_time = min((run.start + run.length) * hop_size / sr, signal.duration)
        events.append(
            ChordEvent(
                root=head.root,
                quality=head.quality,
                label=run.label,
                start_time=start_time,
                duration=end_time - start_time,
                confidence=float(np.clip(np.mean([fc.score for fc in members]), -1.0, 1.0)),
            )
        )
    return events


@log_performance
def detect_chord_events(signal: SignalView, config: ChordConfig | None = None) -> list[ChordEvent]:
    """Detect the chord progression of a signal with timing.

    Args:
        signal: Input signal
        config: Chord detector parameters (defaults used if None)

    Returns:
        Non-empty list of ChordEvent in time order, no two adjacent equal

    Raises:
        InvalidInputError: If the signal is missing or empty
        InsufficientSignalError: If the signal is shorter than one frame
        NoDetectionError: If no chord survives debouncing
        InternalComputationError: On numeric failure
    """
    config = config or ChordConfig()
    validate_signal(signal, detector=DETECTOR)

    with analysis_stage(DETECTOR, "classify"):
        frame_chords = classify_frames(signal, config)

    with analysis_stage(DETECTOR, "debounce"):
        runs = collapse_runs([fc.label for fc in frame_chords], config.min_run_length)
        if not runs:
            raise NoDetectionError(
                f"No stable chords found in {len(frame_chords)} frames",
                stage="debounce",
                detector=DETECTOR,
            )
        events = _events_from_runs(runs, frame_chords, signal, config.hop_size)

    logger.debug(
        f"Chords: {[e.label for e in events]} from {len(frame_chords)} frames "
        f"({sum(fc.label == NO_CHORD for fc in frame_chords)} no-chord)"
    )
    return events


def detect_chords(signal: SignalView, config: ChordConfig | None = None) -> list[str]:
    """Detect the chord progression of a signal as labels, e.g. ``["C", "F", "G", "C"]``.

    See detect_chord_events for the errors raised.
    """
    return [event.label for event in detect_chord_events(signal, config)]
