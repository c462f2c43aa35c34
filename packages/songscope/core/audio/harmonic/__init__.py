"""Harmonic analysis module."""

from songscope.core.audio.harmonic.chords import (
    ChordRun,
    FrameChord,
    classify_chroma,
    classify_frames,
    collapse_runs,
    correlation,
    detect_chord_events,
    detect_chords,
)
from songscope.core.audio.harmonic.chroma import (
    chromagram,
    frame_chromagram,
    normalize_chromagram,
    raw_chromagram,
    smooth_chromagram,
)
from songscope.core.audio.harmonic.key import (
    KeyCandidate,
    classify_key,
    detect_key,
    score_candidates,
)

__all__ = [
    # Chromagram
    "chromagram",
    "frame_chromagram",
    "raw_chromagram",
    "smooth_chromagram",
    "normalize_chromagram",
    # Key
    "detect_key",
    "classify_key",
    "score_candidates",
    "KeyCandidate",
    # Chords
    "detect_chords",
    "detect_chord_events",
    "classify_chroma",
    "classify_frames",
    "collapse_runs",
    "correlation",
    "FrameChord",
    "ChordRun",
]
