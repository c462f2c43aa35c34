"""Analysis data models.

Pydantic models for the analysis boundary:
- SignalView: decoded input signal (read-only)
- TempoEstimate, KeyEstimate, ChordEvent: per-detector results
- AudioAnalysis: combined result of a full analysis
"""

from songscope.core.audio.models.enums import ChordQuality, Mode
from songscope.core.audio.models.results import (
    NO_CHORD,
    NOTE_NAMES,
    AudioAnalysis,
    ChordEvent,
    KeyEstimate,
    TempoEstimate,
    chord_label,
)
from songscope.core.audio.models.signal import SignalView

__all__ = [
    # Enums
    "Mode",
    "ChordQuality",
    # Input
    "SignalView",
    # Results
    "TempoEstimate",
    "KeyEstimate",
    "ChordEvent",
    "AudioAnalysis",
    # Labels
    "NOTE_NAMES",
    "NO_CHORD",
    "chord_label",
]
