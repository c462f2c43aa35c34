"""Value types returned by the detectors."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, computed_field

from songscope.core.audio.models.enums import ChordQuality, Mode

NOTE_NAMES: tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

NO_CHORD = "N"

_QUALITY_SUFFIX: dict[ChordQuality, str] = {
    ChordQuality.MAJOR: "",
    ChordQuality.MINOR: "m",
    ChordQuality.DIMINISHED: "dim",
    ChordQuality.AUGMENTED: "aug",
}


def chord_label(root: int, quality: ChordQuality) -> str:
    """Format a chord label, e.g. ``C``, ``Am``, ``Bdim``, ``Eaug``.

    Args:
        root: Root pitch class (0-11)
        quality: Chord quality

    Returns:
        Chord label string
    """
    return f"{NOTE_NAMES[root % 12]}{_QUALITY_SUFFIX[ChordQuality(quality)]}"


class TempoEstimate(BaseModel):
    """Tempo estimate in beats per minute."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    bpm: float = Field(gt=0.0)
    confidence: float = Field(ge=0.0, le=1.0)
    onset_count: int = Field(default=0, ge=0, description="Onsets used for the estimate")


class KeyEstimate(BaseModel):
    """Musical key with tonic pitch class and mode.

    Invariants:
        0 <= tonic <= 11
        0.5 <= confidence <= 0.95
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tonic: int = Field(ge=0, le=11, description="Tonic pitch class (0=C .. 11=B)")
    mode: Mode
    confidence: float = Field(ge=0.5, le=0.95)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def tonic_name(self) -> str:
        """Tonic note name, e.g. 'C#'."""
        return NOTE_NAMES[self.tonic]

    @computed_field  # type: ignore[prop-decorator]
    @property
    def label(self) -> str:
        """Human-readable key label, e.g. 'A minor'."""
        return f"{self.tonic_name} {self.mode.value}"


class ChordEvent(BaseModel):
    """A chord held over a time span."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    root: int = Field(ge=0, le=11)
    quality: ChordQuality
    label: str
    start_time: float = Field(ge=0.0, description="Start time in seconds")
    duration: float = Field(gt=0.0, description="Duration in seconds")
    confidence: float = Field(default=0.0, ge=-1.0, le=1.0, description="Mean template correlation")

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration


class AudioAnalysis(BaseModel):
    """Combined tempo, key and chord analysis of one signal."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    tempo: TempoEstimate
    key: KeyEstimate
    chords: list[str]
    duration: float = Field(ge=0.0, description="Signal duration in seconds")
