"""Enums for analysis results."""

from enum import Enum


class Mode(str, Enum):
    """Tonal mode of a key."""

    MAJOR = "major"
    MINOR = "minor"


class ChordQuality(str, Enum):
    """Triad quality recognised by the chord detector."""

    MAJOR = "major"
    MINOR = "minor"
    DIMINISHED = "diminished"
    AUGMENTED = "augmented"
