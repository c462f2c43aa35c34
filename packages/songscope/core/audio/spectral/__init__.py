"""Spectral analysis module."""

from songscope.core.audio.spectral.spectrum import (
    average_spectrum,
    compute_spectrum,
    db_to_magnitude,
    spectrum_frequencies,
)

__all__ = [
    "compute_spectrum",
    "average_spectrum",
    "spectrum_frequencies",
    "db_to_magnitude",
]
