"""Input validation."""

from songscope.core.audio.validation.validator import validate_signal

__all__ = ["validate_signal"]
