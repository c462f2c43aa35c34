"""Signal validation run before any analysis work."""

from __future__ import annotations

import numpy as np

from songscope.core.audio.errors import InvalidInputError
from songscope.core.audio.models.signal import SignalView


def validate_signal(signal: SignalView | None, *, detector: str | None = None) -> SignalView:
    """Check that a signal can be analysed.

    Runs before any framing or numeric work. Has no side effects.

    Args:
        signal: Signal to check
        detector: Detector name recorded on the error

    Returns:
        The same signal, for chaining

    Raises:
        InvalidInputError: If the signal is missing, empty, has a
            non-positive sample rate, or contains non-finite samples
    """
    if signal is None:
        raise InvalidInputError("Audio signal is missing", stage="validate", detector=detector)
    if not isinstance(signal, SignalView):
        raise InvalidInputError(
            f"Expected SignalView, got {type(signal).__name__}",
            stage="validate",
            detector=detector,
        )
    if signal.length == 0 or signal.channels == 0:
        raise InvalidInputError("Audio signal is empty", stage="validate", detector=detector)
    if signal.sample_rate <= 0:
        raise InvalidInputError(
            f"Invalid sample rate: {signal.sample_rate}", stage="validate", detector=detector
        )
    if not np.all(np.isfinite(signal.mono())):
        raise InvalidInputError(
            "Audio signal contains non-finite samples", stage="validate", detector=detector
        )
    return signal
