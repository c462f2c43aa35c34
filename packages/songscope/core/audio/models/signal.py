"""Read-only view over a decoded audio signal."""

from __future__ import annotations

from typing import Any

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class SignalView(BaseModel):
    """Decoded audio handed over by an upstream decoder.

    Samples are stored channel-major as ``(channels, length)``. The array is
    marked read-only so analyzers can borrow it without copying.

    Example:
        >>> signal = SignalView.from_array(np.zeros(44100), 44100)
        >>> signal.duration
        1.0
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    samples: np.ndarray = Field(repr=False)
    sample_rate: int

    @field_validator("samples", mode="before")
    @classmethod
    def _as_channel_major(cls, value: Any) -> np.ndarray:
        arr = np.array(value, dtype=np.float64)
        if arr.ndim == 1:
            arr = arr.reshape(1, -1)
        if arr.ndim != 2:
            raise ValueError(f"samples must be 1-D or 2-D, got {arr.ndim} dimensions")
        arr.setflags(write=False)
        return arr

    @classmethod
    def from_array(cls, samples: Any, sample_rate: int) -> SignalView:
        """Build a view from a 1-D mono buffer or a ``(channels, length)`` array.

        Args:
            samples: Sample buffer(s) as floats
            sample_rate: Sample rate in Hz (validated later by the detectors)

        Returns:
            SignalView over a read-only copy of the samples
        """
        return cls(samples=samples, sample_rate=sample_rate)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def channels(self) -> int:
        """Number of channels."""
        return int(self.samples.shape[0])

    @computed_field  # type: ignore[prop-decorator]
    @property
    def length(self) -> int:
        """Number of samples per channel."""
        return int(self.samples.shape[1])

    @computed_field  # type: ignore[prop-decorator]
    @property
    def duration(self) -> float:
        """Duration in seconds (0.0 when the sample rate is not positive)."""
        if self.sample_rate <= 0:
            return 0.0
        return self.length / self.sample_rate

    def mono(self) -> np.ndarray:
        """Return the analysis channel (first channel)."""
        return self.samples[0]
