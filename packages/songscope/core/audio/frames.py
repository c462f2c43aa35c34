"""Fixed-size framing of a sample buffer."""

from __future__ import annotations

from collections.abc import Iterator

import librosa
import numpy as np

from songscope.core.audio.errors import InsufficientSignalError


class FrameSequence:
    """Lazy, restartable sequence of fixed-size frames.

    Frames start at ``0, hop, 2*hop, ...`` while the start index lies inside
    the buffer. Frames running past the end are zero-padded, never dropped.
    Each call to ``iter()`` starts again from the first frame.

    Example:
        >>> frames = FrameSequence(np.ones(10), frame_size=4, hop_size=4)
        >>> [f.tolist() for f in frames]
        [[1.0, 1.0, 1.0, 1.0], [1.0, 1.0, 1.0, 1.0], [1.0, 1.0, 0.0, 0.0]]
    """

    def __init__(self, samples: np.ndarray, frame_size: int, hop_size: int) -> None:
        if frame_size <= 0 or hop_size <= 0:
            raise ValueError(
                f"frame_size and hop_size must be positive (got {frame_size}, {hop_size})"
            )
        if hop_size > frame_size:
            raise ValueError(f"hop_size ({hop_size}) must be <= frame_size ({frame_size})")

        self.samples = np.asarray(samples, dtype=np.float64)
        self.frame_size = frame_size
        self.hop_size = hop_size

    def __len__(self) -> int:
        n = len(self.samples)
        if n == 0:
            return 0
        return (n - 1) // self.hop_size + 1

    def __iter__(self) -> Iterator[np.ndarray]:
        n = len(self.samples)
        for start in range(0, n, self.hop_size):
            frame = self.samples[start : start + self.frame_size]
            if len(frame) < self.frame_size:
                frame = np.pad(frame, (0, self.frame_size - len(frame)))
            yield frame

    def frame_times(self, sample_rate: int) -> np.ndarray:
        """Start time in seconds of every frame.

        Args:
            sample_rate: Sample rate in Hz

        Returns:
            Array of frame start times
        """
        times: np.ndarray = librosa.frames_to_time(
            np.arange(len(self)), sr=sample_rate, hop_length=self.hop_size
        ).astype(np.float64)
        return times

    def to_array(self) -> np.ndarray:
        """Materialize all frames as a ``(n_frames, frame_size)`` array."""
        if len(self) == 0:
            return np.zeros((0, self.frame_size), dtype=np.float64)
        return np.stack(list(self))


def extract_frames(
    samples: np.ndarray,
    frame_size: int,
    hop_size: int,
    *,
    detector: str | None = None,
) -> FrameSequence:
    """Frame a buffer, failing when it cannot fill a single frame.

    Args:
        samples: Mono sample buffer
        frame_size: Frame length in samples
        hop_size: Hop between frame starts in samples
        detector: Detector name recorded on the error

    Returns:
        FrameSequence over the buffer

    Raises:
        InsufficientSignalError: If the buffer is shorter than one frame
    """
    if len(samples) < frame_size:
        raise InsufficientSignalError(
            f"Signal has {len(samples)} samples, need at least {frame_size} for one frame",
            stage="frames",
            detector=detector,
        )
    return FrameSequence(samples, frame_size, hop_size)
