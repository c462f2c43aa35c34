"""Typed failures raised by the analysis detectors."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
import logging

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class AnalysisErrorData(BaseModel):
    """Structured data for analysis errors.

    Args:
        message: Human-readable error description
        stage: Pipeline stage that failed (validate, frames, chromagram, ...)
        detector: Detector that raised the error (tempo, key, chords)
        cause: Original exception that caused this error
    """

    model_config = {"arbitrary_types_allowed": True}

    message: str
    stage: str | None = None
    detector: str | None = None
    cause: BaseException | None = Field(default=None, repr=False)


class AnalysisError(Exception):
    """Base exception for all analysis failures.

    Attributes:
        data: Structured error data (AnalysisErrorData)
        message: Human-readable error description
        stage: Pipeline stage that failed
        detector: Detector that raised the error
        cause: Original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        *,
        stage: str | None = None,
        detector: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.data = AnalysisErrorData(
            message=message,
            stage=stage,
            detector=detector,
            cause=cause,
        )
        self.message = self.data.message
        self.stage = self.data.stage
        self.detector = self.data.detector
        self.cause = self.data.cause

        super().__init__(str(self))

    def __str__(self) -> str:
        """Format error for logging and display."""
        parts = [self.message]
        if self.detector:
            parts.append(f"detector={self.detector}")
        if self.stage:
            parts.append(f"stage={self.stage}")
        return " | ".join(parts)


class InvalidInputError(AnalysisError):
    """Signal is absent, empty, or has a non-positive sample rate."""


class InsufficientSignalError(AnalysisError):
    """Signal is too short to extract a single analysis frame."""


class NoDetectionError(AnalysisError):
    """Processing finished but produced no musically meaningful result."""


class InternalComputationError(AnalysisError):
    """Unexpected numeric failure (NaN propagation, bad arithmetic)."""


@contextmanager
def analysis_stage(detector: str, stage: str = "compute") -> Iterator[None]:
    """Re-raise numeric failures inside a detector as InternalComputationError.

    AnalysisError subclasses pass through untouched and get the detector name
    attached when they were raised without one.

    Args:
        detector: Name of the detector running the block
        stage: Stage name recorded on wrapped errors
    """
    try:
        yield
    except AnalysisError as e:
        if e.detector is None:
            e.detector = e.data.detector = detector
        raise
    except (ArithmeticError, ValueError) as e:
        logger.debug(f"{detector} failed during {stage}: {e!r}")
        raise InternalComputationError(
            f"Numeric failure during {detector} analysis",
            stage=stage,
            detector=detector,
            cause=e,
        ) from e
