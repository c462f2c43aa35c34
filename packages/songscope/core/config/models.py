"""Configuration models for SongScope."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Self

from pydantic import BaseModel, ConfigDict, Field

from songscope.core.audio.templates import ChordTemplates, KeyProfiles


class ChromaConfig(BaseModel):
    """Chromagram engine configuration."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    min_frequency: float = Field(
        default=20.0, gt=0.0, description="Lowest spectrum bin (Hz) that contributes"
    )
    max_frequency: float = Field(
        default=8000.0, gt=0.0, description="Highest frequency (Hz) for bins and harmonics"
    )
    reference_frequency: float = Field(
        default=440.0, gt=0.0, description="Tuning reference for A4 (Hz)"
    )
    harmonic_weights: tuple[float, ...] = Field(
        default=(1.0, 0.5, 0.25, 0.125, 0.0625),
        min_length=1,
        description="Weight of harmonic h+1 (index 0 is the fundamental)",
    )
    smoothing: float = Field(
        default=2.0, gt=0.0, description="Gaussian smoothing factor: exp(-smoothing * j^2)"
    )
    smoothing_radius: int = Field(
        default=2, ge=0, le=6, description="Pitch-class neighbours on each side (0=off)"
    )

    def model_post_init(self, __context: object) -> None:
        """Validate frequency band and weights."""
        if self.min_frequency >= self.max_frequency:
            raise ValueError(
                f"min_frequency ({self.min_frequency}) must be < max_frequency ({self.max_frequency})"
            )
        if any(w < 0 for w in self.harmonic_weights) or self.harmonic_weights[0] <= 0:
            raise ValueError("harmonic_weights must be non-negative with a positive fundamental")


class FramingConfig(BaseModel):
    """Frame/hop/FFT sizes shared by every detector."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    frame_size: int = Field(default=2048, ge=64, le=65536)
    hop_size: int = Field(default=1024, ge=1, le=65536)
    fft_size: int | None = Field(
        default=None, ge=64, description="FFT length (defaults to frame_size)"
    )

    def model_post_init(self, __context: object) -> None:
        """Validate framing parameters."""
        if self.hop_size > self.frame_size:
            raise ValueError(
                f"hop_size ({self.hop_size}) must be <= frame_size ({self.frame_size})"
            )
        if self.fft_size is not None and self.fft_size < self.frame_size:
            raise ValueError(
                f"fft_size ({self.fft_size}) must be >= frame_size ({self.frame_size})"
            )

        if self.hop_size < self.frame_size // 8:
            logger = logging.getLogger(__name__)
            logger.warning(
                f"hop_size={self.hop_size} is very small relative to frame_size={self.frame_size}. "
                "This will create many more frames and increase processing time."
            )

    @property
    def n_fft(self) -> int:
        """Effective FFT length."""
        return self.fft_size or self.frame_size


class TempoConfig(FramingConfig):
    """Tempo detector configuration."""

    frame_size: int = Field(default=1024, ge=64, le=65536)
    hop_size: int = Field(default=512, ge=1, le=65536)

    onset_threshold: float = Field(
        default=0.01, ge=0.0, description="Minimum frame RMS for an onset"
    )
    onset_relative_threshold: float = Field(
        default=1.5, ge=1.0, description="Frame RMS must exceed ratio * previous frame RMS"
    )
    min_bpm: float = Field(default=60.0, gt=0.0)
    max_bpm: float = Field(default=200.0, gt=0.0)

    def model_post_init(self, __context: object) -> None:
        """Validate tempo parameters."""
        super().model_post_init(__context)
        if self.min_bpm >= self.max_bpm:
            raise ValueError(f"min_bpm ({self.min_bpm}) must be < max_bpm ({self.max_bpm})")


class KeyConfig(FramingConfig):
    """Key detector configuration."""

    frame_size: int = Field(default=16384, ge=64, le=65536)
    hop_size: int = Field(default=8192, ge=1, le=65536)

    chroma: ChromaConfig = Field(default_factory=ChromaConfig)
    profiles: KeyProfiles = Field(default_factory=KeyProfiles)

    tonic_weight: float = Field(default=2.5, gt=0.0, description="Emphasis on the tonic")
    third_weight: float = Field(default=2.0, gt=0.0, description="Emphasis on the mode third")
    fifth_weight: float = Field(default=1.5, gt=0.0, description="Emphasis on the fifth")
    major_bias: float = Field(default=1.1, gt=0.0, description="Multiplier for major candidates")
    third_ratio_max_bonus: float = Field(
        default=0.5, ge=0.0, description="Cap on the third-ratio bonus"
    )
    gap_weight: float = Field(
        default=0.5, ge=0.0, description="Confidence weight of the margin over the runner-up"
    )
    mode_strength_weight: float = Field(
        default=1.0, ge=0.0, description="Confidence weight of the winning third strength"
    )


class ChordConfig(FramingConfig):
    """Chord detector configuration."""

    frame_size: int = Field(default=8192, ge=64, le=65536)
    hop_size: int = Field(default=4096, ge=1, le=65536)

    chroma: ChromaConfig = Field(default_factory=ChromaConfig)
    templates: ChordTemplates = Field(default_factory=ChordTemplates)

    correlation_threshold: float = Field(
        default=0.5, ge=-1.0, le=1.0, description="Minimum correlation to label a frame"
    )
    min_run_length: int = Field(
        default=4, ge=1, description="Shortest run of frames kept as a chord"
    )
    silence_rms: float = Field(
        default=1e-4, ge=0.0, description="Frames with RMS below this are labelled no-chord"
    )
    max_workers: int = Field(
        default=1, ge=1, le=64, description="Threads used to classify frames"
    )


class AnalysisConfig(BaseModel):
    """Configuration for all three detectors."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tempo: TempoConfig = Field(default_factory=TempoConfig)
    key: KeyConfig = Field(default_factory=KeyConfig)
    chords: ChordConfig = Field(default_factory=ChordConfig)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON log lines")
    filename: str | None = Field(default=None, description="Optional log file path")


class ConfigBase(BaseModel):
    """Base class for all SongScope configurations.

    Provides common functionality for loading from files with defaults.
    Subclasses must implement default_path() to specify their default location.
    """

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    @classmethod
    def default_path(cls) -> Path:
        """Return the default config file path for this config type."""
        raise NotImplementedError(f"{cls.__name__} must implement default_path()")

    @classmethod
    def load_or_default(cls, path: Path | str | None = None) -> Self:
        """Load config from path or use default path.

        Args:
            path: Path to config file, or None to use default

        Returns:
            Loaded config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValidationError: If config is invalid
        """
        if cls.__name__ == "AppConfig":
            from songscope.core.config.loader import load_app_config

            return load_app_config(path)  # type: ignore[return-value]

        from songscope.core.config.loader import load_config

        if path is None:
            path = cls.default_path()
        raw = load_config(path)
        return cls.model_validate(raw)


class AppConfig(ConfigBase):
    """Application configuration: analysis parameters plus logging."""

    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def default_path(cls) -> Path:
        return Path("songscope.yaml")
