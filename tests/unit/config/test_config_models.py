"""Tests for configuration models."""

from __future__ import annotations

import logging

from pydantic import ValidationError
import pytest

from songscope.core.audio.models import ChordQuality
from songscope.core.audio.templates import MAJOR_KEY_PROFILE
from songscope.core.config.models import (
    AnalysisConfig,
    AppConfig,
    ChordConfig,
    ChromaConfig,
    FramingConfig,
    KeyConfig,
    LoggingConfig,
    TempoConfig,
)


class TestChromaConfig:
    """Tests for ChromaConfig."""

    def test_defaults(self) -> None:
        config = ChromaConfig()

        assert config.min_frequency == 20.0
        assert config.max_frequency == 8000.0
        assert config.reference_frequency == 440.0
        assert config.harmonic_weights == (1.0, 0.5, 0.25, 0.125, 0.0625)
        assert config.smoothing_radius == 2

    def test_inverted_band_rejected(self) -> None:
        """min_frequency must be below max_frequency."""
        with pytest.raises(ValueError, match="min_frequency"):
            ChromaConfig(min_frequency=5000.0, max_frequency=1000.0)

    def test_zero_fundamental_rejected(self) -> None:
        """The fundamental weight must be positive."""
        with pytest.raises(ValueError):
            ChromaConfig(harmonic_weights=(0.0, 1.0))

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            ChromaConfig(bins_per_octave=24)  # type: ignore[call-arg]


class TestFramingConfig:
    """Tests for FramingConfig and detector defaults."""

    def test_n_fft_defaults_to_frame_size(self) -> None:
        assert FramingConfig(frame_size=4096, hop_size=2048).n_fft == 4096
        assert FramingConfig(frame_size=4096, hop_size=2048, fft_size=8192).n_fft == 8192

    def test_hop_larger_than_frame_rejected(self) -> None:
        with pytest.raises(ValueError, match="hop_size"):
            FramingConfig(frame_size=1024, hop_size=2048)

    def test_fft_smaller_than_frame_rejected(self) -> None:
        with pytest.raises(ValueError, match="fft_size"):
            FramingConfig(frame_size=2048, hop_size=1024, fft_size=1024)

    def test_tiny_hop_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        """Very dense framing is allowed but logged."""
        with caplog.at_level(logging.WARNING):
            FramingConfig(frame_size=4096, hop_size=64)

        assert "very small" in caplog.text

    def test_detector_framing_defaults(self) -> None:
        """Each detector has its own frame and hop size."""
        assert (TempoConfig().frame_size, TempoConfig().hop_size) == (1024, 512)
        assert (KeyConfig().frame_size, KeyConfig().hop_size) == (16384, 8192)
        assert (ChordConfig().frame_size, ChordConfig().hop_size) == (8192, 4096)

    def test_frozen(self) -> None:
        config = TempoConfig()

        with pytest.raises(ValidationError):
            config.min_bpm = 10.0  # type: ignore[misc]


class TestDetectorConfigs:
    """Tests for detector-specific validation."""

    def test_bpm_range_must_be_ordered(self) -> None:
        with pytest.raises(ValueError, match="min_bpm"):
            TempoConfig(min_bpm=180.0, max_bpm=120.0)

    def test_tempo_framing_still_validated(self) -> None:
        """Subclass validation keeps the framing checks."""
        with pytest.raises(ValueError, match="hop_size"):
            TempoConfig(frame_size=512, hop_size=1024)

    def test_key_defaults(self) -> None:
        config = KeyConfig()

        assert config.major_bias == 1.1
        assert config.profiles.major == MAJOR_KEY_PROFILE
        assert config.chroma == ChromaConfig()

    def test_chord_defaults(self) -> None:
        config = ChordConfig()

        assert config.correlation_threshold == 0.5
        assert config.min_run_length == 4
        assert config.max_workers == 1
        assert set(config.templates.templates) == set(ChordQuality)

    def test_chord_workers_bounded(self) -> None:
        with pytest.raises(ValidationError):
            ChordConfig(max_workers=0)


class TestAnalysisConfig:
    """Tests for AnalysisConfig and AppConfig."""

    def test_from_dict(self) -> None:
        """Nested detector sections validate from plain dicts."""
        config = AnalysisConfig.model_validate(
            {"tempo": {"min_bpm": 70}, "chords": {"min_run_length": 2}}
        )

        assert config.tempo.min_bpm == 70.0
        assert config.chords.min_run_length == 2
        assert config.key == KeyConfig()

    def test_unknown_section_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AnalysisConfig.model_validate({"beats": {}})

    def test_app_config_ignores_unknown_keys(self) -> None:
        """App-level config is forward compatible."""
        config = AppConfig.model_validate({"future_option": True})

        assert config.analysis == AnalysisConfig()

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")
