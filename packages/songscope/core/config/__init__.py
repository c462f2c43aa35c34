"""Configuration management for SongScope."""

from songscope.core.config.loader import (
    configure_logging,
    detect_format,
    load_analysis_config,
    load_app_config,
    load_config,
)
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

__all__ = [
    # Loaders
    "detect_format",
    "load_config",
    "load_app_config",
    "load_analysis_config",
    "configure_logging",
    # Models
    "AppConfig",
    "AnalysisConfig",
    "LoggingConfig",
    "FramingConfig",
    "ChromaConfig",
    "TempoConfig",
    "KeyConfig",
    "ChordConfig",
]
