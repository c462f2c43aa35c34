"""Audio analyzer - tempo, key and chords of a decoded signal.

Configuration is provided at initialization; each call analyses one
complete in-memory signal.

Example:
    analyzer = AudioAnalyzer(AnalysisConfig())
    result = analyzer.analyze_sync(SignalView.from_array(samples, 44100))
    print(result.tempo.bpm, result.key.label, result.chords)
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
import logging
import time

import numpy as np

from songscope.core.audio.harmonic.chords import detect_chords
from songscope.core.audio.harmonic.key import detect_key
from songscope.core.audio.models.results import AudioAnalysis
from songscope.core.audio.models.signal import SignalView
from songscope.core.audio.rhythm.tempo import detect_tempo
from songscope.core.audio.validation.validator import validate_signal
from songscope.core.config.models import AnalysisConfig

logger = logging.getLogger(__name__)


class AudioAnalyzer:
    """Runs the tempo, key and chord detectors over a signal.

    The three detectors are independent; ``analyze`` runs them concurrently
    in worker threads. If any detector fails the whole analysis fails with
    that detector's error (tempo first, then key, then chords when several
    fail). No partial results are returned.
    """

    def __init__(self, config: AnalysisConfig | None = None):
        """Initialize analyzer with configuration.

        Args:
            config: Detector parameters (defaults used if None)
        """
        self.config = config or AnalysisConfig()

    async def analyze(self, signal: SignalView) -> AudioAnalysis:
        """Analyze a signal (async).

        Args:
            signal: Decoded input signal

        Returns:
            AudioAnalysis with tempo, key, chord labels and duration

        Raises:
            AnalysisError: Any detector failure (see the detector functions)
        """
        validate_signal(signal, detector="analyzer")
        start_time_ms = time.perf_counter() * 1000

        # CPU-bound detectors, run in thread pool
        results = await asyncio.gather(
            asyncio.to_thread(detect_tempo, signal, self.config.tempo),
            asyncio.to_thread(detect_key, signal, self.config.key),
            asyncio.to_thread(detect_chords, signal, self.config.chords),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        tempo, key, chords = results

        compute_ms = time.perf_counter() * 1000 - start_time_ms
        logger.info(
            f"Audio analysis complete: {compute_ms:.0f}ms "
            f"(tempo={tempo.bpm:.1f}, key={key.label}, chords={len(chords)})"
        )

        return AudioAnalysis(tempo=tempo, key=key, chords=chords, duration=signal.duration)

    def analyze_sync(self, signal: SignalView) -> AudioAnalysis:
        """Analyze a signal synchronously.

        Sync wrapper around async analyze(); must not be called from a
        running event loop.
        """
        return asyncio.run(self.analyze(signal))

    def analyze_array(self, samples: np.ndarray, sample_rate: int) -> AudioAnalysis:
        """Analyze a raw sample buffer (1-D mono or ``(channels, length)``)."""
        return self.analyze_sync(SignalView.from_array(samples, sample_rate))

    async def analyze_many(self, signals: Sequence[SignalView]) -> list[AudioAnalysis]:
        """Analyze several signals concurrently.

        Args:
            signals: Signals to analyze

        Returns:
            One AudioAnalysis per signal, in input order

        Raises:
            AnalysisError: The first failure among the signals
        """
        if not signals:
            return []
        logger.debug(f"Analyzing {len(signals)} signals")
        return list(await asyncio.gather(*(self.analyze(signal) for signal in signals)))
