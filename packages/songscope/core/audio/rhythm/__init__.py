"""Rhythm analysis module."""

from songscope.core.audio.rhythm.tempo import detect_tempo, estimate_bpm, frame_rms, onset_times

__all__ = ["detect_tempo", "estimate_bpm", "frame_rms", "onset_times"]
