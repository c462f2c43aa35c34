"""Shared utilities."""

from songscope.core.utils.json import read_json
from songscope.core.utils.logging import configure_logging, get_logger, log_performance
from songscope.core.utils.math import clamp, unit_vector

__all__ = [
    "read_json",
    "configure_logging",
    "get_logger",
    "log_performance",
    "clamp",
    "unit_vector",
]
