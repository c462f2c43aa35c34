"""Tests for math utility functions."""

from __future__ import annotations

import numpy as np
import pytest

from songscope.core.utils.math import clamp, unit_vector


def test_clamp_within_range():
    """Test clamping values within range."""
    assert clamp(5, 0, 10) == 5
    assert clamp(0, 0, 10) == 0
    assert clamp(10, 0, 10) == 10


def test_clamp_outside_range():
    """Test clamping values outside the range."""
    assert clamp(-5, 0, 10) == 0
    assert clamp(15, 0, 10) == 10


def test_clamp_confidence_bounds():
    """Confidence-style float clamping."""
    assert clamp(0.97, 0.5, 0.95) == 0.95
    assert clamp(0.31, 0.5, 0.95) == 0.5
    assert clamp(0.7, 0.5, 0.95) == 0.7


def test_unit_vector_norm():
    """Result has unit L2 norm and the same direction."""
    result = unit_vector(np.array([3.0, 4.0]))

    np.testing.assert_allclose(result, [0.6, 0.8])
    assert np.linalg.norm(result) == pytest.approx(1.0)


def test_unit_vector_zero():
    """Zero vector is returned unchanged, not NaN."""
    arr = np.zeros(12)

    result = unit_vector(arr)

    np.testing.assert_array_equal(result, arr)
    assert result is not arr


def test_unit_vector_accepts_sequences():
    """Plain lists are converted to float arrays."""
    assert unit_vector([0, 2]).dtype == np.float64
