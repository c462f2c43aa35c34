"""Shared pytest fixtures for songscope tests."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Empty directory for config files written by a test."""
    path = tmp_path / "config"
    path.mkdir()
    return path
