"""Test suite for songscope.

Test Structure:
- unit/audio/: detectors, chromagram engine, framing, models, errors
- unit/config/: configuration models and loaders
- unit/utils/: logging and math helpers
- conftest.py: Shared fixtures and test configuration
"""
