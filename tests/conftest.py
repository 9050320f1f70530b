"""
Pytest configuration and shared fixtures for basekit tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_vectors = importlib.import_module("fixtures.vectors")

make_message = _vectors.make_message

from basekit.config.runtime import set_default_config


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def reset_default_config(monkeypatch):
    """Start every test from env-derived defaults with no BASEKIT_* overrides."""
    for var in (
        "BASEKIT_DEFAULT_HASH",
        "BASEKIT_LOG_LEVEL",
        "BASEKIT_LOG_FILE",
    ):
        monkeypatch.delenv(var, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def fox():
    """The quick brown fox message used by the HMAC examples."""
    return _vectors.FOX


@pytest.fixture
def message_lengths():
    """Lengths that straddle the 55/56/64-byte padding boundaries."""
    return [0, 1, 3, 54, 55, 56, 57, 63, 64, 65, 119, 120, 127, 128, 129, 200]


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
