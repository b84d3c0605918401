"""
Pytest configuration and shared fixtures for CSMT tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from fixtures import make_random_keys, make_sample_entries, make_tree  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def sample_entries():
    """The three-entry sample batch."""
    return make_sample_entries()


@pytest.fixture
def empty_tree():
    """A tree with no entries."""
    return make_tree()


@pytest.fixture
def sample_tree(sample_entries):
    """A tree holding the sample batch."""
    return make_tree(sample_entries)


@pytest.fixture
def random_keys():
    """Forty distinct 8-byte keys."""
    return make_random_keys(40)


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
