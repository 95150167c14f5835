"""
Pytest configuration and shared fixtures for hashtree tests.

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

_trees = importlib.import_module("fixtures.trees")

SCENARIO_ELEMENTS = _trees.SCENARIO_ELEMENTS
make_elements = _trees.make_elements
make_tree = _trees.make_tree
manual_levels = _trees.manual_levels

from hashtree.config import set_default_config
from hashtree.crypto.hashing import CONCAT_BINARY, Hasher
from hashtree.merkle import MerkleTree


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def scenario_tree():
    """Tree over ["Crypto", "Merkle", "Rust", "Tree"]."""
    return MerkleTree(list(SCENARIO_ELEMENTS))


@pytest.fixture
def binary_hasher():
    """Hasher using the unambiguous fixed-width concatenation."""
    return Hasher(concat_encoding=CONCAT_BINARY)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep HASHTREE_* variables and the cached default config out of tests."""
    for name in (
        "HASHTREE_HASH_ALGORITHM",
        "HASHTREE_CONCAT_ENCODING",
        "HASHTREE_LOG_LEVEL",
        "HASHTREE_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


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
