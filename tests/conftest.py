"""Shared fixtures for the phicorr test suite."""

import sys
from pathlib import Path

import pytest

# Add repo root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from phicorr.config import MinerConfig


@pytest.fixture
def small_transactions():
    # Items 1 and 2 occur in exactly the same three of four baskets
    return [[1, 2, 3], [1, 2], [1, 2, 4], [3]]


@pytest.fixture
def loose_config():
    return MinerConfig(theta=0.3, tau=0.05, k=1, minsup=1)
