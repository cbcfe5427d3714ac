"""
Pytest configuration and shared fixtures for nnsearch tests
"""

import pytest
import numpy as np


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded random generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def sample_vectors(rng) -> np.ndarray:
    """Generate sample vectors for testing."""
    return rng.random((200, 8), dtype=np.float32)


@pytest.fixture
def collinear_vectors() -> list:
    """Six points on the line x=0.1, from y=0.2 to y=0.7."""
    return [[0.1, 0.2], [0.1, 0.3], [0.1, 0.4], [0.1, 0.5], [0.1, 0.6], [0.1, 0.7]]


@pytest.fixture
def dimension() -> int:
    """Standard vector dimension for testing."""
    return 8
