"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def nan_matrix(rng):
    """(20, 4) matrix with roughly 15% NaN and one all-NaN column."""
    data = rng.standard_normal((20, 4))
    data[rng.random(data.shape) < 0.15] = np.nan
    data[:, 3] = np.nan
    return data
