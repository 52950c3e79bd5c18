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
def weights_sample(rng):
    """30 numeric observations with mean exactly 209 and sd exactly 15."""
    x = rng.normal(0.0, 1.0, 30)
    z = (x - x.mean()) / x.std(ddof=1)
    return 209.0 + 15.0 * z


@pytest.fixture
def outcome_labels():
    """62 categorical outcomes, 3 of them 'died'."""
    return np.array(["died"] * 3 + ["survived"] * 59, dtype=object)
