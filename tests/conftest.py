"""
Pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Reproducible random number generator."""
    return np.random.default_rng(seed=42)


@pytest.fixture
def two_bodies():
    """Two radius-10 bodies 100 units apart on a horizontal line."""
    from fdlsim.core import Body
    return [
        Body(position=(100.0, 300.0), radius=10.0),
        Body(position=(200.0, 300.0), radius=10.0),
    ]


@pytest.fixture
def small_config():
    """A small seeded simulation configuration."""
    from fdlsim.core import SimulationConfig
    return SimulationConfig(n_bodies=12, width=200.0, height=150.0, radius=5.0, seed=7)
