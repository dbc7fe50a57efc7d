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
def linear_samples(rng):
    """Noisy samples from y = 1.5 + 2x."""
    n = 200
    x = rng.uniform(0.0, 10.0, n)
    y = 1.5 + 2.0 * x + rng.standard_normal(n) * 0.5
    return x, y


@pytest.fixture
def additive_rows(rng):
    """
    Rows whose target is the exact sum of per-predictor contributions.

    cpu contributes 3 per unit, io 2.5 per unit; mem is sometimes absent
    (zero) and contributes 2 per unit when present.
    """
    rows = []
    for _ in range(300):
        cpu = float(rng.uniform(1.0, 5.0))
        io = float(rng.uniform(0.0, 20.0))
        mem = float(rng.uniform(1.0, 4.0)) if rng.random() < 0.5 else 0.0
        rows.append({
            "cpu": cpu,
            "io": io,
            "mem": mem,
            "user_us": 3.0 * cpu + 2.5 * io + 2.0 * mem,
        })
    return rows
