"""
Shared fixtures: integrands with known integrals.
"""
import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest


class CountingIntegrand:
    """Wraps an integrand and records every abscissa it is called with."""

    def __init__(self, func):
        self.func = func
        self.calls = []

    def __call__(self, x):
        self.calls.append(x)
        return self.func(x)


@pytest.fixture
def counting():
    return CountingIntegrand


@pytest.fixture
def inv_sqrt():
    # Integrable singularity at 0: integral over (0, 1] is 2
    return lambda x: 1.0 / np.sqrt(x)
