import numpy as np
import pytest

from noise_engine import NoiseFn


class CountingSource(NoiseFn):
    """Returns the sum of the coordinates and counts how often it ran."""

    def __init__(self, dims=frozenset({2, 3, 4})):
        self.dims = frozenset(dims)
        self.calls = 0

    def _get(self, point):
        self.calls += 1
        return sum(point)


@pytest.fixture
def counting_source():
    return CountingSource()


@pytest.fixture
def points_2d():
    rng = np.random.default_rng(1234)
    return [tuple(p) for p in rng.uniform(-100.0, 100.0, size=(100, 2)).tolist()]


@pytest.fixture
def points_3d():
    rng = np.random.default_rng(5678)
    return [tuple(p) for p in rng.uniform(-100.0, 100.0, size=(100, 3)).tolist()]
