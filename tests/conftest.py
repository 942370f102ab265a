import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(12345)


@pytest.fixture
def random_walks(rng):
    """A batch of 2-D random walks of varying length."""
    lengths = [2, 3, 5, 17, 40, 64, 101, 7, 2, 250, 33]
    return [np.cumsum(rng.normal(size=(n, 2)), axis=0) for n in lengths]
