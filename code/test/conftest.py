import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from terrainnav.cfg import NavigationConfig
from terrainnav.core import NavigationManager
from terrainnav.utils import heightmap_to_vertices


@pytest.fixture
def make_manager():
    """
    Factory building a manager over an in-memory world with a grid generated
    from a (rows x cols) height array. An optional boolean mask of the same
    shape marks traversable cells.
    """
    def _make(heights, traversable=None, **overrides):
        config = NavigationConfig.from_params(None, **overrides)
        manager = NavigationManager.from_config(config)
        heights = np.atleast_2d(np.asarray(heights, dtype=float))
        rows, cols = heights.shape
        mask = None if traversable is None else list(np.asarray(traversable, dtype=bool).ravel())
        manager.generate_nodes(heightmap_to_vertices(heights), cols, rows, mask)
        return manager
    return _make


@pytest.fixture
def flat_manager(make_manager):
    return make_manager(np.zeros((5, 5)))
