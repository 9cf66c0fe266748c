"""Shared fixtures for planar-regrid tests."""

import numpy as np
import pytest

from helpers import on_plane


@pytest.fixture()
def grid_uv():
    """Regular 6 x 5 grid of planar coordinates, full of co-circular quadruples."""
    u, v = np.meshgrid(np.linspace(0.0, 5.0, 6), np.linspace(0.0, 4.0, 5))
    return np.column_stack([u.ravel(), v.ravel()])


@pytest.fixture()
def grid_points(grid_uv):
    """Regular grid on the tilted plane."""
    return on_plane(grid_uv)


@pytest.fixture()
def interior_points():
    """Destination points strictly inside the grid."""
    rng = np.random.default_rng(42)
    uv = np.column_stack([rng.uniform(0.2, 4.8, 40), rng.uniform(0.2, 3.8, 40)])
    return on_plane(uv)


@pytest.fixture()
def exterior_points():
    """Destination points outside the grid."""
    uv = np.array([[-1.0, 2.0], [7.0, 2.0], [2.5, -3.0], [2.5, 9.0], [-2.0, -2.0], [8.0, 6.0]])
    return on_plane(uv)


@pytest.fixture()
def random_cloud():
    """Irregular point cloud on the tilted plane."""
    rng = np.random.default_rng(7)
    return on_plane(rng.uniform(0.0, 10.0, size=(60, 2)))
