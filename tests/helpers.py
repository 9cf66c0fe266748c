"""Geometry helpers shared by the tests."""

import numpy as np

# Orthonormal basis of a tilted plane through PLANE_ORIGIN
PLANE_ORIGIN = np.array([1.0, 2.0, 3.0])
PLANE_U = np.array([1.0, 1.0, 0.0]) / np.sqrt(2.0)
PLANE_V = np.array([-1.0, 1.0, 1.0]) / np.sqrt(3.0)
PLANE_NORMAL = np.cross(PLANE_U, PLANE_V)


def on_plane(uv):
    """Map planar (u, v) coordinates onto the tilted test plane."""
    uv = np.asarray(uv, dtype=np.float64)
    return PLANE_ORIGIN + uv[:, :1] * PLANE_U + uv[:, 1:2] * PLANE_V


def linear_field(points):
    """A linear function of position, reproduced exactly by planar interpolation."""
    return 2.0 * points[:, 0] - points[:, 1] + 3.0 * points[:, 2] + 1.0
