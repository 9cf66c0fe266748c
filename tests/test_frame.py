"""
Tests for coordinate frame fitting.
"""

import numpy as np
import pytest

from helpers import PLANE_NORMAL
from planar_regrid.errors import DegenerateInputError
from planar_regrid.frame import CoordinateFrame, fit_frame


def assert_orthonormal(frame):
    np.testing.assert_allclose(np.linalg.norm(frame.normal), 1.0, atol=1e-12)
    np.testing.assert_allclose(np.linalg.norm(frame.axis), 1.0, atol=1e-12)
    assert abs(np.dot(frame.normal, frame.axis)) < 1e-12


def test_fit_frame_selects_farthest_points():
    """The axis points to the farthest point and the normal uses the most off-axis one."""
    points = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 2.0, 0.0], [0.5, 0.5, 0.0]])
    frame = fit_frame(points)

    np.testing.assert_array_equal(frame.origin, [0.0, 0.0, 0.0])
    np.testing.assert_allclose(frame.axis, [0.0, 1.0, 0.0])
    np.testing.assert_allclose(frame.normal, [0.0, 0.0, -1.0])
    np.testing.assert_allclose(frame.second_axis, [1.0, 0.0, 0.0])


def test_fit_frame_is_orthonormal(grid_points, random_cloud):
    for points in (grid_points, random_cloud):
        frame = fit_frame(points)
        assert_orthonormal(frame)
        # Normal of the plane the points were generated on, up to orientation
        np.testing.assert_allclose(abs(np.dot(frame.normal, PLANE_NORMAL)), 1.0, atol=1e-12)
        np.testing.assert_array_equal(frame.origin, points[0])


def test_fit_frame_ignores_clustered_leading_points():
    """Nearly coincident leading points do not spoil the plane."""
    points = np.array(
        [
            [0.0, 0.0, 0.0],
            [1e-9, 0.0, 0.0],
            [2e-9, 1e-9, 0.0],
            [10.0, 0.0, 0.0],
            [5.0, 5.0, 0.0],
        ]
    )
    frame = fit_frame(points)
    np.testing.assert_allclose(abs(frame.normal[2]), 1.0, atol=1e-12)


@pytest.mark.parametrize("n_points", [0, 1, 2])
def test_fit_frame_too_few_points(n_points):
    points = np.arange(3 * n_points, dtype=float).reshape(n_points, 3)
    with pytest.raises(DegenerateInputError, match=f"Only {n_points} points"):
        fit_frame(points)


def test_fit_frame_collinear_points():
    points = np.array([[0.0, 0.0, 0.0], [1.0, 1.0, 1.0], [2.0, 2.0, 2.0], [3.0, 3.0, 3.0]])
    with pytest.raises(DegenerateInputError, match="not in a line"):
        fit_frame(points)


def test_fit_frame_coincident_points():
    points = np.ones((4, 3))
    with pytest.raises(DegenerateInputError):
        fit_frame(points)


def test_fit_frame_rejects_bad_shape():
    with pytest.raises(ValueError):
        fit_frame(np.zeros((4, 2)))


def test_frame_validation():
    with pytest.raises(ValueError, match="unit vector"):
        CoordinateFrame(origin=[0, 0, 0], normal=[0, 0, 2], axis=[1, 0, 0])
    with pytest.raises(ValueError, match="orthogonal"):
        CoordinateFrame(origin=[0, 0, 0], normal=[0, 0, 1], axis=[0, np.sqrt(0.5), np.sqrt(0.5)])


def test_frame_is_immutable():
    frame = CoordinateFrame(origin=[0, 0, 0], normal=[0, 0, 1], axis=[1, 0, 0])
    with pytest.raises(ValueError):
        frame.origin[0] = 1.0
    with pytest.raises(AttributeError):
        frame.origin = np.zeros(3)


def test_local_position_round_trip(random_cloud):
    frame = fit_frame(random_cloud)
    local = frame.local_position(random_cloud)

    # Points were generated on a plane, so all lie at zero height
    np.testing.assert_allclose(local[:, 2], 0.0, atol=1e-12)
    np.testing.assert_allclose(local[0], 0.0, atol=1e-12)
    np.testing.assert_allclose(frame.global_position(local), random_cloud, atol=1e-12)


def test_frame_equality():
    frame = CoordinateFrame(origin=[0, 0, 0], normal=[0, 0, 1], axis=[1, 0, 0])
    same = CoordinateFrame(origin=np.zeros(3), normal=np.array([0.0, 0.0, 1.0]), axis=np.array([1.0, 0.0, 0.0]))
    other = CoordinateFrame(origin=[0, 0, 1], normal=[0, 0, 1], axis=[1, 0, 0])
    assert frame == same
    assert frame != other


def test_fit_frame_rejects_nan_points(random_cloud):
    points = random_cloud.copy()
    points[4, 0] = np.nan
    with pytest.raises(ValueError, match="point 4"):
        fit_frame(points)
