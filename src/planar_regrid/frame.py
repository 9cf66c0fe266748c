"""
Local coordinate frames fitted through 3D point sets.

A frame is an origin, a unit normal and a unit in-plane axis. Points expressed
in the frame have their first two local coordinates in the fitted plane and the
third along the normal.

This file is part of planar-regrid.

Copyright (c) 2025 planar-regrid Developers.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np

from planar_regrid.constants import COLLINEAR_TOLERANCE, FRAME_TOLERANCE
from planar_regrid.errors import DegenerateInputError

logger = logging.getLogger(__name__)


def as_points(points: Any, name: str = "points") -> np.ndarray:
    """Convert input to a float64 array of finite points with shape (n, 3)."""
    arr = np.asarray(points, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        msg = f"{name} must have shape (n, 3), got {arr.shape}"
        raise ValueError(msg)
    finite = np.isfinite(arr).all(axis=1)
    if not finite.all():
        bad = int(np.argmin(finite))
        msg = f"{name} must be finite, point {bad} is {arr[bad].tolist()}"
        raise ValueError(msg)
    return arr


def _readonly_vector(value: Any, name: str) -> np.ndarray:
    vec = np.array(value, dtype=np.float64)
    if vec.shape != (3,):
        msg = f"Frame {name} must be a 3-vector, got shape {vec.shape}"
        raise ValueError(msg)
    vec.flags.writeable = False
    return vec


@dataclass(frozen=True, eq=False)
class CoordinateFrame:
    """Origin, unit normal and unit in-plane axis of a local planar frame."""

    origin: np.ndarray
    normal: np.ndarray
    axis: np.ndarray

    def __post_init__(self) -> None:
        """Validate that the frame vectors are orthonormal."""
        object.__setattr__(self, "origin", _readonly_vector(self.origin, "origin"))
        object.__setattr__(self, "normal", _readonly_vector(self.normal, "normal"))
        object.__setattr__(self, "axis", _readonly_vector(self.axis, "axis"))

        msg = None
        if abs(np.linalg.norm(self.normal) - 1.0) > FRAME_TOLERANCE:
            msg = f"Frame normal {self.normal} is not a unit vector."
        elif abs(np.linalg.norm(self.axis) - 1.0) > FRAME_TOLERANCE:
            msg = f"Frame axis {self.axis} is not a unit vector."
        elif abs(np.dot(self.normal, self.axis)) > FRAME_TOLERANCE:
            msg = f"Frame axis {self.axis} is not orthogonal to normal {self.normal}."
        if msg is not None:
            raise ValueError(msg)

    @property
    def second_axis(self) -> np.ndarray:
        """In-plane axis completing the right-handed (axis, second_axis, normal) basis."""
        return np.cross(self.normal, self.axis)

    @property
    def rotation(self) -> np.ndarray:
        """Rows are the local x, y and z directions in global coordinates."""
        return np.vstack((self.axis, self.second_axis, self.normal))

    def local_position(self, points: Any) -> np.ndarray:
        """Express global points in local (x, y, z) coordinates.

        Args:
            points: Array of 3D points (n, 3)

        Returns:
            Local coordinates (n, 3); z is the signed distance along the normal.
        """
        pts = as_points(points)
        return (pts - self.origin) @ self.rotation.T

    def global_position(self, local_points: Any) -> np.ndarray:
        """Inverse of :meth:`local_position`."""
        local = as_points(local_points, "local_points")
        return local @ self.rotation + self.origin

    def to_dict(self) -> dict[str, list[float]]:
        return {
            "origin": self.origin.tolist(),
            "normal": self.normal.tolist(),
            "axis": self.axis.tolist(),
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CoordinateFrame):
            return NotImplemented
        return (
            np.array_equal(self.origin, other.origin)
            and np.array_equal(self.normal, other.normal)
            and np.array_equal(self.axis, other.axis)
        )


def fit_frame(points: Any, collinear_tolerance: float = COLLINEAR_TOLERANCE) -> CoordinateFrame:
    """Fit a well-conditioned planar frame through a point set.

    The origin is the first point. The in-plane axis points to the point
    farthest from it, and the normal is built with the point farthest from
    that line, so clustered or partly collinear clouds still give a stable
    plane.

    Args:
        points: Array of 3D points (n, 3), n >= 3
        collinear_tolerance: Off-axis distance, relative to the axis length,
            below which the remaining points count as collinear

    Returns:
        The fitted frame

    Raises:
        DegenerateInputError: Fewer than three points, or all points collinear
    """
    pts = as_points(points)
    n_points = len(pts)
    if n_points < 3:
        msg = f"Only {n_points} points provided. Need at least three non-collinear points to be able to interpolate."
        raise DegenerateInputError(msg)

    p0 = pts[0]
    offsets = pts[1:] - p0

    # Furthest point from p0 defines the in-plane axis
    distances = np.linalg.norm(offsets, axis=1)
    i1 = int(np.argmax(distances))
    max_dist = distances[i1]
    if max_dist <= 0.0:
        msg = f"All {n_points} points coincide with {p0.tolist()}; cannot define a plane."
        raise DegenerateInputError(msg)
    e1 = offsets[i1] / max_dist
    p1 = pts[i1 + 1]

    # Furthest point from the line p0-p1
    off_axis = offsets - np.outer(offsets @ e1, e1)
    off_axis_dist = np.linalg.norm(off_axis, axis=1)
    off_axis_dist[i1] = -np.inf
    i2 = int(np.argmax(off_axis_dist))
    if off_axis_dist[i2] <= 0.0 or off_axis_dist[i2] <= collinear_tolerance * max_dist:
        msg = (
            "Cannot find points that make a valid normal. "
            f"Have so far points {p0.tolist()} and {p1.tolist()}. "
            "Need at least three points which are not in a line."
        )
        raise DegenerateInputError(msg)
    p2 = pts[i2 + 1]

    normal = np.cross(e1, p2 - p0)
    normal /= np.linalg.norm(normal)

    logger.debug(
        "Used points %s %s %s to define coordinate system with normal %s",
        p0.tolist(),
        p1.tolist(),
        p2.tolist(),
        normal.tolist(),
    )

    return CoordinateFrame(origin=p0, normal=normal, axis=e1)
